from __future__ import annotations

from dolmenwood_engine.core.sequence import SequenceGenerator


def test_counters_are_per_key():
    seq = SequenceGenerator()
    assert [seq.next("light-source") for _ in range(3)] == [1, 2, 3]
    assert seq.next("retainer") == 1
    assert seq.peek("light-source") == 4
    assert seq.peek("unseen") == 1


def test_restore_continues_without_drift():
    seq = SequenceGenerator()
    seq.next("a")
    seq.next("a")
    seq.next("b")

    state = seq.to_dict()
    assert state == {"a": 3, "b": 2}

    restored = SequenceGenerator.from_dict(state)
    assert restored.next("a") == 3
    assert restored.next("b") == 2
    assert seq.next("a") == 3


def test_load_replaces_state():
    seq = SequenceGenerator({"a": 9})
    seq.load({"b": 4})
    assert seq.next("a") == 1
    assert seq.next("b") == 4
