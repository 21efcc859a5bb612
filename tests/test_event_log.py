from __future__ import annotations

from datetime import datetime, timezone

from dolmenwood_engine.core.event_log import EventLog
from dolmenwood_engine.core.timekeeping import add_turns, from_timestamp, to_timestamp
from dolmenwood_engine.core.types import GameDateTime

BASE = GameDateTime(year=1089, month=3, day=4, hour=10, turn=1)


def at(turns: int) -> GameDateTime:
    return add_turns(BASE, turns)


def test_events_keep_insertion_order(clock):
    log = EventLog(clock=clock)
    log.add_event("Entered the barrow", at(5))
    log.add_event("Remembered an earlier omen", at(1))
    assert [e.description for e in log.events] == ["Entered the barrow", "Remembered an earlier omen"]
    assert all(e.real_time == clock.now for e in log.events)
    assert len(log) == 2


def test_rewind_checks_every_entry_not_just_the_tail(clock):
    log = EventLog(clock=clock)
    for turns in (5, 10, 3, 8):
        log.add_event(f"turn {turns}", at(turns))

    removed = log.rewind_to(at(6))

    assert removed == 2
    assert [e.description for e in log.events] == ["turn 5", "turn 3"]


def test_rewind_keeps_events_at_the_target_time(clock):
    log = EventLog(clock=clock)
    log.add_event("exactly now", at(6))
    assert log.rewind_to(at(6)) == 0
    assert len(log) == 1


def test_events_tuple_is_a_copy(clock):
    log = EventLog(clock=clock)
    log.add_event("one", at(0))
    events = log.events
    log.add_event("two", at(1))
    assert len(events) == 1


def test_default_clock_is_timezone_aware():
    entry = EventLog().add_event("noted", BASE)
    assert entry.real_time.tzinfo is not None


def test_serialized_log_restores_exactly():
    log = EventLog(clock=lambda: datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc))
    log.add_event("Lit a torch", at(2))
    log.add_event("Heard scratching", at(4))

    state = log.to_list()
    assert state[0] == {
        "description": "Lit a torch",
        "gameTime": to_timestamp(at(2)),
        "realTime": "2024-05-06T07:08:09+00:00",
    }

    restored = EventLog.from_list(state)
    assert restored.events == log.events
    assert from_timestamp(state[1]["gameTime"]) == at(4)


def test_log_loads_utc_times_with_z_suffix():
    restored = EventLog.from_list(
        [
            {"description": "Lit a torch", "gameTime": to_timestamp(BASE), "realTime": "2024-05-06T07:08:09.000Z"},
            {"description": "Rested", "gameTime": to_timestamp(BASE), "realTime": "2024-05-06T09:08:09+02:00"},
        ]
    )
    first, second = restored.events
    assert first.real_time == datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    assert second.real_time == first.real_time
