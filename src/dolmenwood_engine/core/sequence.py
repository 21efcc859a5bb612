from __future__ import annotations

from typing import Mapping


class SequenceGenerator:
    """Per-key incrementing ids (iids) for the entities an aggregate owns."""

    def __init__(self, state: Mapping[str, int] | None = None):
        self._next: dict[str, int] = {}
        if state:
            self.load(state)

    def next(self, key: str) -> int:
        current = self._next.get(key, 1)
        self._next[key] = current + 1
        return current

    def peek(self, key: str) -> int:
        return self._next.get(key, 1)

    def load(self, state: Mapping[str, int]) -> None:
        self._next = {str(key): int(value) for key, value in state.items()}

    def to_dict(self) -> dict[str, int]:
        return dict(self._next)

    @classmethod
    def from_dict(cls, state: Mapping[str, int]) -> "SequenceGenerator":
        return cls(state)
