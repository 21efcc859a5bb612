from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from .ports import Clock
from .timekeeping import from_timestamp, to_timestamp
from .types import GameDateTime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_real_time(text: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11.
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class EventLogEntry:
    description: str
    game_time: GameDateTime
    real_time: datetime


class EventLog:
    """Interesting events recorded during a chronicle, in the order they were logged.

    Insertion order is not game-time order: players may log an event that
    happened earlier in the fiction than the last one recorded.
    """

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or utc_now
        self._events: list[EventLogEntry] = []

    @property
    def events(self) -> tuple[EventLogEntry, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def add_event(self, description: str, game_time: GameDateTime) -> EventLogEntry:
        entry = EventLogEntry(description=description, game_time=game_time, real_time=self._clock())
        self._events.append(entry)
        return entry

    def rewind_to(self, game_time: GameDateTime) -> int:
        """Drop every event later than ``game_time``. Returns the number removed."""
        target = to_timestamp(game_time)
        kept = [entry for entry in self._events if to_timestamp(entry.game_time) <= target]
        removed = len(self._events) - len(kept)
        self._events = kept
        return removed

    def to_list(self) -> list[dict[str, Any]]:
        return [
            {
                "description": entry.description,
                "gameTime": to_timestamp(entry.game_time),
                "realTime": entry.real_time.isoformat(),
            }
            for entry in self._events
        ]

    @classmethod
    def from_list(cls, state: Iterable[Mapping[str, Any]], clock: Clock | None = None) -> "EventLog":
        log = cls(clock=clock)
        log._events = [
            EventLogEntry(
                description=item["description"],
                game_time=from_timestamp(item["gameTime"]),
                real_time=parse_real_time(item["realTime"]),
            )
            for item in state
        ]
        return log
