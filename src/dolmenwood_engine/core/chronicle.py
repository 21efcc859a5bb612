from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping

from .event_log import EventLog, EventLogEntry
from .ports import Clock
from .sequence import SequenceGenerator
from .timekeeping import DEFAULT_DATE_TIME, add_turns, difference, from_timestamp, to_timestamp
from .types import GameDateTime


class Campaign:
    """An ongoing series of sessions sharing one in-fiction clock and event log."""

    def __init__(
        self,
        id: str | None = None,
        current_date_time: GameDateTime = DEFAULT_DATE_TIME,
        *,
        clock: Clock | None = None,
    ):
        self.id = id or str(uuid.uuid4())
        self.current_date_time = current_date_time
        self.event_log = EventLog(clock=clock)

    def advance_turn(self, delta: int = 1) -> GameDateTime:
        self.current_date_time = add_turns(self.current_date_time, delta)
        return self.current_date_time

    def record(self, description: str, game_time: GameDateTime | None = None) -> EventLogEntry:
        return self.event_log.add_event(description, game_time or self.current_date_time)

    def rewind_to(self, game_time: GameDateTime) -> int:
        """Move the clock back to ``game_time`` and forget everything after it."""
        self.current_date_time = game_time
        return self.event_log.rewind_to(game_time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "currentDateTime": self.current_date_time.to_dict(),
            "events": self.event_log.to_list(),
        }

    @classmethod
    def from_dict(cls, state: Mapping[str, Any], *, clock: Clock | None = None) -> "Campaign":
        campaign = cls(
            id=state["id"],
            current_date_time=GameDateTime.from_dict(state["currentDateTime"]),
            clock=clock,
        )
        campaign.event_log = EventLog.from_list(state.get("events") or [], clock=clock)
        return campaign


@dataclass(frozen=True)
class LightSource:
    iid: int
    type: str
    carried_by: str
    # In turns.
    maximum_duration: int
    lit_at: GameDateTime


@dataclass(frozen=True)
class ActiveLightSource:
    iid: int
    type: str
    carried_by: str
    maximum_duration: int
    turns_remaining: int


class Delve:
    """Exploration of a single site such as a ruin, barrow or cave, tracked turn by turn."""

    LIGHT_SOURCE_SEQUENCE = "light-source"

    def __init__(
        self,
        id: str | None = None,
        site_name: str = "Unknown Dungeon",
        start_time: GameDateTime = DEFAULT_DATE_TIME,
        turns: int = 1,
    ):
        self.id = id or str(uuid.uuid4())
        self.site_name = site_name
        self.start_time = start_time
        self.turns = max(1, turns)
        self._iids = SequenceGenerator()
        self._light_sources: list[LightSource] = []

    @property
    def title(self) -> str:
        return self.site_name

    @property
    def end_time(self) -> GameDateTime:
        """Current time in an active delve, or the time a finished one ended."""
        return add_turns(self.start_time, self.turns - 1)

    def advance_turn(self, delta: int = 1) -> None:
        self.turns = max(1, self.turns + delta)

    def add_light_source(self, type: str, carried_by: str, maximum_duration: int) -> LightSource:
        light = LightSource(
            iid=self._iids.next(self.LIGHT_SOURCE_SEQUENCE),
            type=type,
            carried_by=carried_by,
            maximum_duration=maximum_duration,
            lit_at=self.end_time,
        )
        self._light_sources.append(light)
        return light

    @property
    def light_sources(self) -> tuple[LightSource, ...]:
        return tuple(self._light_sources)

    @property
    def active_light_sources(self) -> list[ActiveLightSource]:
        now = self.end_time
        active = []
        for light in self._light_sources:
            remaining = light.maximum_duration - difference(light.lit_at, now, "turn")
            if 0 < remaining <= light.maximum_duration:
                active.append(
                    ActiveLightSource(
                        iid=light.iid,
                        type=light.type,
                        carried_by=light.carried_by,
                        maximum_duration=light.maximum_duration,
                        turns_remaining=remaining,
                    )
                )
        return active

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "iids": self._iids.to_dict(),
            "lightSources": [
                {
                    "iid": light.iid,
                    "type": light.type,
                    "carriedBy": light.carried_by,
                    "maximumDuration": light.maximum_duration,
                    "litAt": to_timestamp(light.lit_at),
                }
                for light in self._light_sources
            ],
            "siteName": self.site_name,
            "startTime": to_timestamp(self.start_time),
            "turns": self.turns,
        }

    @classmethod
    def from_dict(cls, state: Mapping[str, Any]) -> "Delve":
        delve = cls(
            id=state["id"],
            site_name=state["siteName"],
            start_time=from_timestamp(state["startTime"]),
            turns=state["turns"],
        )
        delve._iids = SequenceGenerator.from_dict(state.get("iids") or {})
        delve._light_sources = [
            LightSource(
                iid=item["iid"],
                type=item["type"],
                carried_by=item["carriedBy"],
                maximum_duration=item["maximumDuration"],
                lit_at=from_timestamp(item["litAt"]),
            )
            for item in state.get("lightSources") or []
        ]
        return delve
