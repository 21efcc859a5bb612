from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypedDict

from .calendar import HOURS_PER_DAY, ROUNDS_PER_TURN, TURNS_PER_HOUR, month_length
from .errors import InvalidGameDateTimeError

ABILITIES = ("strength", "intelligence", "wisdom", "dexterity", "constitution", "charisma")


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidGameDateTimeError(f"{name} must be an integer, got {value!r}")
    return value


def _require_range(name: str, value: Any, low: int, high: int) -> None:
    _require_int(name, value)
    if not low <= value <= high:
        raise InvalidGameDateTimeError(f"{name} must be {low}-{high}, got {value}")


@dataclass(frozen=True, order=True)
class GameDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        _require_int("year", self.year)
        days = month_length(self.month)
        _require_range("day", self.day, 1, days)


@dataclass(frozen=True, order=True)
class GameDateTime:
    """A moment in the Dolmenwood calendar.

    Field order matches significance, so the generated ordering is fiction
    order. ``round`` is only meaningful during encounters and reads as 1
    when absent.
    """

    year: int
    month: int
    day: int
    hour: int
    turn: int
    round: int = 1

    def __post_init__(self) -> None:
        GameDate(self.year, self.month, self.day)
        _require_range("hour", self.hour, 0, HOURS_PER_DAY - 1)
        _require_range("turn", self.turn, 1, TURNS_PER_HOUR)
        _require_range("round", self.round, 1, ROUNDS_PER_TURN)

    @property
    def date(self) -> GameDate:
        return GameDate(self.year, self.month, self.day)

    def to_dict(self) -> dict[str, int]:
        return {
            "day": self.day,
            "month": self.month,
            "year": self.year,
            "hour": self.hour,
            "turn": self.turn,
            "round": self.round,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameDateTime":
        round_ = data.get("round")
        try:
            return cls(
                year=data["year"],
                month=data["month"],
                day=data["day"],
                hour=data["hour"],
                turn=data["turn"],
                round=1 if round_ is None else round_,
            )
        except KeyError as exc:
            raise InvalidGameDateTimeError(f"missing date-time field {exc.args[0]!r}") from exc


@dataclass(frozen=True)
class CheckResult:
    roll: int
    meets_target: bool


class CharacterStats(TypedDict):
    strength: int
    intelligence: int
    wisdom: int
    dexterity: int
    constitution: int
    charisma: int


class StatRoll(TypedDict):
    strength: list[int]
    intelligence: list[int]
    wisdom: list[int]
    dexterity: list[int]
    constitution: list[int]
    charisma: list[int]


class PlayerCharacterStatRoll(TypedDict):
    id: str
    rolledAt: str
    rolls: StatRoll


class Player(TypedDict, total=False):
    id: str
    activeCharacterId: str
    displayName: str


class PlayerCharacter(TypedDict, total=False):
    id: str
    playerId: str
    stats: CharacterStats
    # Weak reference to a PlayerCharacterStatRoll document.
    statRollId: str


@dataclass
class PlayerAndCharacter:
    player: dict[str, Any]
    character: dict[str, Any]


@dataclass
class RollStatsResult:
    results: dict[str, Any]
    is_new: bool
