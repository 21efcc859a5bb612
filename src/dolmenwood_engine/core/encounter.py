from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Union

from .checks import resolve_check_result, roll_check
from .errors import InvalidEncounterPhaseError
from .ports import DicePort
from .timekeeping import DEFAULT_DATE_TIME, from_timestamp, to_timestamp
from .types import GameDateTime

EncounterSide = Literal["npcs", "players"]
Environment = Literal["dungeon", "outdoors"]
EncounterPhase = Literal["new", "awareness-determined", "surprise-and-distance-set", "initiative-rolled"]
InitiativeValue = Union[int, Literal["automatic", "surprised"]]

PHASES: tuple[EncounterPhase, ...] = (
    "new",
    "awareness-determined",
    "surprise-and-distance-set",
    "initiative-rolled",
)


@dataclass(frozen=True)
class EncounterRules:
    default_surprise_chance: int = 2
    dungeon_encounter_distance: str = "2d6*10"
    dungeon_encounter_distance_surprised: str = "1d4*10"
    outdoor_encounter_distance: str = "2d6*30"
    outdoor_encounter_distance_surprised: str = "1d4*30"

    def distance_notation(self, environment: Environment, both_surprised: bool) -> str:
        if environment == "outdoors":
            return self.outdoor_encounter_distance_surprised if both_surprised else self.outdoor_encounter_distance
        return self.dungeon_encounter_distance_surprised if both_surprised else self.dungeon_encounter_distance


@dataclass(frozen=True)
class Awareness:
    npcs: bool
    players: bool


@dataclass(frozen=True)
class SurpriseChance:
    npcs: int
    players: int


@dataclass(frozen=True)
class SideSurpriseOutcome:
    chance: int
    roll: int
    surprised: bool


@dataclass(frozen=True)
class Surprise:
    # None when the side could not be surprised (it was already aware).
    npcs: Optional[SideSurpriseOutcome]
    players: Optional[SideSurpriseOutcome]


@dataclass(frozen=True)
class Initiative:
    npcs: InitiativeValue
    players: InitiativeValue


@dataclass(frozen=True)
class DistanceRange:
    min: int
    max: int


@dataclass(frozen=True)
class EncounterSnapshot:
    phase: EncounterPhase
    environment: Environment
    timestamp: GameDateTime
    awareness: Optional[Awareness] = None
    surprise: Optional[Surprise] = None
    distance: Optional[int] = None
    distance_range: Optional[DistanceRange] = None
    initiative: Optional[Initiative] = None


class Encounter:
    """Resolves the start of an encounter: awareness, then surprise and distance, then initiative.

    Each phase fills in part of the snapshot, and a snapshot may be taken at
    any point. Phases may be driven out of order: a side with no surprise
    result is treated as not surprised.
    """

    def __init__(
        self,
        dice: DicePort,
        environment: Environment = "dungeon",
        time: GameDateTime | None = None,
        *,
        rules: EncounterRules | None = None,
        logger: logging.Logger | None = None,
    ):
        self._dice = dice
        self._environment: Environment = environment
        self._timestamp = time or DEFAULT_DATE_TIME
        self._rules = rules or EncounterRules()
        self._logger = logger or logging.getLogger(__name__)

        self._awareness: Awareness | None = None
        self._surprise: Surprise | None = None
        self._distance: int | None = None
        self._distance_range: DistanceRange | None = None
        self._initiative: Initiative | None = None

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def timestamp(self) -> GameDateTime:
        return self._timestamp

    @property
    def rules(self) -> EncounterRules:
        return self._rules

    @property
    def phase(self) -> EncounterPhase:
        if self._initiative is not None:
            return "initiative-rolled"
        if self._surprise is not None:
            return "surprise-and-distance-set"
        if self._awareness is not None:
            return "awareness-determined"
        return "new"

    def _is_surprised(self, side: EncounterSide) -> bool:
        if self._surprise is None:
            return False
        outcome = getattr(self._surprise, side)
        return bool(outcome and outcome.surprised)

    @property
    def only_surprised_side(self) -> EncounterSide | None:
        npcs = self._is_surprised("npcs")
        players = self._is_surprised("players")
        if npcs and not players:
            return "npcs"
        if players and not npcs:
            return "players"
        return None

    @property
    def initiative_winner(self) -> Literal["npcs", "players", "tie"] | None:
        initiative = self._initiative
        if initiative is None:
            return None
        if initiative.npcs == "automatic":
            return "npcs"
        if initiative.players == "automatic":
            return "players"
        if initiative.npcs > initiative.players:  # type: ignore[operator]
            return "npcs"
        if initiative.players > initiative.npcs:  # type: ignore[operator]
            return "players"
        return "tie"

    def create_snapshot(self) -> EncounterSnapshot:
        return EncounterSnapshot(
            phase=self.phase,
            environment=self._environment,
            timestamp=self._timestamp,
            awareness=self._awareness,
            surprise=self._surprise,
            distance=self._distance,
            distance_range=self._distance_range,
            initiative=self._initiative,
        )

    def set_awareness(self, awareness: Awareness) -> None:
        """Record which sides noticed the other. Clears any later phases.

        When both sides are aware nobody can be surprised, so the surprise
        and distance phase is resolved straight away.
        """
        self.reset_to_phase("new")
        self._awareness = awareness
        self._logger.debug("Encounter awareness set: npcs=%s players=%s", awareness.npcs, awareness.players)

        if awareness.npcs and awareness.players:
            self.roll_surprise(0)

    def roll_surprise(self, player_roll: int, surprise_chance: SurpriseChance | None = None) -> None:
        """Resolve surprise for each unaware side, then roll encounter distance.

        ``player_roll`` is the d6 the players rolled at the table; the NPC
        roll is drawn here. Each side is checked against its own chance.
        When exactly one side ends up surprised, initiative is decided too.
        """
        default = self._rules.default_surprise_chance
        chance = surprise_chance or SurpriseChance(npcs=default, players=default)
        awareness = self._awareness or Awareness(npcs=False, players=False)

        self._initiative = None

        npcs: SideSurpriseOutcome | None = None
        if not awareness.npcs:
            result = roll_check(self._dice, chance.npcs)
            npcs = SideSurpriseOutcome(chance=chance.npcs, roll=result.roll, surprised=result.meets_target)

        players: SideSurpriseOutcome | None = None
        if not awareness.players:
            result = resolve_check_result(chance.players, player_roll)
            players = SideSurpriseOutcome(chance=chance.players, roll=result.roll, surprised=result.meets_target)

        self._surprise = Surprise(npcs=npcs, players=players)
        self._roll_distance()

        if self.only_surprised_side is not None:
            # The roll value is ignored when one side is surprised.
            self.roll_initiative(0)

    def roll_initiative(self, player_initiative: int, npc_initiative_modifier: int = 0) -> None:
        only_surprised = self.only_surprised_side
        if only_surprised == "npcs":
            self._initiative = Initiative(npcs="surprised", players="automatic")
        elif only_surprised == "players":
            self._initiative = Initiative(npcs="automatic", players="surprised")
        else:
            npc_roll = self._dice.roll("d6").total + npc_initiative_modifier
            self._initiative = Initiative(npcs=npc_roll, players=player_initiative)
        self._logger.debug("Encounter initiative: %s", self._initiative)

    def reset_to_phase(self, phase: EncounterPhase) -> None:
        """Discard everything decided after ``phase``."""
        if phase not in PHASES:
            raise InvalidEncounterPhaseError(f"unknown encounter phase {phase!r}")
        if phase in ("new", "awareness-determined", "surprise-and-distance-set"):
            self._initiative = None
        if phase in ("new", "awareness-determined"):
            self._surprise = None
            self._distance = None
            self._distance_range = None
        if phase == "new":
            self._awareness = None

    def _roll_distance(self) -> None:
        both_surprised = self._is_surprised("npcs") and self._is_surprised("players")
        result = self._dice.roll(self._rules.distance_notation(self._environment, both_surprised))
        self._distance = result.total
        low = result.min_total if result.min_total is not None else result.total
        high = result.max_total if result.max_total is not None else result.total
        self._distance_range = DistanceRange(min=low, max=high)

    def to_dict(self) -> dict[str, Any]:
        return {
            "environment": self._environment,
            "timestamp": to_timestamp(self._timestamp),
            "awareness": _awareness_to_dict(self._awareness),
            "surprise": _surprise_to_dict(self._surprise),
            "distance": self._distance,
            "distanceRange": (
                None
                if self._distance_range is None
                else {"min": self._distance_range.min, "max": self._distance_range.max}
            ),
            "initiative": (
                None
                if self._initiative is None
                else {"npcs": self._initiative.npcs, "players": self._initiative.players}
            ),
        }

    @classmethod
    def from_dict(
        cls,
        state: Mapping[str, Any],
        dice: DicePort,
        *,
        rules: EncounterRules | None = None,
        logger: logging.Logger | None = None,
    ) -> "Encounter":
        encounter = cls(
            dice,
            environment=state.get("environment") or "dungeon",
            time=from_timestamp(state["timestamp"]),
            rules=rules,
            logger=logger,
        )
        awareness = state.get("awareness")
        if awareness is not None:
            encounter._awareness = Awareness(npcs=bool(awareness["npcs"]), players=bool(awareness["players"]))
        surprise = state.get("surprise")
        if surprise is not None:
            encounter._surprise = Surprise(
                npcs=_outcome_from_dict(surprise.get("npcs")),
                players=_outcome_from_dict(surprise.get("players")),
            )
        encounter._distance = state.get("distance")
        distance_range = state.get("distanceRange")
        if distance_range is not None:
            encounter._distance_range = DistanceRange(min=distance_range["min"], max=distance_range["max"])
        initiative = state.get("initiative")
        if initiative is not None:
            encounter._initiative = Initiative(npcs=initiative["npcs"], players=initiative["players"])
        return encounter


def _awareness_to_dict(awareness: Awareness | None) -> dict[str, bool] | None:
    if awareness is None:
        return None
    return {"npcs": awareness.npcs, "players": awareness.players}


def _outcome_to_dict(outcome: SideSurpriseOutcome | None) -> dict[str, Any] | None:
    if outcome is None:
        return None
    return {"chance": outcome.chance, "roll": outcome.roll, "surprised": outcome.surprised}


def _outcome_from_dict(data: Mapping[str, Any] | None) -> SideSurpriseOutcome | None:
    if data is None:
        return None
    return SideSurpriseOutcome(chance=data["chance"], roll=data["roll"], surprised=bool(data["surprised"]))


def _surprise_to_dict(surprise: Surprise | None) -> dict[str, Any] | None:
    if surprise is None:
        return None
    return {"npcs": _outcome_to_dict(surprise.npcs), "players": _outcome_to_dict(surprise.players)}
