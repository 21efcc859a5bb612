from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .core.dice import DiceEvaluator
from .core.encounter import Encounter, EncounterRules, Environment
from .core.ports import Clock, DicePort, IdFactory
from .core.types import GameDateTime
from .persistence.interfaces import RepositoryFactory
from .persistence.memory import MemoryRepositoryFactory
from .persistence.sqlalchemy import SQLAlchemyRepositoryFactory
from .services import PlayerCharacterService, PlayerService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    database_url: str | None = None
    dice_seed: int | None = None
    encounter_rules: EncounterRules = field(default_factory=EncounterRules)
    create_schema: bool = True


class DolmenwoodEngine:
    """Wires repositories, dice and the player services together."""

    def __init__(
        self,
        repositories: RepositoryFactory,
        dice: DicePort,
        *,
        encounter_rules: EncounterRules | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ):
        self.repositories = repositories
        self.dice = dice
        self.encounter_rules = encounter_rules or EncounterRules()
        self.players = PlayerService(
            repositories.players,
            repositories.player_characters,
            id_factory=id_factory,
        )
        self.characters = PlayerCharacterService(
            repositories.player_characters,
            repositories.player_character_stat_rolls,
            dice,
            clock=clock,
            id_factory=id_factory,
        )

    @classmethod
    def from_config(cls, config: EngineConfig | None = None, **kwargs: Any) -> "DolmenwoodEngine":
        config = config or EngineConfig()
        repositories: RepositoryFactory
        if config.database_url:
            repositories = SQLAlchemyRepositoryFactory.from_url(config.database_url, create=config.create_schema)
        else:
            repositories = MemoryRepositoryFactory()
        logger.debug(
            "Building engine with %s storage", "sqlalchemy" if config.database_url else "in-memory"
        )
        return cls(
            repositories,
            DiceEvaluator(seed=config.dice_seed),
            encounter_rules=config.encounter_rules,
            **kwargs,
        )

    def new_encounter(self, environment: Environment = "dungeon", time: GameDateTime | None = None) -> Encounter:
        return Encounter(self.dice, environment, time, rules=self.encounter_rules)

    def load_encounter(self, state: Mapping[str, Any]) -> Encounter:
        return Encounter.from_dict(state, self.dice, rules=self.encounter_rules)
