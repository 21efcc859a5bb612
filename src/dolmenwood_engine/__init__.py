from .core import (
    Awareness,
    Campaign,
    Delve,
    DiceEvaluator,
    Encounter,
    EncounterRules,
    EngineError,
    EventLog,
    GameDateTime,
    SequenceGenerator,
    SurpriseChance,
    extract_die_values,
    roll_check,
)
from .engine import DolmenwoodEngine, EngineConfig
from .persistence import MemoryRepositoryFactory, find_or_create, patch_record
from .persistence.sqlalchemy import SQLAlchemyRepositoryFactory
from .services import PlayerCharacterService, PlayerService

__all__ = [
    "DolmenwoodEngine",
    "EngineConfig",
    "Awareness",
    "Campaign",
    "Delve",
    "DiceEvaluator",
    "Encounter",
    "EncounterRules",
    "EngineError",
    "EventLog",
    "GameDateTime",
    "SequenceGenerator",
    "SurpriseChance",
    "extract_die_values",
    "roll_check",
    "MemoryRepositoryFactory",
    "SQLAlchemyRepositoryFactory",
    "find_or_create",
    "patch_record",
    "PlayerService",
    "PlayerCharacterService",
]
