from .calendar import DAYS_IN_YEAR, MONTHS, Month, month_length, month_name, validate_calendar
from .checks import resolve_check_result, roll_check
from .chronicle import ActiveLightSource, Campaign, Delve, LightSource
from .dice import (
    DiceEvaluator,
    NumberLeaf,
    ResultGroup,
    RollResult,
    RollSequence,
    TextLeaf,
    coerce_roll_node,
    extract_die_values,
)
from .encounter import (
    Awareness,
    DistanceRange,
    Encounter,
    EncounterRules,
    EncounterSnapshot,
    Initiative,
    SideSurpriseOutcome,
    Surprise,
    SurpriseChance,
)
from .errors import (
    CalendarConfigError,
    DiceNotationError,
    EngineError,
    InvalidCheckTargetError,
    InvalidEncounterPhaseError,
    InvalidGameDateTimeError,
)
from .event_log import EventLog, EventLogEntry
from .ports import DicePort
from .sequence import SequenceGenerator
from .timekeeping import (
    CALENDAR_EPOCH,
    DEFAULT_DATE_TIME,
    add_days,
    add_hours,
    add_months,
    add_rounds,
    add_turns,
    add_years,
    difference,
    from_timestamp,
    to_timestamp,
)
from .types import CheckResult, GameDate, GameDateTime, PlayerAndCharacter, RollStatsResult

__all__ = [
    "DAYS_IN_YEAR",
    "MONTHS",
    "Month",
    "month_length",
    "month_name",
    "validate_calendar",
    "resolve_check_result",
    "roll_check",
    "ActiveLightSource",
    "Campaign",
    "Delve",
    "LightSource",
    "DiceEvaluator",
    "NumberLeaf",
    "ResultGroup",
    "RollResult",
    "RollSequence",
    "TextLeaf",
    "coerce_roll_node",
    "extract_die_values",
    "Awareness",
    "DistanceRange",
    "Encounter",
    "EncounterRules",
    "EncounterSnapshot",
    "Initiative",
    "SideSurpriseOutcome",
    "Surprise",
    "SurpriseChance",
    "CalendarConfigError",
    "DiceNotationError",
    "EngineError",
    "InvalidCheckTargetError",
    "InvalidEncounterPhaseError",
    "InvalidGameDateTimeError",
    "EventLog",
    "EventLogEntry",
    "DicePort",
    "SequenceGenerator",
    "CALENDAR_EPOCH",
    "DEFAULT_DATE_TIME",
    "add_days",
    "add_hours",
    "add_months",
    "add_rounds",
    "add_turns",
    "add_years",
    "difference",
    "from_timestamp",
    "to_timestamp",
    "CheckResult",
    "GameDate",
    "GameDateTime",
    "PlayerAndCharacter",
    "RollStatsResult",
]
