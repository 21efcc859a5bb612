from __future__ import annotations


class EngineError(Exception):
    pass


class CalendarConfigError(EngineError):
    pass


class InvalidGameDateTimeError(EngineError, ValueError):
    pass


class DiceNotationError(EngineError, ValueError):
    def __init__(self, notation: str, reason: str):
        super().__init__(f"invalid dice notation {notation!r}: {reason}")
        self.notation = notation
        self.reason = reason


class InvalidCheckTargetError(EngineError, ValueError):
    pass


class InvalidEncounterPhaseError(EngineError, ValueError):
    pass
