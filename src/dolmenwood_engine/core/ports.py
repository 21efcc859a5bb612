from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

from .dice import RollResult


class DicePort(Protocol):
    def roll(self, notation: str) -> RollResult:
        ...


Clock = Callable[[], datetime]
IdFactory = Callable[[], str]
