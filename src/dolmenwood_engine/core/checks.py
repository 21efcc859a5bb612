from __future__ import annotations

from .errors import InvalidCheckTargetError
from .ports import DicePort
from .types import CheckResult


def _validate_target(target: int) -> None:
    if isinstance(target, bool) or not isinstance(target, int) or not 1 <= target <= 6:
        raise InvalidCheckTargetError(f"X-in-6 target must be 1-6, got {target!r}")


def resolve_check_result(target: int, roll: int) -> CheckResult:
    """Judge an externally supplied roll against an X-in-6 target.

    Gives the same outcome ``roll_check`` would for the same effective roll,
    so results called out at the table resolve consistently.
    """
    _validate_target(target)
    return CheckResult(roll=roll, meets_target=roll <= target)


def roll_check(dice: DicePort, target: int, modifier: int = 0) -> CheckResult:
    _validate_target(target)
    roll = dice.roll("d6").total + modifier
    return resolve_check_result(target, roll)
