from __future__ import annotations

from bisect import bisect_right
from typing import Literal

from .calendar import (
    DEFAULT_CURRENT_YEAR,
    MONTH_START_DAYS,
    MONTHS,
    MONTHS_IN_YEAR,
    ROUNDS_PER_DAY,
    ROUNDS_PER_HOUR,
    ROUNDS_PER_TURN,
    ROUNDS_PER_YEAR,
    days_before_month,
    month_length,
)
from .types import GameDateTime

DateTimeUnit = Literal["round", "turn", "hour", "day", "month", "year"]

# First moment from which all others are tracked. Timestamp 0.
CALENDAR_EPOCH = GameDateTime(year=1, month=1, day=1, hour=0, turn=1, round=1)

DEFAULT_DATE_TIME = GameDateTime(year=DEFAULT_CURRENT_YEAR, month=1, day=1, hour=12, turn=1)


def to_timestamp(dt: GameDateTime) -> int:
    """Return the number of rounds elapsed since ``CALENDAR_EPOCH``."""
    days = days_before_month(dt.month) + (dt.day - 1)
    return (
        (dt.year - CALENDAR_EPOCH.year) * ROUNDS_PER_YEAR
        + days * ROUNDS_PER_DAY
        + dt.hour * ROUNDS_PER_HOUR
        + (dt.turn - 1) * ROUNDS_PER_TURN
        + (dt.round - 1)
    )


def from_timestamp(timestamp: int) -> GameDateTime:
    years, rounds = divmod(int(timestamp), ROUNDS_PER_YEAR)
    day_of_year, rounds = divmod(rounds, ROUNDS_PER_DAY)
    hour, rounds = divmod(rounds, ROUNDS_PER_HOUR)
    turn, rounds = divmod(rounds, ROUNDS_PER_TURN)

    month = bisect_right(MONTH_START_DAYS, day_of_year)
    day = day_of_year - MONTH_START_DAYS[month - 1] + 1
    return GameDateTime(
        year=CALENDAR_EPOCH.year + years,
        month=month,
        day=day,
        hour=hour,
        turn=turn + 1,
        round=rounds + 1,
    )


def add_rounds(dt: GameDateTime, delta: int) -> GameDateTime:
    """Shift ``dt`` by ``delta`` rounds. Moments before the epoch have negative timestamps."""
    return from_timestamp(to_timestamp(dt) + delta)


def add_turns(dt: GameDateTime, delta: int) -> GameDateTime:
    return add_rounds(dt, delta * ROUNDS_PER_TURN)


def add_hours(dt: GameDateTime, delta: int) -> GameDateTime:
    return add_rounds(dt, delta * ROUNDS_PER_HOUR)


def add_days(dt: GameDateTime, delta: int) -> GameDateTime:
    return add_rounds(dt, delta * ROUNDS_PER_DAY)


def add_years(dt: GameDateTime, delta: int) -> GameDateTime:
    return add_rounds(dt, delta * ROUNDS_PER_YEAR)


def add_months(dt: GameDateTime, delta: int) -> GameDateTime:
    """Shift ``dt`` by the lengths of the ``delta`` months it steps across.

    Moving forward adds the length of the current month, then the next, and
    so on; moving backward subtracts the lengths of the preceding months.
    """
    days = 0
    month = dt.month
    if delta > 0:
        for _ in range(delta):
            days += MONTHS[month - 1].days
            month = month % MONTHS_IN_YEAR + 1
    elif delta < 0:
        for _ in range(-delta):
            month = (month - 2) % MONTHS_IN_YEAR + 1
            days -= MONTHS[month - 1].days
    return add_days(dt, days)


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def difference(start: GameDateTime, end: GameDateTime, unit: DateTimeUnit) -> int:
    """Signed number of whole ``unit`` between ``start`` and ``end``.

    Positive when ``end`` is later. Rounds, turns, hours and days come from
    the timestamp delta truncated toward zero. Months and years use calendar
    arithmetic on the date fields only, ignoring time of day; a month is
    complete once the same day-of-month is reached, clamped to the length
    of the target month.
    """
    delta = to_timestamp(end) - to_timestamp(start)

    if unit == "round":
        return delta
    if unit == "turn":
        return _trunc_div(delta, ROUNDS_PER_TURN)
    if unit == "hour":
        return _trunc_div(delta, ROUNDS_PER_HOUR)
    if unit == "day":
        return _trunc_div(delta, ROUNDS_PER_DAY)

    direction = 1 if delta >= 0 else -1
    earlier, later = (start, end) if direction > 0 else (end, start)

    if unit == "month":
        months = (later.year - earlier.year) * MONTHS_IN_YEAR + (later.month - earlier.month)
        if later.day < min(earlier.day, month_length(later.month)):
            months -= 1
        return months * direction
    if unit == "year":
        years = later.year - earlier.year
        if (later.month, later.day) < (earlier.month, earlier.day):
            years -= 1
        return years * direction

    raise ValueError(f"unknown date-time unit {unit!r}")
