from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .errors import CalendarConfigError, InvalidGameDateTimeError

ROUNDS_PER_TURN = 60
TURNS_PER_HOUR = 6
HOURS_PER_DAY = 24
DAYS_IN_YEAR = 352
MONTHS_IN_YEAR = 12

ROUNDS_PER_HOUR = ROUNDS_PER_TURN * TURNS_PER_HOUR
ROUNDS_PER_DAY = ROUNDS_PER_HOUR * HOURS_PER_DAY
ROUNDS_PER_YEAR = ROUNDS_PER_DAY * DAYS_IN_YEAR

# DCB p14
DEFAULT_CURRENT_YEAR = 1089


@dataclass(frozen=True)
class Month:
    name: str
    days: int


MONTHS: tuple[Month, ...] = (
    Month("Grimvold", 30),
    Month("Lymewald", 28),
    Month("Haggryme", 30),
    Month("Symswald", 29),
    Month("Harchment", 29),
    Month("Iggwyld", 30),
    Month("Chysting", 31),
    Month("Lillipythe", 29),
    Month("Haelhold", 28),
    Month("Reedwryme", 30),
    Month("Obthryme", 28),
    Month("Braghold", 30),
)


def validate_calendar(months: Sequence[Month], days_in_year: int = DAYS_IN_YEAR) -> None:
    """Raise ``CalendarConfigError`` unless ``months`` is a well-formed year."""
    if len(months) != MONTHS_IN_YEAR:
        raise CalendarConfigError(f"calendar must have {MONTHS_IN_YEAR} months, got {len(months)}")
    for index, month in enumerate(months, start=1):
        if month.days <= 0:
            raise CalendarConfigError(f"month {index} ({month.name}) has non-positive length {month.days}")
    total = sum(month.days for month in months)
    if total != days_in_year:
        raise CalendarConfigError(f"month lengths sum to {total}, expected {days_in_year}")


def _cumulative_offsets(months: Sequence[Month]) -> tuple[int, ...]:
    offsets = [0]
    for month in months:
        offsets.append(offsets[-1] + month.days)
    return tuple(offsets)


validate_calendar(MONTHS)

# MONTH_START_DAYS[m - 1] is the number of days in the year before month m.
MONTH_START_DAYS = _cumulative_offsets(MONTHS)


def _month(month: int) -> Month:
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= MONTHS_IN_YEAR:
        raise InvalidGameDateTimeError(f"month must be 1-{MONTHS_IN_YEAR}, got {month!r}")
    return MONTHS[month - 1]


def month_length(month: int) -> int:
    return _month(month).days


def month_name(month: int) -> str:
    return _month(month).name


def days_before_month(month: int) -> int:
    _month(month)
    return MONTH_START_DAYS[month - 1]
