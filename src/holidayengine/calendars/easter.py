"""
Easter Calculation

Computes Easter Sunday with the Anonymous Gregorian algorithm
(Meeus/Jones/Butcher): the Sunday following the first ecclesiastical full
moon on or after the March equinox.

The computation is exact integer arithmetic over the year; no floating point
and no date library is involved until the final date is built.
"""
from __future__ import annotations

from datetime import date, datetime

from ..exceptions import InternalConsistencyError, InvalidYearError
from .timezones import at_local_midnight

# Gregorian calendar adoption
MIN_YEAR = 1583
# Largest year representable by datetime.date
MAX_YEAR = 9999

EARLIEST_EASTER = (3, 22)
LATEST_EASTER = (4, 25)


def validate_year(year: int) -> int:
    """
    Check that a year is within the supported Gregorian range.

    Raises:
        InvalidYearError: If year is not an int in [MIN_YEAR, MAX_YEAR]
    """
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYearError(
            message=f"Year must be an integer, got {type(year).__name__}",
            details={"year": repr(year)},
        )
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidYearError(
            message=f"Year {year} is outside the supported range {MIN_YEAR}-{MAX_YEAR}",
            details={"year": year, "min_year": MIN_YEAR, "max_year": MAX_YEAR},
        )
    return year


def easter_sunday(year: int) -> date:
    """
    Calculate the civil date of Easter Sunday.

    Args:
        year: Gregorian year (MIN_YEAR..MAX_YEAR)

    Returns:
        Date of Easter Sunday

    Raises:
        InvalidYearError: If year is out of range
        InternalConsistencyError: If the algorithm leaves 22 March - 25 April
    """
    validate_year(year)

    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1

    if not EARLIEST_EASTER <= (month, day) <= LATEST_EASTER:
        raise InternalConsistencyError(
            message=f"Computus produced an impossible Easter date {month}/{day}",
            details={"year": year, "month": month, "day": day},
        )
    return date(year, month, day)


def calculate_easter(year: int, timezone: str) -> datetime:
    """Calculate Easter Sunday at local midnight in the given timezone."""
    return at_local_midnight(easter_sunday(year), timezone)
