"""
Weekday-relative date resolution.

Resolves rules such as "second Monday of June", "last Monday of May" and
"the Monday on or after 27 May". Everything is integer day arithmetic on the
civil calendar; no natural-language date parsing and no time instants.

Weekdays follow Python's convention: 0=Monday ... 6=Sunday.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Union

from ..exceptions import InvalidArgumentError, InvalidOccurrenceError
from ..models.enums import ShiftDirection, Weekday


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidArgumentError(
            message=f"Month must be between 1 and 12, got {month}",
            details={"month": month},
        )


def _check_weekday(weekday: int) -> None:
    if not 0 <= weekday <= 6:
        raise InvalidArgumentError(
            message=f"Weekday must be between 0 (Monday) and 6 (Sunday), got {weekday}",
            details={"weekday": weekday},
        )


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month."""
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def nth_weekday_of_month(year: int, month: int, weekday: Union[Weekday, int], n: int) -> date:
    """
    Get the nth occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)
        n: Which occurrence (1=first, 2=second, etc.)

    Returns:
        The date of the nth weekday

    Raises:
        InvalidOccurrenceError: If n <= 0 or the month has fewer than n
            occurrences of the weekday
    """
    _check_month(month)
    _check_weekday(weekday)
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise InvalidOccurrenceError(
            message=f"Occurrence index must be a positive integer, got {n!r}",
            details={"n": repr(n)},
        )

    first_weekday = date(year, month, 1).weekday()
    day = 1 + (weekday - first_weekday + 7) % 7 + 7 * (n - 1)

    last_day = days_in_month(year, month)
    if day > last_day:
        raise InvalidOccurrenceError(
            message=(
                f"{calendar.month_name[month]} {year} has no occurrence #{n} "
                f"of {calendar.day_name[weekday]}"
            ),
            details={"year": year, "month": month, "weekday": int(weekday), "n": n},
        )
    return date(year, month, day)


def last_weekday_of_month(year: int, month: int, weekday: Union[Weekday, int]) -> date:
    """
    Get the last occurrence of a weekday in a month.

    Walks backward from the last day of the month.
    """
    _check_month(month)
    _check_weekday(weekday)
    last_day = date(year, month, days_in_month(year, month))
    days_since_weekday = (last_day.weekday() - weekday + 7) % 7
    return last_day - timedelta(days=days_since_weekday)


def shift_to_weekday(
    d: date,
    weekday: Union[Weekday, int],
    direction: ShiftDirection = ShiftDirection.FORWARD,
) -> date:
    """
    Move a date onto a weekday.

    If the date already falls on the weekday it is returned unchanged.
    Otherwise it moves forward to the next, or backward to the previous,
    occurrence of the weekday.

    Example:
        27 May 2018 was a Sunday; the Monday on or after it is 28 May 2018.
    """
    _check_weekday(weekday)
    if direction == ShiftDirection.FORWARD:
        delta = (weekday - d.weekday() + 7) % 7
        return d + timedelta(days=delta)
    delta = (d.weekday() - weekday + 7) % 7
    return d - timedelta(days=delta)
