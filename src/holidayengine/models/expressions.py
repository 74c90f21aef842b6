"""
holidayengine Date Expressions

Declarative descriptions of how a holiday's civil date is derived from the
year. Each expression is a small frozen dataclass with ``resolve(year)``.

Key components:
- FixedDate: same month/day every year (Australia Day, 26 January)
- NthWeekday: "second Monday of June"
- LastWeekday: "last Monday of May"
- EasterOffset: days relative to Easter Sunday (Easter Saturday = -1)
- ShiftToWeekday: "Monday on or after 27 May"
- YearSwitch: one expression before a cutoff year, another from it

Expressions compose: ShiftToWeekday and YearSwitch wrap other expressions.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Union

from ..calendars.easter import easter_sunday
from ..calendars.weekdays import (
    last_weekday_of_month,
    nth_weekday_of_month,
    shift_to_weekday,
)
from ..exceptions import InternalConsistencyError, InvalidArgumentError
from .enums import ShiftDirection, Weekday


# =============================================================================
# Leaf Expressions
# =============================================================================

@dataclass(frozen=True)
class FixedDate:
    """A holiday on the same month and day every year."""
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidArgumentError(
                message=f"Month must be between 1 and 12, got {self.month}",
                details={"month": self.month, "day": self.day},
            )
        # Non-leap bound: the date must exist in every year
        if not 1 <= self.day <= calendar.monthrange(2001, self.month)[1]:
            raise InvalidArgumentError(
                message=f"Day {self.day} does not exist in month {self.month} every year",
                details={"month": self.month, "day": self.day},
            )

    def resolve(self, year: int) -> date:
        try:
            return date(year, self.month, self.day)
        except ValueError as e:
            raise InvalidArgumentError(
                message=f"{year}-{self.month:02d}-{self.day:02d} is not a valid date",
                details={"year": year, "month": self.month, "day": self.day},
            ) from e

    def describe(self) -> str:
        return f"{self.day} {calendar.month_name[self.month]}"


@dataclass(frozen=True)
class NthWeekday:
    """The nth occurrence of a weekday in a month."""
    month: int
    weekday: Weekday
    n: int

    def resolve(self, year: int) -> date:
        return nth_weekday_of_month(year, self.month, self.weekday, self.n)

    def describe(self) -> str:
        return f"#{self.n} {Weekday(self.weekday).name.title()} of {calendar.month_name[self.month]}"


@dataclass(frozen=True)
class LastWeekday:
    """The last occurrence of a weekday in a month."""
    month: int
    weekday: Weekday

    def resolve(self, year: int) -> date:
        return last_weekday_of_month(year, self.month, self.weekday)

    def describe(self) -> str:
        return f"last {Weekday(self.weekday).name.title()} of {calendar.month_name[self.month]}"


@dataclass(frozen=True)
class EasterOffset:
    """A fixed number of days before (negative) or after Easter Sunday."""
    days: int = 0

    def resolve(self, year: int) -> date:
        easter = easter_sunday(year)
        try:
            return easter + timedelta(days=self.days)
        except OverflowError as e:
            raise InternalConsistencyError(
                message=f"Unable to offset Easter {easter.isoformat()} by {self.days} days",
                details={"year": year, "days": self.days},
            ) from e

    def describe(self) -> str:
        if self.days == 0:
            return "Easter Sunday"
        sign = "+" if self.days > 0 else "-"
        return f"Easter {sign} {abs(self.days)} days"


# =============================================================================
# Composite Expressions
# =============================================================================

@dataclass(frozen=True)
class ShiftToWeekday:
    """Move the base date onto a weekday (on or after / on or before)."""
    base: "DateExpression"
    weekday: Weekday
    direction: ShiftDirection = ShiftDirection.FORWARD

    def __post_init__(self) -> None:
        for fixed in _fixed_leaves(self.base):
            if _may_leave_year(fixed, self.direction):
                raise InvalidArgumentError(
                    message=f"Shifting {fixed.describe()} {self.direction.value} can leave the year",
                    details={
                        "month": fixed.month,
                        "day": fixed.day,
                        "direction": self.direction.value,
                    },
                )

    def resolve(self, year: int) -> date:
        candidate = self.base.resolve(year)
        try:
            return shift_to_weekday(candidate, self.weekday, self.direction)
        except OverflowError as e:
            raise InternalConsistencyError(
                message=f"Unable to shift {candidate.isoformat()} to {Weekday(self.weekday).name}",
                details={"year": year, "direction": self.direction.value},
            ) from e

    def describe(self) -> str:
        relation = "on or after" if self.direction == ShiftDirection.FORWARD else "on or before"
        return f"{Weekday(self.weekday).name.title()} {relation} {self.base.describe()}"


@dataclass(frozen=True)
class YearSwitch:
    """Use ``before`` for years earlier than ``year`` and ``after`` from it on."""
    year: int
    before: "DateExpression"
    after: "DateExpression"

    def resolve(self, year: int) -> date:
        expression = self.before if year < self.year else self.after
        return expression.resolve(year)

    def describe(self) -> str:
        return f"{self.before.describe()} until {self.year - 1}, then {self.after.describe()}"


DateExpression = Union[FixedDate, NthWeekday, LastWeekday, EasterOffset, ShiftToWeekday, YearSwitch]


def _fixed_leaves(expression: Any) -> list[FixedDate]:
    if isinstance(expression, FixedDate):
        return [expression]
    if isinstance(expression, ShiftToWeekday):
        return _fixed_leaves(expression.base)
    if isinstance(expression, YearSwitch):
        return _fixed_leaves(expression.before) + _fixed_leaves(expression.after)
    return []


def _may_leave_year(fixed: FixedDate, direction: ShiftDirection) -> bool:
    # A shift moves at most six days
    if direction == ShiftDirection.FORWARD:
        return fixed.month == 12 and fixed.day > 25
    return fixed.month == 1 and fixed.day < 7


def expression_to_dict(expression: Any) -> dict[str, Any]:
    """Serialize an expression tree for hashing and display."""
    if isinstance(expression, FixedDate):
        return {"kind": "fixed", "month": expression.month, "day": expression.day}
    if isinstance(expression, NthWeekday):
        return {
            "kind": "nth_weekday",
            "month": expression.month,
            "weekday": Weekday(expression.weekday).name.lower(),
            "n": expression.n,
        }
    if isinstance(expression, LastWeekday):
        return {
            "kind": "last_weekday",
            "month": expression.month,
            "weekday": Weekday(expression.weekday).name.lower(),
        }
    if isinstance(expression, EasterOffset):
        return {"kind": "easter", "offset": expression.days}
    if isinstance(expression, ShiftToWeekday):
        return {
            "kind": "shift",
            "base": expression_to_dict(expression.base),
            "weekday": Weekday(expression.weekday).name.lower(),
            "direction": expression.direction.value,
        }
    if isinstance(expression, YearSwitch):
        return {
            "kind": "switch",
            "year": expression.year,
            "before": expression_to_dict(expression.before),
            "after": expression_to_dict(expression.after),
        }
    raise TypeError(f"Unknown date expression: {type(expression).__name__}")
