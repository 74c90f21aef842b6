"""
holidayengine Business Day Calendars

HolidayCalendar is the structural interface business-day code depends on;
ProviderCalendar implements it over the holidays the engine resolves for one
jurisdiction.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from ..models.enums import HolidayType

if TYPE_CHECKING:
    from ..service import HolidayEngine

_ONE_DAY = timedelta(days=1)


@runtime_checkable
class HolidayCalendar(Protocol):
    """
    Protocol for holiday calendars.

    Anything that can say whether a civil date closes business can be used
    for business day arithmetic.
    """

    def is_holiday(self, d: date) -> bool:
        ...

    def is_business_day(self, d: date) -> bool:
        ...

    def get_holidays_in_range(self, start: date, end: date) -> list[date]:
        """
        Closed dates within a range.

        Args:
            start: Start date (inclusive)
            end: End date (inclusive)
        """
        ...


@dataclass
class ProviderCalendar:
    """
    Business day calendar for one jurisdiction.

    Only OFFICIAL holidays (substitute days included) close business. Each
    year is resolved through the engine on first use, so ranges spanning
    New Year work and repeated lookups hit the engine cache.

    Usage:
        calendar = engine.calendar("AU-ACT")
        calendar.add_business_days(date(2024, 12, 23), 3)  # date(2024, 12, 30)
    """

    code: str = ""
    engine: Optional["HolidayEngine"] = field(default=None, repr=False, compare=False)
    locale: Optional[str] = None
    # 0=Monday, 6=Sunday
    weekend_days: frozenset[int] = field(default_factory=lambda: frozenset({5, 6}))

    def __post_init__(self) -> None:
        if self.engine is None:
            from ..service import HolidayEngine

            self.engine = HolidayEngine()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def closures(self, year: int) -> frozenset[date]:
        """Dates in a year on which an official holiday falls."""
        provider = self.engine.resolve(self.code, year, locale=self.locale)
        return frozenset(
            h.civil_date for h in provider.holidays if h.type == HolidayType.OFFICIAL
        )

    def is_holiday(self, d: date) -> bool:
        return d in self.closures(d.year)

    def is_weekend(self, d: date) -> bool:
        return d.weekday() in self.weekend_days

    def is_business_day(self, d: date) -> bool:
        if self.is_weekend(d):
            return False
        return not self.is_holiday(d)

    def get_holidays_in_range(self, start: date, end: date) -> list[date]:
        if start > end:
            return []
        closed: set[date] = set()
        for year in range(start.year, end.year + 1):
            closed.update(self.closures(year))
        return sorted(d for d in closed if start <= d <= end)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add_business_days(self, start: date, days: int) -> date:
        """
        Move a number of business days from a date.

        Args:
            start: Starting date (not counted)
            days: Business days to move; negative moves backwards

        Returns:
            The date reached, which is always a business day unless days == 0
        """
        if days == 0:
            return start
        step = _ONE_DAY if days > 0 else -_ONE_DAY
        remaining = abs(days)
        current = start
        while remaining:
            current += step
            if self.is_business_day(current):
                remaining -= 1
        return current

    def subtract_business_days(self, start: date, days: int) -> date:
        return self.add_business_days(start, -days)

    def business_days_between(self, start: date, end: date) -> int:
        """Business days after ``start`` up to and including ``end``."""
        if start >= end:
            return 0
        closed = set(self.get_holidays_in_range(start + _ONE_DAY, end))
        count = 0
        current = start + _ONE_DAY
        while current <= end:
            if not self.is_weekend(current) and current not in closed:
                count += 1
            current += _ONE_DAY
        return count

    def next_business_day(self, d: date) -> date:
        """The business day on or after a date."""
        return d if self.is_business_day(d) else self.add_business_days(d, 1)

    def previous_business_day(self, d: date) -> date:
        """The business day on or before a date."""
        return d if self.is_business_day(d) else self.add_business_days(d, -1)
