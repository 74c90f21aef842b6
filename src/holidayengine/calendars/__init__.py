"""
holidayengine Calendars

Calendar arithmetic the holiday rules are built on, and business day
calendars built on resolved holidays.

Provides:
- easter_sunday / calculate_easter: Gregorian Easter computus
- nth_weekday_of_month / last_weekday_of_month / shift_to_weekday
- get_timezone / at_local_midnight: IANA zone handling
- HolidayCalendar protocol and ProviderCalendar

Usage:
    from holidayengine.calendars import easter_sunday, nth_weekday_of_month

    easter_sunday(2024)                                 # date(2024, 3, 31)
    nth_weekday_of_month(2024, 6, Weekday.MONDAY, 2)    # date(2024, 6, 10)
"""
from __future__ import annotations

from .timezones import at_local_midnight, get_timezone
from .easter import MAX_YEAR, MIN_YEAR, calculate_easter, easter_sunday, validate_year
from .weekdays import (
    days_in_month,
    last_weekday_of_month,
    nth_weekday_of_month,
    shift_to_weekday,
)
from .base import HolidayCalendar, ProviderCalendar

__all__ = [
    # Timezones
    "at_local_midnight",
    "get_timezone",
    # Easter
    "MAX_YEAR",
    "MIN_YEAR",
    "calculate_easter",
    "easter_sunday",
    "validate_year",
    # Weekdays
    "days_in_month",
    "last_weekday_of_month",
    "nth_weekday_of_month",
    "shift_to_weekday",
    # Business day calendars
    "HolidayCalendar",
    "ProviderCalendar",
]
