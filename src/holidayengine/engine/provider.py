"""
holidayengine Jurisdiction Provider

The immutable result of resolving one jurisdiction for one year.

A provider is built once per (jurisdiction, year, locale, timezone) query by
holidayengine.engine.composition.resolve(). Its holidays are computed eagerly
and never change afterwards; every query method is a read over that tuple.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterator, Optional, Union

from ..calendars.easter import validate_year
from ..calendars.timezones import get_timezone
from ..exceptions import InvalidArgumentError, UnknownHolidayError
from ..models import Holiday, HolidayType, JurisdictionDefinition, TranslationTable

DateLike = Union[date, datetime]

DEFAULT_WEEKEND_DAYS = frozenset({5, 6})


@dataclass(frozen=True)
class JurisdictionProvider:
    """
    Holidays of a jurisdiction for a single year.

    Attributes:
        code: Jurisdiction code (e.g. "AU-ACT")
        year: Year the holidays were computed for
        timezone: IANA timezone of every holiday date
        locale: Display locale
        holidays: Holidays in composition order
        chain: Definitions the result was composed from, root first
        translations: Translation table used for names
        weekend_days: Weekday numbers that are not working days
    """
    code: str
    year: int
    timezone: str
    locale: str
    holidays: tuple[Holiday, ...]
    chain: tuple[JurisdictionDefinition, ...] = field(default=(), repr=False, compare=False)
    translations: Optional[TranslationTable] = field(default=None, repr=False, compare=False)
    weekend_days: frozenset[int] = DEFAULT_WEEKEND_DAYS

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.holidays)

    def __iter__(self) -> Iterator[Holiday]:
        return iter(self.holidays)

    def __contains__(self, key: object) -> bool:
        return any(h.key == key for h in self.holidays)

    def count(self) -> int:
        """Number of holidays in the year, substitutes included."""
        return len(self.holidays)

    # -------------------------------------------------------------------------
    # Lookup by key
    # -------------------------------------------------------------------------

    def get_holiday(self, key: str) -> Optional[Holiday]:
        """Get a holiday by key, or None if it does not occur this year."""
        for holiday in self.holidays:
            if holiday.key == key:
                return holiday
        return None

    def when_is(self, key: str) -> str:
        """
        ISO date of a holiday.

        Raises:
            UnknownHolidayError: If the holiday does not occur this year
        """
        holiday = self.get_holiday(key)
        if holiday is None:
            raise UnknownHolidayError(
                message=f"Holiday '{key}' does not occur in {self.year}",
                details={"key": key, "year": self.year},
                jurisdiction=self.code,
            )
        return holiday.isoformat()

    def holiday_keys(self) -> list[str]:
        return [h.key for h in self.holidays]

    def holiday_names(self) -> list[str]:
        return [h.name for h in self.holidays]

    def holiday_dates(self) -> list[str]:
        return [h.isoformat() for h in self.holidays]

    # -------------------------------------------------------------------------
    # Lookup by date
    # -------------------------------------------------------------------------

    def _civil(self, d: DateLike) -> date:
        """Civil date in this provider's timezone."""
        if isinstance(d, datetime):
            if d.tzinfo is not None:
                return d.astimezone(get_timezone(self.timezone)).date()
            return d.date()
        if isinstance(d, date):
            return d
        raise InvalidArgumentError(
            message=f"Expected a date or datetime, got {type(d).__name__}",
            jurisdiction=self.code,
        )

    def on(self, d: DateLike) -> list[Holiday]:
        """All holidays falling on a date."""
        civil = self._civil(d)
        return [h for h in self.holidays if h.civil_date == civil]

    def is_holiday(self, d: DateLike) -> bool:
        return bool(self.on(d))

    def is_weekend_day(self, d: DateLike) -> bool:
        return self._civil(d).weekday() in self.weekend_days

    def is_working_day(self, d: DateLike) -> bool:
        """A working day is neither a weekend day nor an official holiday."""
        civil = self._civil(d)
        if civil.weekday() in self.weekend_days:
            return False
        return not any(
            h.civil_date == civil and h.type == HolidayType.OFFICIAL
            for h in self.holidays
        )

    def between(self, start: DateLike, end: DateLike, inclusive: bool = True) -> list[Holiday]:
        """
        Holidays within a date range, sorted by date.

        Args:
            start: Range start
            end: Range end
            inclusive: Whether the bounds themselves are included
        """
        start_civil, end_civil = self._civil(start), self._civil(end)
        if start_civil > end_civil:
            raise InvalidArgumentError(
                message=f"Range start {start_civil} is after end {end_civil}",
                details={"start": start_civil.isoformat(), "end": end_civil.isoformat()},
                jurisdiction=self.code,
            )
        if inclusive:
            selected = [h for h in self.holidays if start_civil <= h.civil_date <= end_civil]
        else:
            selected = [h for h in self.holidays if start_civil < h.civil_date < end_civil]
        return sorted(selected, key=Holiday.sort_key)

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def filter_by_type(self, *types: HolidayType) -> list[Holiday]:
        """Holidays of the given types, in composition order."""
        wanted = set(types)
        return [h for h in self.holidays if h.type in wanted]

    def official_holidays(self) -> list[Holiday]:
        return self.filter_by_type(HolidayType.OFFICIAL)

    def substitute_holidays(self) -> list[Holiday]:
        return [h for h in self.holidays if h.is_substitute]

    def sorted_by_date(self) -> list[Holiday]:
        return sorted(self.holidays, key=Holiday.sort_key)

    # -------------------------------------------------------------------------
    # Adjacent years
    # -------------------------------------------------------------------------

    def for_year(self, year: int) -> "JurisdictionProvider":
        """Recompute the same jurisdiction, locale and timezone for another year."""
        from .composition import compose

        validate_year(year)
        return JurisdictionProvider(
            code=self.code,
            year=year,
            timezone=self.timezone,
            locale=self.locale,
            holidays=compose(self.chain, year, self.timezone, self.locale, self.translations),
            chain=self.chain,
            translations=self.translations,
            weekend_days=self.weekend_days,
        )

    def next_year(self) -> "JurisdictionProvider":
        return self.for_year(self.year + 1)

    def previous_year(self) -> "JurisdictionProvider":
        return self.for_year(self.year - 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "year": self.year,
            "timezone": self.timezone,
            "locale": self.locale,
            "holidays": [h.to_dict() for h in self.holidays],
        }
