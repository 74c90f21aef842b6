"""
holidayengine Rule Models

A HolidayRule is a named, declarative computation that yields zero or one
Holiday for a given (year, timezone, locale).

Key components:
- HolidayRule: key + date expression + activation year range
- SubstitutePolicy: when a weekend holiday earns an extra weekday off
- TranslationTable: key -> {locale: name} lookup supplied by the caller
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Mapping, Optional, Protocol, runtime_checkable

from ..calendars.timezones import at_local_midnight
from ..calendars.weekdays import shift_to_weekday
from ..exceptions import InternalConsistencyError, InvalidArgumentError
from .enums import HolidayType, ShiftDirection, Weekday
from .expressions import DateExpression
from .holiday import DEFAULT_LOCALE, Holiday

logger = logging.getLogger(__name__)

SUBSTITUTE_KEY = "substituteHoliday"
SUBSTITUTE_NAME_TEMPLATE = "{0} observed"


# =============================================================================
# Translation Table Protocol
# =============================================================================

@runtime_checkable
class TranslationTable(Protocol):
    """
    Protocol for holiday name translations.

    Implementations return every known translation of a holiday key; an
    unknown key yields an empty mapping, never an error.
    """

    def get_translations(self, key: str) -> Mapping[str, str]:
        ...


# =============================================================================
# Substitute Policy
# =============================================================================

@dataclass(frozen=True)
class SubstitutePolicy:
    """
    Substitute-day policy for holidays that fall on certain weekdays.

    Attributes:
        on: Weekdays that trigger a substitute (typically Saturday, Sunday)
        to: Weekday the substitute is moved forward to
    """
    on: frozenset[Weekday] = field(
        default_factory=lambda: frozenset({Weekday.SATURDAY, Weekday.SUNDAY})
    )
    to: Weekday = Weekday.MONDAY

    def applies_to(self, d: date) -> bool:
        return d.weekday() in self.on

    def substitute_date(self, d: date, occupied: set[date]) -> date:
        """
        First ``to`` weekday strictly after ``d`` not already occupied.

        Occupied days push the substitute forward one day at a time, so a
        Sunday Boxing Day after a Saturday Christmas lands on Tuesday.
        """
        candidate = shift_to_weekday(d + timedelta(days=1), self.to, ShiftDirection.FORWARD)
        # A year holds at most a few hundred holidays; bound the walk anyway
        for _ in range(366):
            if candidate not in occupied:
                return candidate
            candidate += timedelta(days=1)
        raise InternalConsistencyError(
            message=f"No free substitute day found after {d.isoformat()}",
            details={"date": d.isoformat()},
        )


# =============================================================================
# Holiday Rule
# =============================================================================

@dataclass(frozen=True)
class HolidayRule:
    """
    A declarative holiday rule.

    Attributes:
        key: Stable holiday identifier, also the merge key for composition
        expression: How the civil date is derived from the year
        names: Locale -> name declared by the rule itself
        type: Holiday classification
        since: First year the holiday exists (inclusive)
        until: Last year the holiday exists (inclusive)
        substitute: Optional substitute-day policy
        description: Human-readable note
    """
    key: str
    expression: DateExpression
    names: Mapping[str, str] = field(default_factory=dict, hash=False)
    type: HolidayType = HolidayType.OFFICIAL
    since: Optional[int] = None
    until: Optional[int] = None
    substitute: Optional[SubstitutePolicy] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidArgumentError(message="Rule key must not be empty")
        if self.since is not None and self.until is not None and self.since > self.until:
            raise InvalidArgumentError(
                message=f"Rule '{self.key}' has since={self.since} after until={self.until}",
                details={"key": self.key, "since": self.since, "until": self.until},
            )

    def is_active(self, year: int) -> bool:
        """Check whether the rule exists in a year."""
        if self.since is not None and year < self.since:
            return False
        if self.until is not None and year > self.until:
            return False
        return True

    def resolve_date(self, year: int) -> Optional[date]:
        """Civil date for the year, or None if the rule is inactive."""
        if not self.is_active(year):
            return None
        return self.expression.resolve(year)

    def evaluate(
        self,
        year: int,
        timezone: str,
        locale: str = DEFAULT_LOCALE,
        translations: Optional[TranslationTable] = None,
    ) -> Optional[Holiday]:
        """
        Evaluate the rule for a year.

        Args:
            year: Year to evaluate
            timezone: IANA timezone the date is expressed in
            locale: Display locale for the holiday
            translations: Optional table merged under the rule's own names

        Returns:
            The Holiday, or None when the rule is not active in the year
        """
        civil = self.resolve_date(year)
        if civil is None:
            logger.debug("Rule %s inactive in %d", self.key, year)
            return None
        if civil.year != year:
            raise InternalConsistencyError(
                message=f"Rule '{self.key}' resolved {civil.isoformat()} outside year {year}",
                details={"key": self.key, "year": year, "date": civil.isoformat()},
            )

        return Holiday(
            key=self.key,
            names=merge_names(self.key, self.names, translations),
            date=at_local_midnight(civil, timezone),
            type=self.type,
            locale=locale,
        )


def merge_names(
    key: str,
    names: Mapping[str, str],
    translations: Optional[TranslationTable],
) -> dict[str, str]:
    """Rule-declared names win over the translation table for the same locale."""
    merged: dict[str, str] = {}
    if translations is not None:
        merged.update(translations.get_translations(key))
    merged.update(names)
    return merged


def make_substitute(
    holiday: Holiday,
    substitute_date: date,
    translations: Optional[TranslationTable] = None,
) -> Holiday:
    """
    Build the substitute Holiday for a weekend holiday.

    Names come from the ``substituteHoliday`` template in each locale the
    original holiday has a name for.
    """
    templates: Mapping[str, str] = {}
    if translations is not None:
        templates = translations.get_translations(SUBSTITUTE_KEY)

    names: dict[str, str] = {}
    for locale, name in holiday.names.items():
        template = templates.get(locale) or templates.get(locale.split("_", 1)[0])
        if template is None and locale.split("_", 1)[0] == DEFAULT_LOCALE:
            template = SUBSTITUTE_NAME_TEMPLATE
        if not template:
            continue
        try:
            names[locale] = template.format(name)
        except (KeyError, IndexError, AttributeError, TypeError, ValueError) as e:
            raise InvalidArgumentError(
                message=f"Substitute name template for {locale} is malformed: {template!r}",
                details={"key": holiday.key, "locale": locale, "template": template},
            ) from e

    return Holiday(
        key=f"{SUBSTITUTE_KEY}:{holiday.key}",
        names=names,
        date=at_local_midnight(substitute_date, holiday.timezone),
        type=holiday.type,
        locale=holiday.locale,
        substitute_for=holiday.key,
    )
