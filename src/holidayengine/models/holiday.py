"""
holidayengine Holiday Model

The Holiday record produced by rule evaluation.

A Holiday is an immutable value. Its ``date`` is a timezone-aware datetime at
local civil midnight; the civil fields (year, month, day) are authoritative
and never come from offset arithmetic.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from ..exceptions import InvalidArgumentError, UnknownLocaleError
from .enums import HolidayType


DEFAULT_LOCALE = "en"

# language, optional script, optional region: en, en_AU, sr_Latn, zh_Hant_TW
_LOCALE_PATTERN = re.compile(r"^[a-z]{2,3}(_[A-Z][a-z]{3})?(_[A-Z]{2})?$")


def normalize_locale(locale: str) -> str:
    """
    Normalize and validate a locale tag.

    Accepts BCP-47 style hyphens ("en-AU") and returns the underscore form
    ("en_AU").

    Raises:
        UnknownLocaleError: If the tag is malformed
    """
    if not isinstance(locale, str):
        raise UnknownLocaleError(
            message=f"Locale must be a string, got {type(locale).__name__}",
            details={"locale": repr(locale)},
        )
    normalized = locale.strip().replace("-", "_")
    if not _LOCALE_PATTERN.match(normalized):
        raise UnknownLocaleError(
            message=f"Malformed locale tag: {locale!r}",
            details={"locale": locale},
        )
    return normalized


def locale_fallbacks(locale: str) -> list[str]:
    """
    Locales to try, most specific first.

    Example:
        >>> locale_fallbacks("en_AU")
        ['en_AU', 'en']
        >>> locale_fallbacks("de_CH")
        ['de_CH', 'de', 'en']
    """
    chain = [locale]
    language = locale.split("_", 1)[0]
    if language != locale:
        chain.append(language)
    if DEFAULT_LOCALE not in chain:
        chain.append(DEFAULT_LOCALE)
    return chain


@dataclass(frozen=True)
class Holiday:
    """
    A holiday occurring on a concrete date.

    Attributes:
        key: Stable identifier (e.g. "canberraDay")
        names: Locale tag -> display name (may be empty)
        date: Timezone-aware datetime at local midnight
        type: Holiday classification
        locale: Display locale requested by the query
        substitute_for: Key of the holiday this day substitutes, if any
    """
    key: str
    names: Mapping[str, str]
    date: datetime
    type: HolidayType = HolidayType.OFFICIAL
    locale: str = DEFAULT_LOCALE
    substitute_for: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidArgumentError(message="Holiday key must not be empty")
        if self.date.tzinfo is None:
            raise InvalidArgumentError(
                message=f"Holiday '{self.key}' date must be timezone-aware",
                details={"key": self.key, "date": self.date.isoformat()},
            )
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    def __hash__(self) -> int:
        return hash((self.key, self.date, self.type, self.locale, self.substitute_for))

    @property
    def civil_date(self) -> date:
        """Calendar date without time or offset."""
        return self.date.date()

    @property
    def timezone(self) -> str:
        return str(self.date.tzinfo)

    @property
    def is_substitute(self) -> bool:
        return self.substitute_for is not None

    @property
    def name(self) -> str:
        """Display name in the holiday's own locale."""
        return self.get_name()

    def get_name(self, locales: Optional[Sequence[str]] = None) -> str:
        """
        Get the display name for the first matching locale.

        Falls back from the requested locale to its language, then to the
        default locale, and finally to the key. Never raises.

        Args:
            locales: Locales to try in order (defaults to the fallback chain
                of the holiday's own locale)
        """
        candidates = list(locales) if locales else locale_fallbacks(self.locale)
        for candidate in candidates:
            name = self.names.get(candidate)
            if name:
                return name
        return self.key

    def isoformat(self) -> str:
        """ISO-8601 calendar date (YYYY-MM-DD)."""
        return self.civil_date.isoformat()

    def sort_key(self) -> tuple[date, str]:
        return (self.civil_date, self.key)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "key": self.key,
            "name": self.name,
            "date": self.isoformat(),
            "type": self.type.value,
            "locale": self.locale,
            "names": dict(sorted(self.names.items())),
        }
        if self.substitute_for:
            result["substitute_for"] = self.substitute_for
        return result
