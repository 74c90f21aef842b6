"""
holidayengine Provider Composition

Resolves a jurisdiction by walking its parent chain and merging each
level's rules on top of its ancestors'.

Merge semantics (keyed by rule key):
- A descendant rule with an ancestor's key replaces it in place
- A new key is appended after everything declared so far
- A replacing rule that evaluates to absent suppresses the ancestor holiday

Substitute days are derived after the merge so they see the final set of
occupied dates.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Protocol, Sequence, runtime_checkable

from ..calendars.easter import validate_year
from ..calendars.timezones import get_timezone
from ..exceptions import CompositionCycleError, UnknownJurisdictionError
from ..models import (
    DEFAULT_LOCALE,
    Holiday,
    HolidayRule,
    JurisdictionDefinition,
    TranslationTable,
    make_substitute,
    normalize_locale,
)
from .provider import JurisdictionProvider

logger = logging.getLogger(__name__)


# =============================================================================
# Catalog Protocol
# =============================================================================

@runtime_checkable
class JurisdictionCatalog(Protocol):
    """
    Protocol for jurisdiction catalogs.

    The engine only needs code -> definition lookup and code enumeration.
    """

    def get_definition(self, code: str) -> JurisdictionDefinition:
        """
        Look up a definition by code.

        Raises:
            UnknownJurisdictionError: If the code is not in the catalog
        """
        ...

    def codes(self) -> list[str]:
        ...


# =============================================================================
# Chain Resolution
# =============================================================================

def resolve_chain(catalog: JurisdictionCatalog, code: str) -> list[JurisdictionDefinition]:
    """
    Build the parent chain for a jurisdiction, root first.

    Args:
        catalog: Where definitions are looked up
        code: Jurisdiction to resolve

    Returns:
        Definitions ordered from the root ancestor to ``code`` itself

    Raises:
        UnknownJurisdictionError: If ``code`` or any ancestor is missing
        CompositionCycleError: If the parent references loop
    """
    if not isinstance(code, str) or not code.strip():
        raise UnknownJurisdictionError(
            message="Jurisdiction code must be a non-empty string",
            details={"code": repr(code)},
        )

    chain: list[JurisdictionDefinition] = []
    seen: list[str] = []
    current: Optional[str] = code.upper()

    while current is not None:
        if current in seen:
            raise CompositionCycleError(
                message=f"Parent cycle detected: {' -> '.join(seen + [current])}",
                details={"chain": seen + [current]},
                jurisdiction=code,
            )
        seen.append(current)
        try:
            definition = catalog.get_definition(current)
        except UnknownJurisdictionError as e:
            if not chain:
                raise
            raise UnknownJurisdictionError(
                message=f"Jurisdiction {code} references unknown parent {current}",
                details={"parent": current, "chain": seen},
                jurisdiction=code,
            ) from e
        chain.append(definition)
        current = definition.parent.upper() if definition.parent else None

    chain.reverse()
    return chain


# =============================================================================
# Merge
# =============================================================================

def effective_rules(chain: Sequence[JurisdictionDefinition]) -> dict[str, HolidayRule]:
    """
    The rule in force for each key after overrides, in merged order.

    Later (more specific) definitions replace earlier ones in place.
    """
    rules: dict[str, HolidayRule] = {}
    for definition in chain:
        for rule in definition.rules:
            rules[rule.key] = rule
    return rules


def compose(
    chain: Sequence[JurisdictionDefinition],
    year: int,
    timezone: str,
    locale: str = DEFAULT_LOCALE,
    translations: Optional[TranslationTable] = None,
) -> tuple[Holiday, ...]:
    """
    Evaluate and merge the rules of a root-first definition chain.

    Args:
        chain: Definitions from root to leaf
        year: Year to evaluate
        timezone: IANA timezone for every produced date
        locale: Display locale
        translations: Optional translation table

    Returns:
        Holidays in stable order: ancestor order preserved, overridden
        entries at their original position, additions appended, each
        substitute day directly after the holiday it substitutes
    """
    merged: dict[str, Optional[Holiday]] = {}
    for definition in chain:
        for rule in definition.rules:
            holiday = rule.evaluate(year, timezone, locale, translations)
            if rule.key in merged:
                action = "suppressed" if holiday is None else "overridden"
                logger.debug("%s: %s %s in %d", definition.code, action, rule.key, year)
            merged[rule.key] = holiday

    holidays = [h for h in merged.values() if h is not None]
    return add_substitutes(holidays, effective_rules(chain), year, translations)


def add_substitutes(
    holidays: Iterable[Holiday],
    rules: dict[str, HolidayRule],
    year: int,
    translations: Optional[TranslationTable] = None,
) -> tuple[Holiday, ...]:
    """
    Insert substitute days for holidays whose rule carries a SubstitutePolicy.

    Each substitute date becomes occupied for the ones that follow.
    Substitutes that would fall in the next year are dropped.
    """
    holidays = list(holidays)
    occupied: set[date] = {h.civil_date for h in holidays}
    result: list[Holiday] = []

    for holiday in holidays:
        result.append(holiday)
        rule = rules.get(holiday.key)
        if rule is None or rule.substitute is None:
            continue
        if not rule.substitute.applies_to(holiday.civil_date):
            continue
        try:
            substitute_date = rule.substitute.substitute_date(holiday.civil_date, occupied)
        except OverflowError:
            # Past date.max, so outside the year as well
            logger.debug("Substitute for %s falls past %d", holiday.key, year)
            continue
        if substitute_date.year != year:
            logger.debug(
                "Substitute for %s falls in %d, outside %d",
                holiday.key, substitute_date.year, year,
            )
            continue
        occupied.add(substitute_date)
        result.append(make_substitute(holiday, substitute_date, translations))

    return tuple(result)


# =============================================================================
# Resolution
# =============================================================================

def resolve(
    catalog: JurisdictionCatalog,
    code: str,
    year: int,
    locale: Optional[str] = None,
    timezone: Optional[str] = None,
    translations: Optional[TranslationTable] = None,
    weekend_days: Optional[frozenset[int]] = None,
    default_locale: str = DEFAULT_LOCALE,
) -> JurisdictionProvider:
    """
    Resolve the holidays of a jurisdiction for a year.

    Args:
        catalog: Jurisdiction catalog
        code: Jurisdiction code (e.g. "AU-ACT")
        year: Year to compute
        locale: Display locale (defaults to the jurisdiction's, then default_locale)
        timezone: IANA timezone (defaults to the jurisdiction's)
        translations: Optional translation table
        weekend_days: Weekday numbers treated as weekend by the provider
        default_locale: Locale used when neither caller nor jurisdiction sets one

    Returns:
        An immutable JurisdictionProvider for the year

    Raises:
        InvalidYearError, UnknownJurisdictionError, UnknownTimezoneError,
        UnknownLocaleError, CompositionCycleError
    """
    validate_year(year)
    chain = resolve_chain(catalog, code)
    leaf = chain[-1]

    timezone = timezone or leaf.timezone
    get_timezone(timezone)
    locale = normalize_locale(locale or leaf.locale or default_locale)

    holidays = compose(chain, year, timezone, locale, translations)
    logger.debug(
        "Resolved %s for %d (%s, %s): %d holidays",
        code, year, timezone, locale, len(holidays),
    )

    kwargs = {}
    if weekend_days is not None:
        kwargs["weekend_days"] = frozenset(weekend_days)
    return JurisdictionProvider(
        code=leaf.code,
        year=year,
        timezone=timezone,
        locale=locale,
        holidays=holidays,
        chain=tuple(chain),
        translations=translations,
        **kwargs,
    )
