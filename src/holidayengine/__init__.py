"""
holidayengine - Public Holiday Calculation Engine

holidayengine computes the public holidays of a jurisdiction for a year from
declarative rules: fixed dates, nth/last weekdays, Easter offsets, weekday
shifts and year switches. Regional jurisdictions inherit their parent's
rules and may override, suppress or extend them.

Key Features:
- Gregorian Easter computus for 1583-9999
- Rules with activation year ranges (since/until)
- Parent chain composition merged by holiday key
- Substitute ("observed") days for weekend holidays
- Localised names with locale fallback
- Timezone-aware results at local midnight
- YAML jurisdiction packs validated with pydantic

Quick Start:
    from datetime import date
    from holidayengine import HolidayEngine

    engine = HolidayEngine()
    provider = engine.resolve("AU-ACT", 2024)

    provider.when_is("easterSaturday")     # '2024-03-30'
    provider.when_is("queensBirthday")     # '2024-06-10'

    calendar = engine.calendar("AU-ACT")
    calendar.add_business_days(date(2024, 12, 23), 3)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    CompositionCycleError,
    HolidayEngineError,
    InternalConsistencyError,
    InvalidArgumentError,
    InvalidOccurrenceError,
    InvalidYearError,
    JurisdictionLoadError,
    JurisdictionValidationError,
    JurisdictionVersionMismatch,
    UnknownHolidayError,
    UnknownJurisdictionError,
    UnknownLocaleError,
    UnknownTimezoneError,
)

# =============================================================================
# Core Models
# =============================================================================
from .models import (
    DateExpression,
    EasterOffset,
    FixedDate,
    Holiday,
    HolidayRule,
    HolidayType,
    JurisdictionDefinition,
    LastWeekday,
    NthWeekday,
    ShiftDirection,
    ShiftToWeekday,
    SubstitutePolicy,
    Weekday,
    YearSwitch,
)

# =============================================================================
# Calendars
# =============================================================================
from .calendars import (
    HolidayCalendar,
    ProviderCalendar,
    calculate_easter,
    easter_sunday,
    last_weekday_of_month,
    nth_weekday_of_month,
    shift_to_weekday,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import JurisdictionCatalog, JurisdictionProvider, compose, resolve, resolve_chain
from .packs import (
    DictTranslations,
    InMemoryCatalog,
    JurisdictionPackLoader,
    PackCatalog,
    load_jurisdiction_pack,
    load_translations,
)
from .service import HolidayEngine

# =============================================================================
# Ambient
# =============================================================================
from .canon import canonical_json, content_hash
from .config import EngineConfig
from .logging_setup import JSONFormatter, configure_logging

__all__ = [
    "__version__",
    # Exceptions
    "CompositionCycleError",
    "HolidayEngineError",
    "InternalConsistencyError",
    "InvalidArgumentError",
    "InvalidOccurrenceError",
    "InvalidYearError",
    "JurisdictionLoadError",
    "JurisdictionValidationError",
    "JurisdictionVersionMismatch",
    "UnknownHolidayError",
    "UnknownJurisdictionError",
    "UnknownLocaleError",
    "UnknownTimezoneError",
    # Models
    "DateExpression",
    "EasterOffset",
    "FixedDate",
    "Holiday",
    "HolidayRule",
    "HolidayType",
    "JurisdictionDefinition",
    "LastWeekday",
    "NthWeekday",
    "ShiftDirection",
    "ShiftToWeekday",
    "SubstitutePolicy",
    "Weekday",
    "YearSwitch",
    # Calendars
    "HolidayCalendar",
    "ProviderCalendar",
    "calculate_easter",
    "easter_sunday",
    "last_weekday_of_month",
    "nth_weekday_of_month",
    "shift_to_weekday",
    # Engine
    "JurisdictionCatalog",
    "JurisdictionProvider",
    "compose",
    "resolve",
    "resolve_chain",
    "DictTranslations",
    "InMemoryCatalog",
    "JurisdictionPackLoader",
    "PackCatalog",
    "load_jurisdiction_pack",
    "load_translations",
    "HolidayEngine",
    # Ambient
    "canonical_json",
    "content_hash",
    "EngineConfig",
    "JSONFormatter",
    "configure_logging",
]
