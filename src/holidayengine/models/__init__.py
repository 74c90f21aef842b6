"""
holidayengine Domain Models

Re-exports the enums, date expressions, rules, holiday record and
jurisdiction definition.
"""
from __future__ import annotations

from .enums import HolidayType, ShiftDirection, Weekday
from .expressions import (
    DateExpression,
    EasterOffset,
    FixedDate,
    LastWeekday,
    NthWeekday,
    ShiftToWeekday,
    YearSwitch,
    expression_to_dict,
)
from .holiday import (
    DEFAULT_LOCALE,
    Holiday,
    locale_fallbacks,
    normalize_locale,
)
from .rules import (
    SUBSTITUTE_KEY,
    HolidayRule,
    SubstitutePolicy,
    TranslationTable,
    make_substitute,
    merge_names,
)
from .jurisdiction import JurisdictionDefinition

__all__ = [
    # Enums
    "HolidayType",
    "ShiftDirection",
    "Weekday",
    # Expressions
    "DateExpression",
    "EasterOffset",
    "FixedDate",
    "LastWeekday",
    "NthWeekday",
    "ShiftToWeekday",
    "YearSwitch",
    "expression_to_dict",
    # Holiday
    "DEFAULT_LOCALE",
    "Holiday",
    "locale_fallbacks",
    "normalize_locale",
    # Rules
    "SUBSTITUTE_KEY",
    "HolidayRule",
    "SubstitutePolicy",
    "TranslationTable",
    "make_substitute",
    "merge_names",
    # Jurisdiction
    "JurisdictionDefinition",
]
