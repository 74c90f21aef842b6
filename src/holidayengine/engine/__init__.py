"""
holidayengine Engine

Composition of jurisdiction chains into per-year providers.
"""
from __future__ import annotations

from .provider import DEFAULT_WEEKEND_DAYS, JurisdictionProvider
from .composition import (
    JurisdictionCatalog,
    add_substitutes,
    compose,
    effective_rules,
    resolve,
    resolve_chain,
)

__all__ = [
    "DEFAULT_WEEKEND_DAYS",
    "JurisdictionProvider",
    "JurisdictionCatalog",
    "add_substitutes",
    "compose",
    "effective_rules",
    "resolve",
    "resolve_chain",
]
