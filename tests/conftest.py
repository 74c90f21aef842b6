"""
Pytest configuration and fixtures for holidayengine tests.

Provides factory helpers for rules and jurisdictions plus fixtures for the
bundled AU / AU-ACT packs.
"""
import pytest

from holidayengine.config import EngineConfig
from holidayengine.models import (
    FixedDate,
    HolidayRule,
    HolidayType,
    JurisdictionDefinition,
    SubstitutePolicy,
)
from holidayengine.packs import DictTranslations, InMemoryCatalog, PackCatalog, load_translations
from holidayengine.service import HolidayEngine


# =============================================================================
# Factory Helpers
# =============================================================================

def make_rule(
    key: str,
    month: int = 1,
    day: int = 1,
    expression=None,
    names: dict = None,
    type: HolidayType = HolidayType.OFFICIAL,
    since: int = None,
    until: int = None,
    substitute: SubstitutePolicy = None,
) -> HolidayRule:
    """Create a HolidayRule, defaulting to a fixed date."""
    return HolidayRule(
        key=key,
        expression=expression or FixedDate(month=month, day=day),
        names=names or {},
        type=type,
        since=since,
        until=until,
        substitute=substitute,
    )


def make_definition(
    code: str,
    rules: list = None,
    parent: str = None,
    timezone: str = "Australia/Sydney",
    locale: str = None,
    name: str = None,
) -> JurisdictionDefinition:
    """Create a JurisdictionDefinition with required fields."""
    return JurisdictionDefinition(
        code=code,
        name=name or f"Jurisdiction {code}",
        timezone=timezone,
        locale=locale,
        parent=parent,
        rules=tuple(rules or ()),
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def bundled_catalog() -> PackCatalog:
    """Catalog over the bundled packs."""
    return PackCatalog()


@pytest.fixture(scope="session")
def bundled_translations() -> DictTranslations:
    return load_translations()


@pytest.fixture
def engine(bundled_catalog, bundled_translations) -> HolidayEngine:
    """Engine over the bundled packs with a fresh cache."""
    return HolidayEngine(
        catalog=bundled_catalog,
        translations=bundled_translations,
        config=EngineConfig(),
    )


@pytest.fixture
def simple_catalog() -> InMemoryCatalog:
    """
    Two-level catalog:

    XX:    alpha (1 Jan), beta (1 Feb), gamma (1 Mar)
    XX-YY: beta moved to 2 Feb, gamma suppressed before 2020, delta (1 Apr)
    """
    root = make_definition(
        "XX",
        rules=[
            make_rule("alpha", 1, 1, names={"en": "Alpha"}),
            make_rule("beta", 2, 1, names={"en": "Beta"}),
            make_rule("gamma", 3, 1, names={"en": "Gamma"}),
        ],
    )
    child = make_definition(
        "XX-YY",
        parent="XX",
        rules=[
            make_rule("beta", 2, 2, names={"en": "Beta (regional)"}),
            make_rule("gamma", 3, 1, since=2020),
            make_rule("delta", 4, 1),
        ],
    )
    return InMemoryCatalog([root, child])
