"""
holidayengine Jurisdiction Packs

Declarative jurisdiction definitions stored as YAML/JSON, their pydantic
schemas, the loader that turns them into domain models, the catalogs that
serve them to the engine, and the holiday name translation table.

Usage:
    from holidayengine.packs import PackCatalog, load_translations

    catalog = PackCatalog()                 # bundled AU and AU-ACT packs
    translations = load_translations()      # bundled translations.yaml
"""
from __future__ import annotations

from .schema import (
    SCHEMA_VERSION,
    HolidayRuleSchema,
    JurisdictionPackSchema,
    check_schema_version,
    validate_jurisdiction_pack,
)
from .loader import (
    BUNDLED_PACKS_DIR,
    JurisdictionPackLoader,
    load_jurisdiction_pack,
    load_jurisdiction_pack_from_string,
)
from .catalog import InMemoryCatalog, PackCatalog
from .translations import DictTranslations, load_translations

__all__ = [
    "SCHEMA_VERSION",
    "HolidayRuleSchema",
    "JurisdictionPackSchema",
    "check_schema_version",
    "validate_jurisdiction_pack",
    "BUNDLED_PACKS_DIR",
    "JurisdictionPackLoader",
    "load_jurisdiction_pack",
    "load_jurisdiction_pack_from_string",
    "InMemoryCatalog",
    "PackCatalog",
    "DictTranslations",
    "load_translations",
]
