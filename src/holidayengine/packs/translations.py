"""
Holiday name translations.

A translation table maps a holiday key to its display names per locale. The
engine only calls ``get_translations(key)``; an unknown key returns an empty
mapping so name lookup can fall back to the key without raising.
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import yaml
from pydantic import TypeAdapter, ValidationError

from ..exceptions import (
    InvalidArgumentError,
    JurisdictionLoadError,
    JurisdictionValidationError,
)
from ..models import SUBSTITUTE_KEY, normalize_locale
from .loader import BUNDLED_PACKS_DIR

logger = logging.getLogger(__name__)

TRANSLATIONS_FILE = "translations.yaml"

_TABLE_ADAPTER = TypeAdapter(dict[str, dict[str, str]])

_EMPTY: Mapping[str, str] = MappingProxyType({})


class DictTranslations:
    """
    Translation table backed by a dict of key -> {locale: name}.

    Locale tags are normalized on construction ("en-AU" -> "en_AU").
    Substitute name templates take the original name as their only argument
    ("{0} observed") and are checked on construction.
    """

    def __init__(self, table: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._table: dict[str, Mapping[str, str]] = {
            key: MappingProxyType({normalize_locale(loc): name for loc, name in names.items()})
            for key, names in (table or {}).items()
        }
        for locale, template in self._table.get(SUBSTITUTE_KEY, _EMPTY).items():
            try:
                template.format("")
            except (KeyError, IndexError, AttributeError, TypeError, ValueError) as e:
                raise InvalidArgumentError(
                    message=f"Substitute name template for {locale} is malformed: {template!r}",
                    details={"locale": locale, "template": template, "error": str(e)},
                ) from e

    def get_translations(self, key: str) -> Mapping[str, str]:
        return self._table.get(key, _EMPTY)

    def keys(self) -> list[str]:
        return sorted(self._table)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)


def load_translations(path: Optional[Union[str, Path]] = None) -> DictTranslations:
    """
    Load a translation table from YAML.

    Args:
        path: YAML file (defaults to the bundled translations)

    Raises:
        JurisdictionLoadError: If the file cannot be read or parsed
        JurisdictionValidationError: If the structure is not key -> {locale: name}
    """
    try:
        source = str(path) if path is not None else str(BUNDLED_PACKS_DIR / TRANSLATIONS_FILE)
        content = Path(source).read_text(encoding="utf-8")
        data = yaml.safe_load(content) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise JurisdictionLoadError(
            message=f"Failed to load translations: {e}",
            details={"path": source, "error": str(e)},
        ) from e

    try:
        table = _TABLE_ADAPTER.validate_python(data)
        translations = DictTranslations(table)
    except ValidationError as e:
        raise JurisdictionValidationError(
            message=f"Translation table validation failed: {e.error_count()} errors",
            details={"errors": e.errors(include_url=False), "path": source},
        ) from e
    except InvalidArgumentError as e:
        raise JurisdictionValidationError(
            message=f"Translation table is invalid: {e.message}",
            details={"path": source, "error": e.to_dict()},
        ) from e

    logger.debug("Loaded %d translated holiday keys from %s", len(translations), source)
    return translations
