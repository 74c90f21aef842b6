"""
Jurisdiction catalogs.

A catalog maps jurisdiction codes to JurisdictionDefinitions. The engine
talks to it through the JurisdictionCatalog protocol; two implementations
are provided:

- InMemoryCatalog: definitions built in code
- PackCatalog: definitions loaded from a directory of YAML/JSON packs
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ..engine.composition import resolve_chain
from ..exceptions import JurisdictionValidationError, UnknownJurisdictionError
from ..models import JurisdictionDefinition
from .loader import BUNDLED_PACKS_DIR, JurisdictionPackLoader

logger = logging.getLogger(__name__)


class InMemoryCatalog:
    """
    Catalog over a fixed set of definitions.

    Usage:
        catalog = InMemoryCatalog([australia, capital_territory])
        definition = catalog.get_definition("AU-ACT")
    """

    def __init__(self, definitions: Iterable[JurisdictionDefinition] = (), validate: bool = True):
        """
        Args:
            definitions: Definitions to register
            validate: Check parent references and cycles up front
        """
        self._definitions: dict[str, JurisdictionDefinition] = {}
        for definition in definitions:
            self.add(definition)
        if validate:
            self.validate_references()

    def add(self, definition: JurisdictionDefinition) -> None:
        code = definition.code.upper()
        if code in self._definitions:
            raise JurisdictionValidationError(
                message=f"Duplicate jurisdiction code: {definition.code}",
                jurisdiction=definition.code,
            )
        self._definitions[code] = definition

    def get_definition(self, code: str) -> JurisdictionDefinition:
        definition = self._definitions.get(code.upper()) if isinstance(code, str) else None
        if definition is None:
            raise UnknownJurisdictionError(
                message=f"Unknown jurisdiction code: {code!r}",
                details={"code": code, "known": self.codes()},
                jurisdiction=code if isinstance(code, str) else None,
            )
        return definition

    def codes(self) -> list[str]:
        return sorted(d.code for d in self._definitions.values())

    def children_of(self, code: str) -> list[str]:
        """Codes whose parent is ``code``."""
        return sorted(d.code for d in self._definitions.values() if d.parent == code)

    def validate_references(self) -> None:
        """
        Check every definition's parent chain.

        Raises:
            UnknownJurisdictionError: If a parent code is missing
            CompositionCycleError: If parents form a loop
        """
        for code in self.codes():
            resolve_chain(self, code)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


class PackCatalog(InMemoryCatalog):
    """
    Catalog loaded from a directory of jurisdiction packs.

    Defaults to the packs bundled with holidayengine.
    """

    def __init__(
        self,
        directory: Optional[Union[str, Path]] = None,
        loader: Optional[JurisdictionPackLoader] = None,
    ):
        self.directory = Path(directory) if directory is not None else BUNDLED_PACKS_DIR
        loader = loader or JurisdictionPackLoader()
        definitions = loader.load_directory(self.directory)
        super().__init__(definitions)
        logger.info("Loaded %d jurisdiction packs from %s", len(self), self.directory)
