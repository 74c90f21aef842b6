"""
holidayengine Jurisdiction Models

A JurisdictionDefinition is the static rule catalog entry for one country or
region: its code, defaults, parent reference and ordered rules.

Parents are referenced by code, not by inheritance. Composition is an
explicit merge performed by holidayengine.engine.composition.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import JurisdictionValidationError
from .rules import HolidayRule


@dataclass(frozen=True)
class JurisdictionDefinition:
    """
    Static definition of a jurisdiction.

    Attributes:
        code: Stable identifier, typically ISO 3166 (e.g. "AU-ACT")
        name: Human-readable name
        timezone: Default IANA timezone
        locale: Default display locale (None defers to the engine default)
        parent: Code of the parent jurisdiction, if any
        rules: Ordered holiday rules declared by this jurisdiction
    """
    code: str
    name: str
    timezone: str
    locale: Optional[str] = None
    parent: Optional[str] = None
    rules: tuple[HolidayRule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        seen: set[str] = set()
        duplicates = []
        for rule in self.rules:
            if rule.key in seen:
                duplicates.append(rule.key)
            seen.add(rule.key)
        if duplicates:
            raise JurisdictionValidationError(
                message=f"Duplicate rule keys in {self.code}: {', '.join(duplicates)}",
                details={"duplicates": duplicates},
                jurisdiction=self.code,
            )
        if self.parent == self.code:
            raise JurisdictionValidationError(
                message=f"Jurisdiction {self.code} cannot be its own parent",
                jurisdiction=self.code,
            )

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def get_rule(self, key: str) -> Optional[HolidayRule]:
        for rule in self.rules:
            if rule.key == key:
                return rule
        return None

    @property
    def rule_keys(self) -> list[str]:
        return [rule.key for rule in self.rules]
