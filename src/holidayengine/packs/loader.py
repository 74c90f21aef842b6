"""
holidayengine Jurisdiction Pack Loader

Loads and validates jurisdiction packs from YAML or JSON files.

Converts Pydantic schema models to holidayengine domain models.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from ..exceptions import (
    HolidayEngineError,
    JurisdictionLoadError,
    JurisdictionValidationError,
    JurisdictionVersionMismatch,
)
from ..models import (
    DateExpression,
    EasterOffset,
    FixedDate,
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
    normalize_locale,
)
from ..calendars.timezones import get_timezone
from .schema import (
    SCHEMA_VERSION,
    EasterSchema,
    FixedDateSchema,
    HolidayRuleSchema,
    JurisdictionPackSchema,
    LastWeekdaySchema,
    NthWeekdaySchema,
    SubstituteSchema,
    WeekdayShiftSchema,
    YearSwitchSchema,
    check_schema_version,
    validate_jurisdiction_pack,
)

logger = logging.getLogger(__name__)

BUNDLED_PACKS_DIR = Path(__file__).resolve().parent / "data"


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_expression(schema: Any) -> DateExpression:
    """Convert a date expression schema to its domain expression."""
    if isinstance(schema, FixedDateSchema):
        return FixedDate(month=schema.month, day=schema.day)
    if isinstance(schema, NthWeekdaySchema):
        return NthWeekday(month=schema.month, weekday=Weekday.from_name(schema.weekday), n=schema.n)
    if isinstance(schema, LastWeekdaySchema):
        return LastWeekday(month=schema.month, weekday=Weekday.from_name(schema.weekday))
    if isinstance(schema, EasterSchema):
        return EasterOffset(days=schema.offset)
    if isinstance(schema, WeekdayShiftSchema):
        direction = (
            ShiftDirection.FORWARD
            if schema.kind == "weekday_on_or_after"
            else ShiftDirection.BACKWARD
        )
        return ShiftToWeekday(
            base=FixedDate(month=schema.month, day=schema.day),
            weekday=Weekday.from_name(schema.weekday),
            direction=direction,
        )
    if isinstance(schema, YearSwitchSchema):
        return YearSwitch(
            year=schema.year,
            before=_convert_expression(schema.before),
            after=_convert_expression(schema.after),
        )
    raise TypeError(f"Unsupported date expression schema: {type(schema).__name__}")


def _convert_substitute(schema: SubstituteSchema) -> SubstitutePolicy:
    """Convert SubstituteSchema to SubstitutePolicy."""
    return SubstitutePolicy(
        on=frozenset(Weekday.from_name(w) for w in schema.when),
        to=Weekday.from_name(schema.to),
    )


def _convert_rule(schema: HolidayRuleSchema) -> HolidayRule:
    """Convert HolidayRuleSchema to HolidayRule."""
    return HolidayRule(
        key=schema.key,
        expression=_convert_expression(schema.date),
        names={normalize_locale(locale): name for locale, name in schema.names.items()},
        type=HolidayType(schema.type),
        since=schema.since,
        until=schema.until,
        substitute=_convert_substitute(schema.substitute) if schema.substitute else None,
        description=schema.description,
    )


def _convert_pack(schema: JurisdictionPackSchema) -> JurisdictionDefinition:
    """Convert JurisdictionPackSchema to JurisdictionDefinition."""
    return JurisdictionDefinition(
        code=schema.code,
        name=schema.name,
        timezone=schema.timezone,
        locale=normalize_locale(schema.locale) if schema.locale else None,
        parent=schema.parent,
        rules=tuple(_convert_rule(r) for r in schema.holidays),
    )


# =============================================================================
# Jurisdiction Pack Loader
# =============================================================================

class JurisdictionPackLoader:
    """
    Loads jurisdiction packs from YAML or JSON files.

    Usage:
        loader = JurisdictionPackLoader()
        definition = loader.load("path/to/au_act.yaml")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema versions
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> JurisdictionDefinition:
        """
        Load a jurisdiction pack from a file.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Loaded JurisdictionDefinition

        Raises:
            JurisdictionLoadError: If file cannot be read
            JurisdictionValidationError: If validation fails
            JurisdictionVersionMismatch: If schema version incompatible
        """
        path = Path(path)

        try:
            data = load_file(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise JurisdictionLoadError(
                message=f"Failed to load jurisdiction pack: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        definition = self.load_dict(data, source=str(path))
        logger.debug("Loaded jurisdiction pack %s from %s", definition.code, path)
        return definition

    def load_dict(self, data: Any, source: str = "<dict>") -> JurisdictionDefinition:
        """Validate and convert already-parsed pack data."""
        if not isinstance(data, dict):
            raise JurisdictionValidationError(
                message="Jurisdiction pack must be a mapping",
                details={"path": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise JurisdictionVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "path": source,
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            schema = validate_jurisdiction_pack(data)
        except ValidationError as e:
            raise JurisdictionValidationError(
                message=f"Jurisdiction pack validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
                jurisdiction=data.get("code"),
            ) from e

        try:
            get_timezone(schema.timezone)
            return _convert_pack(schema)
        except HolidayEngineError as e:
            raise JurisdictionValidationError(
                message=f"Jurisdiction pack {schema.code} is invalid: {e.message}",
                details={"path": source, "error": e.to_dict()},
                jurisdiction=schema.code,
            ) from e

    def load_directory(self, directory: Union[str, Path]) -> list[JurisdictionDefinition]:
        """
        Load every pack in a directory, sorted by file name.

        Files whose top level lacks a ``code`` key (e.g. translations) are
        skipped.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise JurisdictionLoadError(
                message=f"Pack directory not found: {directory}",
                details={"path": str(directory)},
            )

        definitions = []
        for path in sorted(directory.iterdir()):
            if path.suffix.lower() not in {".yaml", ".yml", ".json"}:
                continue
            try:
                data = load_file(path)
            except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
                raise JurisdictionLoadError(
                    message=f"Failed to load jurisdiction pack: {e}",
                    details={"path": str(path), "error": str(e)},
                ) from e
            if not isinstance(data, dict) or "code" not in data:
                logger.debug("Skipping non-pack file %s", path.name)
                continue
            definitions.append(self.load_dict(data, source=str(path)))
        return definitions


# =============================================================================
# Convenience Functions
# =============================================================================

def load_file(path: Path) -> Any:
    """Load data from a YAML or JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_jurisdiction_pack(path: Union[str, Path]) -> JurisdictionDefinition:
    """
    Load a jurisdiction pack from a file.

    Convenience function that creates a temporary loader.
    """
    return JurisdictionPackLoader().load(path)


def load_jurisdiction_pack_from_string(
    content: str,
    format: str = "yaml",
) -> JurisdictionDefinition:
    """
    Load a jurisdiction pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise JurisdictionLoadError(
            message=f"Failed to parse jurisdiction pack: {e}",
            details={"format": format, "error": str(e)},
        ) from e
    return JurisdictionPackLoader().load_dict(data, source=f"<{format} string>")
