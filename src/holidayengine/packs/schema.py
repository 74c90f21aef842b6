"""
holidayengine Jurisdiction Pack Schemas

Pydantic models for validating jurisdiction pack YAML/JSON files.

These schemas define the structure of packs that can be loaded at runtime.
They map to the domain models in holidayengine.models.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major-version compatibility
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

WeekdayValue = Literal[
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
]

HolidayTypeValue = Literal["official", "observance", "season", "bank", "other"]

Month = Annotated[int, Field(ge=1, le=12)]


# =============================================================================
# Date Expression Schemas
# =============================================================================

class _ExpressionSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")


class FixedDateSchema(_ExpressionSchema):
    """Same month and day every year."""
    kind: Literal["fixed"]
    month: Month
    day: int = Field(..., ge=1, le=31)


class NthWeekdaySchema(_ExpressionSchema):
    """nth occurrence of a weekday in a month."""
    kind: Literal["nth_weekday"]
    month: Month
    weekday: WeekdayValue
    n: int = Field(..., ge=1, le=5, description="Occurrence, 1 = first")


class LastWeekdaySchema(_ExpressionSchema):
    """Last occurrence of a weekday in a month."""
    kind: Literal["last_weekday"]
    month: Month
    weekday: WeekdayValue


class EasterSchema(_ExpressionSchema):
    """Days relative to Easter Sunday."""
    kind: Literal["easter"]
    offset: int = Field(0, ge=-100, le=100, description="Days after (negative: before) Easter")


class WeekdayShiftSchema(_ExpressionSchema):
    """A fixed date moved onto a weekday."""
    kind: Literal["weekday_on_or_after", "weekday_on_or_before"]
    month: Month
    day: int = Field(..., ge=1, le=31)
    weekday: WeekdayValue


class YearSwitchSchema(_ExpressionSchema):
    """One expression before ``year``, another from ``year`` on."""
    kind: Literal["switch"]
    year: int = Field(..., description="First year the 'after' expression applies")
    before: "DateSchema"
    after: "DateSchema"


DateSchema = Annotated[
    Union[
        FixedDateSchema,
        NthWeekdaySchema,
        LastWeekdaySchema,
        EasterSchema,
        WeekdayShiftSchema,
        YearSwitchSchema,
    ],
    Field(discriminator="kind"),
]

YearSwitchSchema.model_rebuild()


# =============================================================================
# Rule Schemas
# =============================================================================

class SubstituteSchema(BaseModel):
    """Substitute-day policy."""
    model_config = ConfigDict(extra="forbid")

    when: list[WeekdayValue] = Field(
        default_factory=lambda: ["saturday", "sunday"],
        description="Weekdays that trigger a substitute",
    )
    to: WeekdayValue = Field("monday", description="Weekday the substitute moves to")


class HolidayRuleSchema(BaseModel):
    """Schema for a single holiday rule."""
    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., pattern=r"^[A-Za-z][A-Za-z0-9_]*$", description="Stable holiday key")
    date: DateSchema
    names: dict[str, str] = Field(default_factory=dict, description="Locale -> name")
    type: HolidayTypeValue = "official"
    since: Optional[int] = Field(None, description="First year (inclusive)")
    until: Optional[int] = Field(None, description="Last year (inclusive)")
    substitute: Optional[SubstituteSchema] = None
    description: str = ""

    @model_validator(mode="after")
    def validate_range(self) -> "HolidayRuleSchema":
        if self.since is not None and self.until is not None and self.since > self.until:
            raise ValueError(f"Rule '{self.key}': since ({self.since}) is after until ({self.until})")
        return self


# =============================================================================
# Jurisdiction Pack Schema
# =============================================================================

class JurisdictionPackSchema(BaseModel):
    """Top-level schema for a jurisdiction pack file."""
    schema_version: str = Field(SCHEMA_VERSION, description="Pack schema version")
    code: str = Field(..., pattern=r"^[A-Z]{2}(-[A-Z0-9]{1,3})?$", description="ISO 3166 code")
    name: str
    parent: Optional[str] = Field(None, description="Code of the parent jurisdiction")
    timezone: str = Field(..., min_length=1, description="IANA timezone")
    locale: Optional[str] = None
    holidays: list[HolidayRuleSchema] = Field(default_factory=list)

    @field_validator("holidays")
    @classmethod
    def unique_keys(cls, holidays: list[HolidayRuleSchema]) -> list[HolidayRuleSchema]:
        seen: set[str] = set()
        for rule in holidays:
            if rule.key in seen:
                raise ValueError(f"Duplicate holiday key: '{rule.key}'")
            seen.add(rule.key)
        return holidays

    @model_validator(mode="after")
    def validate_parent(self) -> "JurisdictionPackSchema":
        if self.parent is not None and self.parent == self.code:
            raise ValueError(f"Jurisdiction '{self.code}' cannot be its own parent")
        return self


# =============================================================================
# Helpers
# =============================================================================

def check_schema_version(data: dict[str, Any]) -> bool:
    """True if the pack's major schema version matches SCHEMA_VERSION."""
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    return pack_version.split(".")[0] == SCHEMA_VERSION.split(".")[0]


def validate_jurisdiction_pack(data: dict[str, Any]) -> JurisdictionPackSchema:
    """Validate raw pack data against the schema."""
    return JurisdictionPackSchema.model_validate(data)
