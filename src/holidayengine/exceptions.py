"""
holidayengine Exception Hierarchy

Domain-specific exceptions for holiday calculation.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: HE_<CATEGORY>_<SPECIFIC>

Two families matter to callers:
- InvalidArgumentError: the query itself is wrong (bad year, unknown
  jurisdiction, malformed timezone). Surface it, never retry it.
- InternalConsistencyError: an algorithm produced a date outside its legal
  domain. This is a logic defect and aborts the single query.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HolidayEngineError(Exception):
    """
    Base exception for all holidayengine errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (HE_*)
        details: Additional context about the error
        jurisdiction: Associated jurisdiction code if applicable
    """
    message: str
    code: str = "HE_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    jurisdiction: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.jurisdiction:
            parts.append(f"(jurisdiction: {self.jurisdiction})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.jurisdiction:
            result["jurisdiction"] = self.jurisdiction
        return result


# =============================================================================
# Invalid Arguments
# =============================================================================

@dataclass
class InvalidArgumentError(HolidayEngineError):
    """The caller supplied an argument the engine cannot work with."""
    code: str = "HE_INVALID_ARGUMENT"


@dataclass
class InvalidYearError(InvalidArgumentError):
    """Year is outside the supported Gregorian range."""
    code: str = "HE_INVALID_YEAR"


@dataclass
class InvalidOccurrenceError(InvalidArgumentError):
    """Weekday occurrence index is malformed or does not exist in the month."""
    code: str = "HE_INVALID_OCCURRENCE"


@dataclass
class UnknownJurisdictionError(InvalidArgumentError):
    """Jurisdiction code is not present in the catalog."""
    code: str = "HE_UNKNOWN_JURISDICTION"


@dataclass
class UnknownTimezoneError(InvalidArgumentError):
    """Timezone identifier is unknown or malformed."""
    code: str = "HE_UNKNOWN_TIMEZONE"


@dataclass
class UnknownLocaleError(InvalidArgumentError):
    """Locale tag is malformed."""
    code: str = "HE_UNKNOWN_LOCALE"


@dataclass
class UnknownHolidayError(InvalidArgumentError):
    """Requested holiday key does not occur in the resolved year."""
    code: str = "HE_UNKNOWN_HOLIDAY"


# =============================================================================
# Internal Consistency
# =============================================================================

@dataclass
class InternalConsistencyError(HolidayEngineError):
    """A calculation produced a date outside its legal domain."""
    code: str = "HE_INTERNAL_CONSISTENCY"


# =============================================================================
# Jurisdiction Pack Errors
# =============================================================================

@dataclass
class JurisdictionLoadError(HolidayEngineError):
    """Failed to load a jurisdiction pack from file."""
    code: str = "HE_PACK_LOAD_ERROR"


@dataclass
class JurisdictionValidationError(HolidayEngineError):
    """Jurisdiction pack schema or reference validation failed."""
    code: str = "HE_PACK_VALIDATION_ERROR"


@dataclass
class JurisdictionVersionMismatch(HolidayEngineError):
    """Pack schema version doesn't match the supported version."""
    code: str = "HE_PACK_VERSION_MISMATCH"


@dataclass
class CompositionCycleError(JurisdictionValidationError):
    """Parent chain of a jurisdiction loops back on itself."""
    code: str = "HE_COMPOSITION_CYCLE"
