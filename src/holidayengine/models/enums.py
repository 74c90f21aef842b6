"""
holidayengine Enumerations

Enumeration types used throughout holidayengine.

String enums inherit from (str, Enum) for JSON serialization compatibility.
Weekday is an IntEnum so it compares directly with date.weekday().
"""
from __future__ import annotations

from enum import Enum, IntEnum


# =============================================================================
# Holiday Types
# =============================================================================

class HolidayType(str, Enum):
    """Classification of a holiday."""
    OFFICIAL = "official"        # Statutory public holiday
    OBSERVANCE = "observance"    # Observed but not a day off
    SEASON = "season"            # Seasonal marker (equinox, solstice)
    BANK = "bank"                # Bank holiday only
    OTHER = "other"


# =============================================================================
# Weekdays
# =============================================================================

class Weekday(IntEnum):
    """Day of week using Python's convention (0=Monday, 6=Sunday)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """Look up a weekday by case-insensitive English name."""
        return cls[name.strip().upper()]


# =============================================================================
# Shift Direction
# =============================================================================

class ShiftDirection(str, Enum):
    """Direction to move a date when it must land on a given weekday."""
    FORWARD = "forward"      # On or after
    BACKWARD = "backward"    # On or before
