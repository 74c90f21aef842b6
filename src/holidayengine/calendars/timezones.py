"""
Timezone handling.

All holiday arithmetic happens on civil ``date`` objects. A zone is only
attached at the very end, as local midnight, so a DST transition can never
move a holiday onto a neighbouring day.
"""
from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import UnknownTimezoneError


@lru_cache(maxsize=64)
def get_timezone(name: str) -> ZoneInfo:
    """
    Resolve an IANA timezone identifier.

    Args:
        name: IANA identifier (e.g. "Australia/Sydney")

    Returns:
        The ZoneInfo for the identifier

    Raises:
        UnknownTimezoneError: If the identifier is empty, malformed or unknown
    """
    if not isinstance(name, str) or not name.strip():
        raise UnknownTimezoneError(
            message="Timezone identifier must be a non-empty string",
            details={"timezone": name},
        )
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise UnknownTimezoneError(
            message=f"Unknown timezone identifier: {name}",
            details={"timezone": name, "error": str(e)},
        ) from e


def at_local_midnight(d: date, timezone: str) -> datetime:
    """Attach a timezone to a civil date at 00:00 local wall time."""
    return datetime(d.year, d.month, d.day, tzinfo=get_timezone(timezone))
