"""
holidayengine Configuration

Settings are read from HE_* environment variables with safe defaults.

    HE_DEFAULT_LOCALE   Locale used when neither caller nor jurisdiction sets one (en)
    HE_LOG_LEVEL        Level for the holidayengine logger (INFO)
    HE_LOG_JSON         Emit JSON log lines instead of plain text (false)
    HE_PACKS_DIR        Directory of jurisdiction packs (bundled packs)
    HE_TRANSLATIONS     Translation YAML file (bundled translations)
    HE_CACHE_SIZE       Max cached providers, 0 disables caching (256)
    HE_WEEKEND_DAYS     Comma-separated weekday numbers, 0=Monday (5,6)
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import InvalidArgumentError


@dataclass(frozen=True)
class EngineConfig:
    """Runtime settings for HolidayEngine."""
    default_locale: str = "en"
    log_level: str = "INFO"
    log_json: bool = False
    packs_dir: Optional[Path] = None
    translations_path: Optional[Path] = None
    cache_size: int = 256
    weekend_days: frozenset[int] = field(default_factory=lambda: frozenset({5, 6}))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Raises:
            InvalidArgumentError: If a numeric setting cannot be parsed
        """
        env = os.environ if environ is None else environ

        packs_dir = env.get("HE_PACKS_DIR")
        translations = env.get("HE_TRANSLATIONS")

        try:
            cache_size = int(env.get("HE_CACHE_SIZE", "256"))
            weekend_days = frozenset(
                int(part) for part in env.get("HE_WEEKEND_DAYS", "5,6").split(",") if part.strip()
            )
        except ValueError as e:
            raise InvalidArgumentError(
                message=f"Invalid numeric setting in environment: {e}",
                details={
                    "HE_CACHE_SIZE": env.get("HE_CACHE_SIZE"),
                    "HE_WEEKEND_DAYS": env.get("HE_WEEKEND_DAYS"),
                },
            ) from e

        if cache_size < 0:
            raise InvalidArgumentError(
                message=f"HE_CACHE_SIZE must be >= 0, got {cache_size}",
                details={"HE_CACHE_SIZE": cache_size},
            )
        if any(not 0 <= d <= 6 for d in weekend_days):
            raise InvalidArgumentError(
                message="HE_WEEKEND_DAYS entries must be between 0 (Monday) and 6 (Sunday)",
                details={"HE_WEEKEND_DAYS": sorted(weekend_days)},
            )

        return cls(
            default_locale=env.get("HE_DEFAULT_LOCALE", "en"),
            log_level=env.get("HE_LOG_LEVEL", "INFO").upper(),
            log_json=env.get("HE_LOG_JSON", "false").lower() == "true",
            packs_dir=Path(packs_dir) if packs_dir else None,
            translations_path=Path(translations) if translations else None,
            cache_size=cache_size,
            weekend_days=weekend_days,
        )
