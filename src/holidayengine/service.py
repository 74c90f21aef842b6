"""
holidayengine Service

HolidayEngine is the entry point most callers need: it owns a jurisdiction
catalog, a translation table and an optional provider cache, and answers
(jurisdiction, year, locale, timezone) queries.

Usage:
    from holidayengine import HolidayEngine

    engine = HolidayEngine()
    provider = engine.resolve("AU-ACT", 2024)
    for holiday in provider:
        print(holiday.isoformat(), holiday.name)
"""
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Optional

from .calendars.base import ProviderCalendar
from .config import EngineConfig
from .engine.composition import JurisdictionCatalog, resolve
from .engine.provider import JurisdictionProvider
from .logging_setup import configure_logging
from .models import Holiday, TranslationTable
from .packs import PackCatalog, load_translations

logger = logging.getLogger(__name__)

CacheKey = tuple[str, int, Optional[str], Optional[str]]


class HolidayEngine:
    """
    Resolves holidays for jurisdictions in a catalog.

    Results are cached per full (code, year, locale, timezone) input. The
    cache is a bounded LRU guarded by a lock so one engine can be shared
    across threads; failed queries are never cached.
    """

    def __init__(
        self,
        catalog: Optional[JurisdictionCatalog] = None,
        translations: Optional[TranslationTable] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Args:
            catalog: Jurisdiction catalog (defaults to packs from config)
            translations: Translation table (defaults to translations from config)
            config: Engine settings (defaults to EngineConfig())
        """
        self.config = config or EngineConfig()
        self.catalog = catalog if catalog is not None else PackCatalog(self.config.packs_dir)
        self.translations = (
            translations
            if translations is not None
            else load_translations(self.config.translations_path)
        )
        self._cache: OrderedDict[CacheKey, JurisdictionProvider] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_env(cls) -> "HolidayEngine":
        """Build an engine from HE_* environment variables and set up logging."""
        config = EngineConfig.from_env()
        configure_logging(config.log_level, json_output=config.log_json)
        return cls(config=config)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def resolve(
        self,
        code: str,
        year: int,
        locale: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> JurisdictionProvider:
        """
        Holidays of a jurisdiction for a year.

        Args:
            code: Jurisdiction code (e.g. "AU-ACT")
            year: Year to compute
            locale: Display locale (defaults to the jurisdiction's, then config)
            timezone: IANA timezone (defaults to the jurisdiction's)

        Raises:
            InvalidArgumentError subclasses for bad input
            InternalConsistencyError if a rule produces an impossible date
        """
        normalized = code.upper() if isinstance(code, str) else repr(code)
        key: CacheKey = (normalized, year, locale, timezone)

        if self.config.cache_size > 0:
            with self._lock:
                cached = self._cache.get(key)
                if cached is not None:
                    self._cache.move_to_end(key)
                    self._hits += 1
                    return cached
                self._misses += 1

        started = time.perf_counter()
        provider = resolve(
            self.catalog,
            code,
            year,
            locale=locale,
            timezone=timezone,
            translations=self.translations,
            weekend_days=self.config.weekend_days,
            default_locale=self.config.default_locale,
        )
        logger.debug(
            "Resolved %s %d",
            provider.code,
            year,
            extra={
                "jurisdiction": provider.code,
                "year": year,
                "locale": provider.locale,
                "timezone": provider.timezone,
                "holiday_count": len(provider),
                "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            },
        )

        if self.config.cache_size > 0:
            with self._lock:
                self._cache[key] = provider
                self._cache.move_to_end(key)
                while len(self._cache) > self.config.cache_size:
                    self._cache.popitem(last=False)
        return provider

    def holidays(
        self,
        code: str,
        year: int,
        locale: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> tuple[Holiday, ...]:
        """Ordered holidays of a jurisdiction for a year."""
        return self.resolve(code, year, locale, timezone).holidays

    def calendar(self, code: str, locale: Optional[str] = None) -> ProviderCalendar:
        """Business-day calendar backed by this engine."""
        return ProviderCalendar(
            code=code,
            engine=self,
            locale=locale,
            weekend_days=self.config.weekend_days,
        )

    def jurisdictions(self) -> list[str]:
        return self.catalog.codes()

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def cache_info(self) -> dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._cache),
                "max_size": self.config.cache_size,
            }
