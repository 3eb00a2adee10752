"""
City weather lookup with cache fallback.
"""

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Set

from shared.logging import get_logger
from ..adapters.weather_provider_client import WeatherProviderClient
from ..caching.weather_cache import WeatherCache

# Marks a cached entry that could not be decoded
_MISS = object()


class LookupSource(str, Enum):
    """Where a lookup result came from."""
    CACHE = "cache"
    UPSTREAM = "upstream"


@dataclass(frozen=True)
class LookupResult:
    payload: Any
    source: LookupSource


class WeatherLookupHandler:
    """Resolve a city to a weather payload, preferring the cache.

    A cache miss goes to the provider; the fresh payload is returned at once
    and written to the cache by a detached task. Provider errors propagate
    and never schedule a write.
    """

    def __init__(self, cache: WeatherCache, provider: WeatherProviderClient, ttl_seconds: int):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.cache = cache
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self.logger = get_logger("weather.lookup")

        self._pending_writes: Set[asyncio.Task] = set()

    async def lookup(self, city: str) -> LookupResult:
        """Look up weather for city."""
        cached = await self.cache.read(city)
        if cached is not None:
            payload = self._deserialize(city, cached)
            if payload is not _MISS:
                self.logger.debug("Weather cache hit", city=city)
                return LookupResult(payload, LookupSource.CACHE)

        payload = await self.provider.fetch(city)
        self._schedule_cache_write(city, payload)
        return LookupResult(payload, LookupSource.UPSTREAM)

    def _deserialize(self, city: str, cached: str) -> Any:
        """Decode a cached payload; corrupt entries count as a miss."""
        try:
            return json.loads(cached)
        except (TypeError, json.JSONDecodeError):
            self.logger.warning("Failed to deserialize cached weather payload", city=city)
            return _MISS

    def _schedule_cache_write(self, city: str, payload: Any) -> None:
        if not self.cache.is_available:
            return

        task = asyncio.create_task(
            self.cache.write(city, json.dumps(payload), self.ttl_seconds),
            name=f"weather-cache-write:{city}",
        )
        self._pending_writes.add(task)
        task.add_done_callback(self._on_write_done)

    def _on_write_done(self, task: asyncio.Task) -> None:
        self._pending_writes.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.warning("Background cache write failed", error=str(error))

    @property
    def pending_writes(self) -> int:
        return len(self._pending_writes)

    async def drain(self) -> None:
        """Wait for outstanding cache writes."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)
