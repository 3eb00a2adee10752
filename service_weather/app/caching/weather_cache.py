"""
Fail-open Redis cache for weather payloads.
"""

from typing import Any, Dict, Optional
import redis.asyncio as redis

from shared.logging import get_logger
from shared.circuit_breaker import OneWayBreaker, BreakerState


class WeatherCache:
    """Best-effort cache in front of the upstream provider.

    Every store failure trips a one-way breaker and drops the connection;
    from then on reads return None and writes do nothing, without touching
    the network. Callers never see a store error.
    """

    def __init__(self, redis_url: Optional[str], socket_timeout: float = 5.0):
        self.redis_url = redis_url
        self.socket_timeout = socket_timeout
        self.logger = get_logger("weather.cache")

        self.breaker = OneWayBreaker("cache", enabled=bool(redis_url))
        self._redis: Optional[redis.Redis] = None

        if not redis_url:
            self.logger.info("Redis not configured - running without cache (set REDIS_URL to enable)")

    @property
    def state(self) -> BreakerState:
        return self.breaker.state

    @property
    def is_available(self) -> bool:
        return self.breaker.is_available and self._redis is not None

    async def connect(self) -> bool:
        """Open the connection and verify it with PING.

        Only the first attempt counts; a cache that failed once stays off.
        """
        if not self.breaker.can_connect:
            return self.is_available

        try:
            self._redis = redis.from_url(
                self.redis_url,
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
            )
            await self._redis.ping()
        except Exception as e:
            await self._discard("connect", e)
            return False

        self.breaker.mark_available()
        self.logger.info("Connected to Redis - caching enabled")
        return True

    async def read(self, key: str) -> Optional[str]:
        """Return the cached text for key, or None."""
        if not self.is_available:
            return None

        try:
            return await self._redis.get(key)
        except Exception as e:
            await self._discard("get", e)
            return None

    async def write(self, key: str, payload: str, ttl_seconds: int) -> None:
        """Store payload under key with a fixed expiry."""
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        if not self.is_available:
            return

        try:
            await self._redis.set(key, payload, ex=ttl_seconds)
            self.logger.debug("Cached weather payload", key=key, ttl=ttl_seconds)
        except Exception as e:
            await self._discard("set", e)

    async def close(self) -> None:
        """Release the connection on shutdown."""
        client, self._redis = self._redis, None
        if client is not None:
            await client.aclose()

    async def _discard(self, operation: str, error: Exception) -> None:
        """Trip the breaker and drop the connection."""
        client, self._redis = self._redis, None
        if self.breaker.trip(f"{operation}: {error}"):
            self.logger.warning(
                "Redis connection failed - running without cache",
                operation=operation,
                error=str(error)
            )

        if client is None:
            return
        try:
            await client.aclose()
        except Exception as close_error:
            self.logger.debug("Error closing discarded Redis client", error=str(close_error))

    def get_state(self) -> Dict[str, Any]:
        """Describe the cache for health reporting."""
        return {
            "configured": bool(self.redis_url),
            **self.breaker.get_state(),
        }
