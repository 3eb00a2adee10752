"""
Weather Gateway service.
"""

from typing import Dict, Optional

from fastapi.responses import JSONResponse

from shared.base_service import BaseService
from shared.config import GatewayConfig, get_config
from .adapters.weather_provider_client import WeatherProviderClient
from .caching.weather_cache import WeatherCache
from .domain.lookup_handler import LookupSource, WeatherLookupHandler
from .ratelimit.window_limiter import FixedWindowRateLimiter, RateLimitMiddleware


class WeatherGatewayService(BaseService):
    """Weather gateway service implementation."""

    def __init__(self, config: Optional[GatewayConfig] = None):
        config = config or get_config()

        self.cache = WeatherCache(
            config.redis_url,
            socket_timeout=config.redis_socket_timeout_seconds,
        )
        self.provider = WeatherProviderClient(
            config.weather_api_base_url,
            config.weather_api_key,
            unit_group=config.weather_unit_group,
            timeout=config.weather_api_timeout_seconds,
        )
        self.lookup_handler = WeatherLookupHandler(
            self.cache,
            self.provider,
            ttl_seconds=config.cache_ttl_seconds,
        )
        self.rate_limiter = FixedWindowRateLimiter(
            config.rate_limit_max_requests,
            config.rate_limit_window_seconds,
        )

        super().__init__("weather", config)

        self._setup_weather_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.weather_service = self

    def _setup_middleware(self):
        # Added first so it runs inside the request logging middleware
        self.app.add_middleware(
            RateLimitMiddleware,
            rate_limiter=self.rate_limiter,
            trust_proxy=self.config.rate_limit_trust_proxy,
        )
        super()._setup_middleware()

    def _setup_weather_routes(self):
        """Set up weather routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "message": "Weather API is running!",
                "endpoints": {
                    "weather": "/weather/{city}",
                    "example": "/weather/london",
                    "health": "/health"
                }
            }

        @self.app.get("/weather/{city}")
        @self.app.get("/api/weather/{city}", include_in_schema=False)
        async def get_weather(city: str):
            """Weather for a city, served from cache when possible."""
            result = await self.lookup_handler.lookup(city)
            cache_header = "HIT" if result.source is LookupSource.CACHE else "MISS"
            return JSONResponse(
                status_code=200,
                content=result.payload,
                headers={"X-Cache": cache_header}
            )

    async def _startup(self) -> None:
        await self.cache.connect()

    async def _shutdown(self) -> None:
        await self.lookup_handler.drain()
        await self.cache.close()

    async def _check_dependencies(self) -> Dict[str, str]:
        cache_state = self.cache.get_state()
        provider_state = self.provider.get_state()
        return {
            "cache": cache_state["state"],
            "weather_provider": "configured" if provider_state["credential_configured"] else "missing_credential",
        }


def create_app(config: Optional[GatewayConfig] = None):
    """Create FastAPI application."""
    service = WeatherGatewayService(config)
    return service.app


def main():
    WeatherGatewayService().run()


if __name__ == "__main__":
    main()
