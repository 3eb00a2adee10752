"""
Test helper functions and factory methods for the Weather Gateway.
"""

from typing import Dict, Any, Optional, List


class InMemoryRedis:
    """Dict-backed stand-in for a ``redis.asyncio.Redis`` client.

    Records every call so tests can assert that no network operation was
    attempted. Set ``fail_on`` to an operation name to make it raise.
    """

    def __init__(self, fail_on: Optional[str] = None, error: Optional[Exception] = None):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.calls: List[str] = []
        self.fail_on = fail_on
        self.error = error or ConnectionError("Connection refused")
        self.closed = False

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_on == operation:
            raise self.error

    async def ping(self) -> bool:
        self._record("ping")
        return True

    async def get(self, key: str) -> Optional[str]:
        self._record("get")
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> bool:
        self._record("set")
        self.store[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    async def aclose(self) -> None:
        self.calls.append("aclose")
        self.closed = True

    def network_calls(self) -> List[str]:
        """Calls that would have reached the store."""
        return [call for call in self.calls if call != "aclose"]


class TestDataFactory:
    """Factory for creating test data."""

    __test__ = False

    @staticmethod
    def create_weather_payload(city: str = "london") -> Dict[str, Any]:
        """Create a payload shaped like a Visual Crossing timeline response."""
        return {
            "queryCost": 1,
            "latitude": 51.5064,
            "longitude": -0.12721,
            "resolvedAddress": f"{city.title()}, England, United Kingdom",
            "address": city,
            "timezone": "Europe/London",
            "tzoffset": 1.0,
            "days": [
                {
                    "datetime": "2024-06-01",
                    "tempmax": 68.2,
                    "tempmin": 52.1,
                    "temp": 60.4,
                    "humidity": 71.3,
                    "conditions": "Partially cloudy"
                },
                {
                    "datetime": "2024-06-02",
                    "tempmax": 70.0,
                    "tempmin": 54.9,
                    "temp": 62.1,
                    "humidity": 65.0,
                    "conditions": "Clear"
                }
            ]
        }


class TestEnvironment:
    """Test environment configuration."""

    __test__ = False

    @staticmethod
    def get_mock_config() -> Dict[str, Any]:
        """Get configuration overrides for tests."""
        return {
            "env": "test",
            "log_level": "debug",
            "weather_api_key": "test-key",
            "weather_api_base_url": "http://weather.test/timeline",
            "redis_url": None,
            "cache_ttl_seconds": 6000,
            "rate_limit_max_requests": 50,
            "rate_limit_window_seconds": 3600,
        }


# Global instances for easy access
test_data_factory = TestDataFactory()
test_environment = TestEnvironment()
