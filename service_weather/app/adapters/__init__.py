"""
Adapters package for the Weather Gateway.

Holds the HTTP client for the upstream weather provider. Adapters map
provider failures onto shared errors and keep no state between calls.
"""

from .weather_provider_client import WeatherProviderClient

__all__ = ["WeatherProviderClient"]
