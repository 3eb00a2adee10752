"""
Domain logic for the Weather Gateway: the cache-fallback lookup policy.
"""

from .lookup_handler import LookupResult, LookupSource, WeatherLookupHandler

__all__ = ["LookupResult", "LookupSource", "WeatherLookupHandler"]
