"""
Weather gateway caching package.

The cache is an optimization only: it degrades to "no cache" on the first
store failure and never fails a lookup.
"""

from .weather_cache import WeatherCache

__all__ = ["WeatherCache"]
