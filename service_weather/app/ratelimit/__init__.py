"""
Rate limiting package for the Weather Gateway.

Holds the fixed-window limiter and the middleware that enforces a
per-client request budget on every route.
"""

from .window_limiter import FixedWindowRateLimiter, RateLimitMiddleware

__all__ = ["FixedWindowRateLimiter", "RateLimitMiddleware"]
