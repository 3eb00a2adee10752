"""
Weather Gateway service package.

The gateway forwards city weather lookups to the upstream provider:
- Caching: optional Redis store behind a one-way breaker (fail-open)
- Rate limiting: fixed request budget per client on every route

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: HTTP client for the weather provider.
- app.caching: Fail-open Redis cache.
- app.domain: Cache-fallback lookup policy.
- app.ratelimit: Window limiter and middleware.
"""
