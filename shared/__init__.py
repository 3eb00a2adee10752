"""
Shared utilities for the Weather Gateway.

This package aggregates the common building blocks used by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- errors: Canonical error types and responses
- circuit_breaker: One-way breaker for optional dependencies
- base_service: FastAPI app scaffolding (middleware, health, error handlers)

Do not import from service packages into shared/.
"""
