"""
Shared error handling for the Weather Gateway.

Only upstream-originated failures and rate limiting reach the HTTP
boundary; cache failures are absorbed inside the cache adapter.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


WEATHER_API_KEY_HINT = "Get a free API key from https://www.visualcrossing.com/weather-api"


class ErrorResponse(BaseModel):
    """Error body returned to HTTP callers."""

    message: str
    hint: Optional[str] = None
    error: Optional[Any] = None


class WeatherGatewayException(Exception):
    """Base exception for the Weather Gateway."""

    status_code: int = 500

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(message=self.message)


class InvalidCredentialError(WeatherGatewayException):
    """The upstream provider rejected the configured credential."""

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid API key. Please check your WEATHER_API_KEY in .env file",
        hint: Optional[str] = WEATHER_API_KEY_HINT,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("INVALID_CREDENTIAL", message, details)
        self.hint = hint

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(message=self.message, hint=self.hint)


class UpstreamFetchError(WeatherGatewayException):
    """Generic failure fetching weather data from the upstream provider."""

    status_code = 500

    def __init__(
        self,
        error: Any,
        message: str = "Error fetching weather data",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("UPSTREAM_FETCH_ERROR", message, details)
        self.error = error

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(message=self.message, error=self.error)


class RateLimitError(WeatherGatewayException):
    """Rate limiting errors."""

    status_code = 429

    def __init__(
        self,
        message: str = "Too many requests, please try again later.",
        retry_after: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("RATE_LIMIT_ERROR", message, details)
        self.retry_after = retry_after
