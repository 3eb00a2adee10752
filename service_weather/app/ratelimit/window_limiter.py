"""
Per-client request window limiter for the Weather Gateway.
"""

import math
import time
from typing import Callable, Dict, Any, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.logging import get_logger
from shared.errors import RateLimitError


class FixedWindowRateLimiter:
    """In-process fixed-window request counter.

    Each client gets ``max_requests`` per ``window_seconds``, counted from
    its first request in the window. Counters are only touched between
    awaits, so a single event loop needs no lock.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0 or window_seconds <= 0:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self.logger = get_logger("weather.rate_limiter")

        # client_id -> (window_start, count)
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()

    def check_rate_limit(self, client_id: str) -> Dict[str, Any]:
        """Count one request for client_id and report whether it is allowed."""
        now = self._clock()
        self._sweep(now)

        window_start, count = self._windows.get(client_id, (now, 0))
        if now - window_start >= self.window_seconds:
            window_start, count = now, 0

        reset_in = max(1, math.ceil(window_start + self.window_seconds - now))

        if count >= self.max_requests:
            self.logger.warning(
                "Rate limit exceeded",
                client_id=client_id,
                current_count=count,
                limit=self.max_requests
            )
            return {
                "allowed": False,
                "current_count": count,
                "limit": self.max_requests,
                "remaining": 0,
                "reset_in_seconds": reset_in,
                "retry_after": reset_in
            }

        count += 1
        self._windows[client_id] = (window_start, count)
        return {
            "allowed": True,
            "current_count": count,
            "limit": self.max_requests,
            "remaining": self.max_requests - count,
            "reset_in_seconds": reset_in
        }

    def reset_rate_limit(self, client_id: str) -> bool:
        """Forget the window for client_id."""
        return self._windows.pop(client_id, None) is not None

    def _sweep(self, now: float) -> None:
        """Drop expired windows at most once per window length."""
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [
            client_id for client_id, (start, _) in self._windows.items()
            if now - start >= self.window_seconds
        ]
        for client_id in expired:
            del self._windows[client_id]

    def get_global_stats(self) -> Dict[str, Any]:
        """Get rate limiting statistics."""
        total_requests = sum(count for _, count in self._windows.values())
        return {
            "total_clients": len(self._windows),
            "total_requests": total_requests,
            "limit": self.max_requests,
            "window_seconds": self.window_seconds
        }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the limiter uniformly to every route."""

    def __init__(self, app, rate_limiter: FixedWindowRateLimiter, trust_proxy: bool = False):
        super().__init__(app)
        self.rate_limiter = rate_limiter
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next):
        result = self.rate_limiter.check_rate_limit(self._get_client_id(request))

        if not result["allowed"]:
            error = RateLimitError(retry_after=result["retry_after"])
            response = JSONResponse(
                status_code=error.status_code,
                content=error.to_response().model_dump(exclude_none=True),
                headers={"Retry-After": str(error.retry_after)}
            )
        else:
            response = await call_next(request)

        self._set_rate_limit_headers(response, result)
        return response

    def _set_rate_limit_headers(self, response, rate_result: Dict[str, Any]) -> None:
        """Propagate rate limiting metadata via standard headers."""
        response.headers["X-RateLimit-Limit"] = str(rate_result["limit"])
        response.headers["X-RateLimit-Remaining"] = str(rate_result["remaining"])
        response.headers["X-RateLimit-Reset"] = str(rate_result["reset_in_seconds"])

    def _get_client_id(self, request: Request) -> str:
        """Extract client ID from request."""
        if self.trust_proxy:
            forwarded_for = request.headers.get('X-Forwarded-For')
            if forwarded_for:
                return forwarded_for.split(',')[0].strip()

            real_ip = request.headers.get('X-Real-IP')
            if real_ip:
                return real_ip

        return request.client.host if request.client else 'unknown'
