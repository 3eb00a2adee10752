"""
One-way circuit breaker for optional dependencies.

Unlike a classic breaker there is no half-open state: once tripped the
dependency stays disabled until the process restarts.
"""

import time
from enum import Enum
from typing import Dict, Any, Optional

from shared.logging import get_logger


class BreakerState(Enum):
    """Dependency connection states."""
    DISCONNECTED = "disconnected"  # Not yet connected
    AVAILABLE = "available"        # Handshake succeeded
    TRIPPED = "tripped"            # Failed; terminal
    DISABLED = "disabled"          # Never configured; terminal


TERMINAL_STATES = (BreakerState.TRIPPED, BreakerState.DISABLED)


class OneWayBreaker:
    """Tracks whether a dependency may be used."""

    def __init__(self, name: str, enabled: bool = True):
        self.name = name
        self.logger = get_logger(f"weather.breaker.{name}")

        self._state = BreakerState.DISCONNECTED if enabled else BreakerState.DISABLED
        self._tripped_at: Optional[float] = None
        self._trip_reason: Optional[str] = None

    @property
    def state(self) -> BreakerState:
        return self._state

    @property
    def is_available(self) -> bool:
        return self._state is BreakerState.AVAILABLE

    @property
    def can_connect(self) -> bool:
        """Only a dependency that has never been tried may connect."""
        return self._state is BreakerState.DISCONNECTED

    def mark_available(self) -> bool:
        """Record a successful handshake. Ignored once terminal."""
        if self._state is not BreakerState.DISCONNECTED:
            return False
        self._state = BreakerState.AVAILABLE
        return True

    def trip(self, reason: str) -> bool:
        """Disable the dependency for the rest of the process lifetime.

        Returns True only for the call that performed the transition.
        """
        if self._state in TERMINAL_STATES:
            return False

        self._state = BreakerState.TRIPPED
        self._tripped_at = time.time()
        self._trip_reason = reason
        self.logger.warning("Breaker tripped; dependency disabled", reason=reason)
        return True

    def get_state(self) -> Dict[str, Any]:
        """Get current breaker state."""
        return {
            "name": self.name,
            "state": self._state.value,
            "tripped_at": self._tripped_at,
            "trip_reason": self._trip_reason,
        }
