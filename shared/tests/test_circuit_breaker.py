"""
Tests for the one-way circuit breaker.
"""

from shared.circuit_breaker import BreakerState, OneWayBreaker


def test_starts_disconnected():
    breaker = OneWayBreaker("cache")

    assert breaker.state is BreakerState.DISCONNECTED
    assert breaker.is_available is False
    assert breaker.can_connect is True


def test_handshake_makes_available():
    breaker = OneWayBreaker("cache")

    assert breaker.mark_available() is True
    assert breaker.is_available is True
    assert breaker.can_connect is False


def test_trip_is_permanent():
    breaker = OneWayBreaker("cache")
    breaker.mark_available()

    assert breaker.trip("get: connection reset") is True
    assert breaker.trip("set: connection reset") is False
    assert breaker.mark_available() is False
    assert breaker.state is BreakerState.TRIPPED
    assert breaker.can_connect is False

    state = breaker.get_state()
    assert state["state"] == "tripped"
    assert state["trip_reason"] == "get: connection reset"
    assert state["tripped_at"] is not None


def test_disabled_breaker_never_becomes_available():
    breaker = OneWayBreaker("cache", enabled=False)

    assert breaker.can_connect is False
    assert breaker.mark_available() is False
    assert breaker.trip("ignored") is False
    assert breaker.state is BreakerState.DISABLED
