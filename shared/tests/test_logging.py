"""
Tests for shared logging configuration.
"""

import json
import logging
from datetime import datetime

from shared.logging import build_processors, clear_context, set_request_id


def _render(service_name: str, logger_name: str, event_dict):
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)
    for processor in build_processors(service_name):
        event_dict = processor(logger, "info", event_dict)
    return json.loads(event_dict)


def test_timestamp_stays_iso():
    rendered = _render("weather", "weather.cache", {"event": "hello"})

    timestamp = rendered["timestamp"]
    assert isinstance(timestamp, str)
    parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    assert parsed.tzinfo is not None


def test_service_name_is_bound():
    rendered = _render("weather", "uvicorn.error", {"event": "hello"})

    assert rendered["service"] == "weather"
    assert rendered["logger"] == "uvicorn.error"
    assert rendered["level"] == "info"


def test_request_id_is_added():
    request_id = set_request_id("req-123")
    try:
        rendered = _render("weather", "weather.lookup", {"event": "hello"})
    finally:
        clear_context()

    assert rendered["request_id"] == request_id
