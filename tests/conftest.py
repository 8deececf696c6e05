"""Shared fixtures for eventwindow tests."""

from collections.abc import Generator
from typing import Any

import pytest

from eventwindow.diagnostics import CollectingDiagnosticSink

# 2023-11-14T22:13:20Z, a Tuesday
ANCHOR = 1700000000
HOUR = 3600


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "smoke: Basic smoke tests")


@pytest.fixture
def sink() -> CollectingDiagnosticSink:
    """In-memory diagnostic sink for asserting on engine failures."""
    return CollectingDiagnosticSink()


@pytest.fixture
def one_hour_event() -> dict[str, int]:
    """Event interval anchored at ANCHOR lasting one hour."""
    return {"startTime": ANCHOR, "endTime": ANCHOR + HOUR}


@pytest.fixture(autouse=True)
def reset_default_sink() -> Generator[None, Any, None]:
    """Reset the process-wide diagnostic sink so rate limits do not leak between tests."""
    yield
    import eventwindow.diagnostics

    eventwindow.diagnostics._default_sink = None


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear EVENTWINDOW_* variables so host settings cannot affect tests."""
    for key in (
        "EVENTWINDOW_DEBUG",
        "EVENTWINDOW_LOG_LEVEL",
        "EVENTWINDOW_DISPLAY_TIMEZONE",
        "EVENTWINDOW_EXCLUDE_EXCEPTIONS",
        "EVENTWINDOW_DIAGNOSTIC_RATE_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)
    yield
