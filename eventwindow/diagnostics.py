"""Diagnostic side channel for recurrence engine failures.

Failures inside the engine are reported here as structured entries and then
converted to a ``False`` visibility result. Sinks are fire-and-forget: a sink
must never raise back into the engine.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import defaultdict, deque
from datetime import UTC, datetime
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


class DiagnosticEvent:
    """Structured diagnostic entry with a consistent schema."""

    def __init__(
        self,
        component: str,
        event: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize diagnostic entry.

        Args:
            component: Emitting component (normalizer|generator|engine|filter)
            event: Short event code (e.g., "rrule.parse.failed")
            message: Human readable description
            details: Additional context data
        """
        self.timestamp = datetime.now(UTC)
        self.component = component
        self.event = event
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "component": self.component,
            "event": self.event,
            "message": self.message,
            "details": self.details,
            "schema_version": SCHEMA_VERSION,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str)


class DiagnosticSink(Protocol):
    """Receiver for engine failure notifications."""

    def emit(self, event: DiagnosticEvent) -> None: ...


class LoggingDiagnosticSink:
    """Writes diagnostic events as JSON to the ``eventwindow.diagnostics`` logger.

    Repeated events with the same code are rate limited per rolling minute so a
    batch full of malformed rules cannot flood the log.
    """

    def __init__(self, max_per_minute: int = 5, log: Optional[logging.Logger] = None):
        self.max_per_minute = max(1, max_per_minute)
        self._log = log or logger
        self._recent: dict[str, deque] = defaultdict(lambda: deque(maxlen=100))
        self._suppressed: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def _should_log(self, event_key: str) -> bool:
        with self._lock:
            now = time.time()
            events = self._recent[event_key]

            while events and now - events[0] > 60:
                events.popleft()

            if len(events) < self.max_per_minute:
                events.append(now)
                return True

            self._suppressed[event_key] += 1
            return False

    def suppressed_count(self, event_key: str) -> int:
        """Number of events dropped by rate limiting for ``event_key``."""
        with self._lock:
            return self._suppressed.get(event_key, 0)

    def emit(self, event: DiagnosticEvent) -> None:
        try:
            if self._should_log(event.event):
                self._log.warning(event.to_json())
        except Exception:
            # Last resort; the sink must not raise into the engine
            logger.debug("Failed to emit diagnostic %s", event.event, exc_info=True)


class CollectingDiagnosticSink:
    """Keeps diagnostic events in memory for later inspection."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def emit(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def codes(self) -> list[str]:
        return [e.event for e in self.events]


_default_sink: Optional[LoggingDiagnosticSink] = None


def get_default_sink() -> LoggingDiagnosticSink:
    """Get or create the process-wide logging sink."""
    global _default_sink
    if _default_sink is None:
        _default_sink = LoggingDiagnosticSink()
    return _default_sink
