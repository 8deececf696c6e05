"""Batch visibility filter for upstream calendar event records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Optional, Union

from pydantic import ValidationError

from .diagnostics import DiagnosticSink
from .models import CalendarEventRecord, TimeInterval
from .recurrence_engine import is_recurrence_in_range

logger = logging.getLogger(__name__)

EventLike = Union[CalendarEventRecord, dict[str, Any]]


class EventFilter:
    """Decides which events are visible in a query window.

    Non-recurring events must lie fully inside the window. Recurring events
    only need one occurrence that overlaps it.
    """

    def __init__(
        self,
        diagnostics: Optional[DiagnosticSink] = None,
        exclude_exceptions: bool = False,
    ):
        """Initialize event filter.

        Args:
            diagnostics: Sink for recurrence engine failures (defaults to the logging sink)
            exclude_exceptions: Also drop records flagged ``is_exception``
                (detached, modified instances of a recurring series)
        """
        self.diagnostics = diagnostics
        self.exclude_exceptions = exclude_exceptions

    def is_event_visible(self, record: CalendarEventRecord, window: TimeInterval) -> bool:
        if record.is_cancelled:
            return False

        if self.exclude_exceptions and record.is_exception:
            return False

        if not record.has_recurrence:
            start, end = record.start_timestamp, record.end_timestamp
            if start is None or end is None:
                return False
            interval = TimeInterval(start_time=start, end_time=end)
            if interval.is_degenerate:
                logger.debug("Event %s ends before it starts; not visible", record.event_id)
                return False
            return window.contains(interval)

        return is_recurrence_in_range(
            record.recurrence,
            record.time_interval(),
            window,
            diagnostics=self.diagnostics,
        )

    def filter_events(
        self,
        events: Iterable[EventLike],
        window: Union[TimeInterval, dict[str, Any]],
    ) -> list[CalendarEventRecord]:
        """Return the visible events, preserving input order.

        Args:
            events: Records as models or raw upstream dictionaries
            window: Query window in epoch seconds

        Returns:
            List of records visible in the window
        """
        query_window = TimeInterval.coerce(window)
        visible = []
        total = 0

        for raw in events:
            total += 1
            try:
                record = (
                    raw
                    if isinstance(raw, CalendarEventRecord)
                    else CalendarEventRecord.from_dict(raw)
                )
            except (ValidationError, TypeError) as e:
                logger.warning("Skipping malformed event record: %s", e)
                continue

            if self.is_event_visible(record, query_window):
                visible.append(record)

        logger.debug(
            "Filtered %d of %d events for window %d-%d",
            len(visible),
            total,
            query_window.start_time,
            query_window.end_time,
        )
        return visible
