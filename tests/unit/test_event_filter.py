"""Unit tests for eventwindow.event_filter."""

import pytest

from eventwindow.event_filter import EventFilter
from eventwindow.models import CalendarEventRecord, TimeInterval

pytestmark = pytest.mark.unit

ANCHOR = 1700000000
HOUR = 3600
DAY = 86400


def _record(event_id, start, end, status="confirmed", recurrence="", **extra):
    data = {
        "event_id": event_id,
        "summary": event_id.title(),
        "status": status,
        "recurrence": recurrence,
        "start_time": {"timestamp": str(start)},
        "end_time": {"timestamp": str(end)},
    }
    data.update(extra)
    return data


class TestEventFilter:
    """Tests for EventFilter.filter_events."""

    def setup_method(self):
        self.window = TimeInterval(start_time=ANCHOR + DAY, end_time=ANCHOR + 2 * DAY)

    def _ids(self, records):
        return [r.event_id for r in records]

    @pytest.mark.smoke
    def test_mixed_batch(self, sink):
        events = [
            _record("inside", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR),
            _record("before", ANCHOR, ANCHOR + HOUR),
            _record("daily", ANCHOR, ANCHOR + HOUR, recurrence="FREQ=DAILY;COUNT=5"),
            _record("cancelled", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR, status="cancelled"),
        ]

        visible = EventFilter(diagnostics=sink).filter_events(events, self.window)

        assert self._ids(visible) == ["inside", "daily"]
        assert all(isinstance(r, CalendarEventRecord) for r in visible)

    def test_non_recurring_requires_full_containment(self, sink):
        # Starts inside the window but ends after it
        events = [_record("partial", ANCHOR + 2 * DAY - HOUR, ANCHOR + 2 * DAY + HOUR)]

        assert EventFilter(diagnostics=sink).filter_events(events, self.window) == []

    def test_recurring_needs_only_partial_overlap(self, sink):
        # Daily occurrences straddle both window edges
        start = ANCHOR - HOUR
        events = [_record("late", start, start + 2 * HOUR, recurrence="FREQ=DAILY")]

        assert self._ids(EventFilter(diagnostics=sink).filter_events(events, self.window)) == ["late"]

    def test_non_recurring_exact_window_is_contained(self, sink):
        events = [_record("exact", self.window.start_time, self.window.end_time)]

        assert self._ids(EventFilter(diagnostics=sink).filter_events(events, self.window)) == ["exact"]

    def test_cancelled_recurring_is_excluded(self, sink):
        events = [_record("gone", ANCHOR, ANCHOR + HOUR, status="cancelled", recurrence="FREQ=DAILY")]

        assert EventFilter(diagnostics=sink).filter_events(events, self.window) == []

    def test_malformed_rule_does_not_abort_batch(self, sink):
        events = [
            _record("broken", ANCHOR, ANCHOR + HOUR, recurrence="FREQ=SOMETIMES"),
            _record("inside", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR),
        ]

        visible = EventFilter(diagnostics=sink).filter_events(events, self.window)

        assert self._ids(visible) == ["inside"]
        assert sink.codes() == ["rrule.parse.failed"]

    def test_missing_timestamps_excluded_for_single_events(self, sink):
        events = [{"event_id": "no-times", "status": "confirmed"}]

        assert EventFilter(diagnostics=sink).filter_events(events, self.window) == []

    def test_malformed_record_is_skipped(self, sink, caplog):
        events = [
            {"event_id": "bad", "start_time": 5},
            _record("inside", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR),
        ]

        with caplog.at_level("WARNING"):
            visible = EventFilter(diagnostics=sink).filter_events(events, self.window)

        assert self._ids(visible) == ["inside"]
        assert "Skipping malformed event record" in caplog.text

    def test_degenerate_single_event_is_excluded(self, sink):
        events = [_record("reversed", ANCHOR + DAY + 100, ANCHOR + DAY)]
        window = TimeInterval(start_time=ANCHOR + DAY + 50, end_time=ANCHOR + DAY + 60)

        assert EventFilter(diagnostics=sink).filter_events(events, window) == []

    def test_null_exception_flag_is_not_an_exception(self, sink):
        events = [_record("plain", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR, is_exception=None)]

        for exclude in (False, True):
            event_filter = EventFilter(diagnostics=sink, exclude_exceptions=exclude)
            assert self._ids(event_filter.filter_events(events, self.window)) == ["plain"]

    def test_null_organizer_is_accepted(self, sink):
        events = [_record("plain", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR, event_organizer=None)]

        visible = EventFilter(diagnostics=sink).filter_events(events, self.window)

        assert self._ids(visible) == ["plain"]
        assert visible[0].event_organizer.display_name is None

    def test_exception_instances_kept_by_default(self, sink):
        events = [_record("moved", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR, is_exception=True)]

        assert self._ids(EventFilter(diagnostics=sink).filter_events(events, self.window)) == ["moved"]

    def test_exception_instances_dropped_when_configured(self, sink):
        events = [_record("moved", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR, is_exception=True)]

        event_filter = EventFilter(diagnostics=sink, exclude_exceptions=True)

        assert event_filter.filter_events(events, self.window) == []

    def test_accepts_models_and_window_mapping(self, sink):
        record = CalendarEventRecord.from_dict(
            _record("inside", ANCHOR + DAY + HOUR, ANCHOR + DAY + 2 * HOUR)
        )
        window = {"startTime": self.window.start_time, "endTime": self.window.end_time}

        visible = EventFilter(diagnostics=sink).filter_events([record], window)

        assert visible == [record]

    def test_empty_batch(self, sink):
        assert EventFilter(diagnostics=sink).filter_events([], self.window) == []
