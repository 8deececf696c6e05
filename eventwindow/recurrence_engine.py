"""Recurrence overlap engine.

Decides whether any occurrence of a recurring event intersects a query
window. This module is the failure boundary: every error raised while
normalizing, generating or classifying is reported to a diagnostic sink and
resolved to ``False`` for that event alone.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .diagnostics import DiagnosticEvent, DiagnosticSink, get_default_sink
from .exceptions import DegenerateIntervalError, RecurrenceEvaluationError, RRuleParseError
from .models import Occurrence, TimeInterval
from .occurrence_generator import OccurrenceGenerator
from .overlap import classify_occurrence
from .rrule_normalizer import normalize_rrule

logger = logging.getLogger(__name__)

IntervalLike = Union[TimeInterval, dict[str, Any]]

_generator = OccurrenceGenerator()


def _check_interval(interval: TimeInterval, name: str) -> None:
    if interval.is_degenerate:
        raise DegenerateIntervalError(
            f"{name} ends before it starts ({interval.end_time} < {interval.start_time})"
        )


def _evaluate(recurrence_rule: str, event_time: TimeInterval, check_range: TimeInterval) -> bool:
    _check_interval(event_time, "event interval")
    _check_interval(check_range, "check range")

    normalized = normalize_rrule(recurrence_rule)
    duration = event_time.duration

    # Occurrences starting up to one duration before the window can still end
    # inside it or span it
    generation_window = check_range.widened_before(duration)

    for start in _generator.occurrences(normalized, event_time.start_time, generation_window):
        occurrence = Occurrence.from_start(start, duration)
        policy = classify_occurrence(occurrence, check_range)
        if policy is not None:
            logger.debug(
                "Occurrence %d-%d overlaps window %d-%d (%s)",
                occurrence.start,
                occurrence.end,
                check_range.start_time,
                check_range.end_time,
                policy.value,
            )
            return True

    return False


def is_recurrence_in_range(
    recurrence_rule: Optional[str],
    event_time: IntervalLike,
    check_range: IntervalLike,
    diagnostics: Optional[DiagnosticSink] = None,
) -> bool:
    """Check whether any occurrence of a recurring event overlaps ``check_range``.

    Args:
        recurrence_rule: RFC 5545 RRULE text, with or without the ``RRULE:`` prefix
        event_time: Event start/end in epoch seconds; the start is the rule anchor
            and the difference is applied to every occurrence
        check_range: Window to test, epoch seconds, both bounds inclusive
        diagnostics: Sink for failure notifications (defaults to the logging sink)

    Returns:
        True if at least one occurrence starts in, ends in, or spans the window.
        False for an empty rule, an empty expansion, or any failure.
    """
    if not recurrence_rule:
        return False

    sink = diagnostics if diagnostics is not None else get_default_sink()

    try:
        event_interval = TimeInterval.coerce(event_time)
        window = TimeInterval.coerce(check_range)
        return _evaluate(recurrence_rule, event_interval, window)
    except RRuleParseError as e:
        code, component = "rrule.parse.failed", "normalizer"
        error: Exception = e
    except DegenerateIntervalError as e:
        code, component = "interval.degenerate", "engine"
        error = e
    except (KeyError, TypeError, ValueError) as e:
        code, component = "interval.invalid", "engine"
        error = e
    except Exception as e:
        code, component = "recurrence.evaluation.failed", "generator"
        error = RecurrenceEvaluationError(str(e))
        error.__cause__ = e

    logger.debug("Recurrence check failed for rule %r: %s", recurrence_rule, error)
    event = DiagnosticEvent(
        component=component,
        event=code,
        message=f"Error checking recurrence: {error}",
        details={
            "rule": recurrence_rule,
            "error_type": type(error).__name__,
        },
    )
    try:
        sink.emit(event)
    except Exception:
        logger.exception("Diagnostic sink failed while reporting %s", code)
    return False
