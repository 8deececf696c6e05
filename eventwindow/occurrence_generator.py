"""Lazy RRULE occurrence generation clipped to a query window."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, timedelta

from dateutil.rrule import rrulestr

from .exceptions import RRuleParseError
from .models import TimeInterval

logger = logging.getLogger(__name__)


EPOCH = datetime(1970, 1, 1)


def epoch_to_utc(seconds: int) -> datetime:
    """Convert epoch seconds to a naive UTC datetime."""
    return EPOCH + timedelta(seconds=seconds)


def utc_to_epoch(dt: datetime) -> int:
    """Convert a naive UTC datetime back to epoch seconds."""
    return (dt - EPOCH) // timedelta(seconds=1)


# Epoch seconds representable as datetime
MIN_EPOCH = utc_to_epoch(datetime.min)
MAX_EPOCH = utc_to_epoch(datetime.max)


class OccurrenceGenerator:
    """Expands a normalized rule into occurrence starts inside a window.

    All datetimes handed to dateutil are naive UTC and the rule is parsed with
    ``ignoretz=True``, so an UNTIL value is read as UTC whether or not it
    carries a ``Z`` suffix.
    """

    def parse(self, normalized_rule: str, anchor: int):
        """Parse ``normalized_rule`` anchored at epoch second ``anchor``.

        Raises:
            RRuleParseError: If dateutil rejects the rule
        """
        try:
            return rrulestr(normalized_rule, dtstart=epoch_to_utc(anchor), ignoretz=True)
        except (ValueError, TypeError, KeyError, IndexError, OverflowError) as e:
            raise RRuleParseError(f"Invalid RRULE format: {normalized_rule}") from e

    def occurrences(
        self,
        normalized_rule: str,
        anchor: int,
        window: TimeInterval,
    ) -> Iterator[int]:
        """Yield occurrence starts ``t`` with ``window.start_time <= t <= window.end_time``.

        Occurrences are produced one at a time from the first instant at or
        after the window start, and iteration stops at the first instant past
        the window end, so unbounded rules never run away.

        Args:
            normalized_rule: Rule text with the ``RRULE:`` prefix
            anchor: Event start, epoch seconds (the rule's DTSTART)
            window: Inclusive generation bounds

        Yields:
            Occurrence start instants in ascending order, epoch seconds
        """
        rule = self.parse(normalized_rule, anchor)

        if anchor > window.end_time:
            logger.debug("Anchor %d is after window end %d; no occurrences", anchor, window.end_time)
            return
        if window.start_time > MAX_EPOCH or window.end_time < MIN_EPOCH:
            return

        # Open-ended bounds beyond the datetime range are clamped, not rejected
        window_start = epoch_to_utc(max(window.start_time, MIN_EPOCH))
        window_end = epoch_to_utc(min(window.end_time, MAX_EPOCH))

        try:
            for occurrence in rule.xafter(window_start, inc=True):
                if occurrence > window_end:
                    break
                yield utc_to_epoch(occurrence)
        except (ValueError, TypeError, OverflowError) as e:
            raise RRuleParseError(f"Failed to expand RRULE: {normalized_rule}") from e
