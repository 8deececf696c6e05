"""Overlap classification of a single occurrence against a window."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .models import Occurrence, TimeInterval


class OverlapPolicy(str, Enum):
    """Inclusive overlap clauses, checked in declaration order."""

    STARTS_IN_WINDOW = "starts_in_window"
    ENDS_IN_WINDOW = "ends_in_window"
    SPANS_WINDOW = "spans_window"


def classify_occurrence(occurrence: Occurrence, window: TimeInterval) -> Optional[OverlapPolicy]:
    """Return the first overlap clause ``occurrence`` satisfies, or None."""
    if window.start_time <= occurrence.start <= window.end_time:
        return OverlapPolicy.STARTS_IN_WINDOW
    if window.start_time <= occurrence.end <= window.end_time:
        return OverlapPolicy.ENDS_IN_WINDOW
    if occurrence.start <= window.start_time and occurrence.end >= window.end_time:
        return OverlapPolicy.SPANS_WINDOW
    return None


def occurrence_overlaps(occurrence: Occurrence, window: TimeInterval) -> bool:
    """Return True if ``occurrence`` satisfies any overlap clause for ``window``."""
    return classify_occurrence(occurrence, window) is not None
