"""Human-readable rendering of filtered event lists."""

from __future__ import annotations

import json
import zoneinfo
from collections.abc import Sequence
from datetime import UTC, datetime, tzinfo
from typing import Any, Optional

from .models import CalendarEventRecord

NO_EVENTS_MESSAGE = "No active events found in the given time range"


def _isoformat(timestamp: Optional[int], tz: tzinfo) -> str:
    return datetime.fromtimestamp(timestamp or 0, UTC).astimezone(tz).isoformat()


def format_event(record: CalendarEventRecord, tz: tzinfo = UTC) -> dict[str, Any]:
    """Project a record onto the listing fields."""
    return {
        "summary": record.summary or "",
        "organizer": record.event_organizer.display_name or "",
        "status": record.status or "unknown",
        "startTime": _isoformat(record.start_timestamp, tz),
        "endTime": _isoformat(record.end_timestamp, tz),
    }


def render_event_list(records: Sequence[CalendarEventRecord], timezone: str = "UTC") -> str:
    """Render visible events as the text block returned to the user.

    Args:
        records: Visible events
        timezone: IANA timezone used for start/end times

    Returns:
        Summary line followed by the JSON listing, or a no-events message
    """
    if not records:
        return NO_EVENTS_MESSAGE

    tz = zoneinfo.ZoneInfo(timezone)
    formatted = [format_event(r, tz) for r in records]
    return f"Found {len(records)} active events:\n\n{json.dumps(formatted, indent=2, ensure_ascii=False)}"
