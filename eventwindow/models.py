"""Data models for recurrence evaluation and upstream calendar records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TimeInterval(BaseModel):
    """Closed interval of epoch seconds.

    Degenerate intervals (``end_time < start_time``) are representable so the
    engine can classify them instead of failing at construction time.
    """

    start_time: int
    end_time: int

    model_config = ConfigDict(frozen=True)

    @property
    def duration(self) -> int:
        """Length of the interval in seconds (may be zero)."""
        return self.end_time - self.start_time

    @property
    def is_degenerate(self) -> bool:
        return self.end_time < self.start_time

    def contains(self, other: TimeInterval) -> bool:
        """Return True if ``other`` lies fully inside this interval (inclusive)."""
        return other.start_time >= self.start_time and other.end_time <= self.end_time

    def widened_before(self, seconds: int) -> TimeInterval:
        """Return a copy whose start moves ``seconds`` earlier."""
        return TimeInterval(start_time=self.start_time - max(seconds, 0), end_time=self.end_time)

    @classmethod
    def coerce(cls, value: Union[TimeInterval, dict[str, Any]]) -> TimeInterval:
        """Build an interval from a model or a ``startTime``/``start_time`` mapping."""
        if isinstance(value, TimeInterval):
            return value
        start = value["startTime"] if "startTime" in value else value["start_time"]
        end = value["endTime"] if "endTime" in value else value["end_time"]
        return cls(start_time=int(start), end_time=int(end))


# Windows and event intervals share one shape
QueryWindow = TimeInterval


@dataclass(frozen=True)
class Occurrence:
    """One generated instance of a recurring event."""

    start: int
    end: int

    @classmethod
    def from_start(cls, start: int, duration: int) -> Occurrence:
        return cls(start=start, end=start + duration)


class EventTimeInfo(BaseModel):
    """Start or end time block as delivered by the upstream calendar service."""

    timestamp: Optional[Union[str, int]] = None
    timezone: Optional[str] = None
    date: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    def as_epoch_seconds(self) -> Optional[int]:
        """Return the timestamp as an int, or None when missing or unparsable."""
        if self.timestamp is None or self.timestamp == "":
            return None
        try:
            return int(self.timestamp)
        except (TypeError, ValueError):
            return None


class EventOrganizer(BaseModel):
    display_name: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class CalendarEventRecord(BaseModel):
    """Raw event record from the upstream calendar service.

    Only the status, recurrence and interval fields drive visibility; the
    remaining fields are carried through for formatting.
    """

    event_id: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    recurrence: Optional[str] = None
    is_exception: bool = False
    start_time: EventTimeInfo = Field(default_factory=EventTimeInfo)
    end_time: EventTimeInfo = Field(default_factory=EventTimeInfo)
    event_organizer: EventOrganizer = Field(default_factory=EventOrganizer)

    model_config = ConfigDict(extra="allow")

    @field_validator("is_exception", mode="before")
    @classmethod
    def null_is_not_exception(cls, value: Any) -> Any:
        # Upstream sends null for ordinary events
        return False if value is None else value

    @field_validator("start_time", "end_time", "event_organizer", mode="before")
    @classmethod
    def null_block_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalendarEventRecord:
        return cls.model_validate(data)

    @property
    def has_recurrence(self) -> bool:
        return bool(self.recurrence and self.recurrence.strip())

    @property
    def is_cancelled(self) -> bool:
        return (self.status or "").lower() == "cancelled"

    @property
    def start_timestamp(self) -> Optional[int]:
        return self.start_time.as_epoch_seconds()

    @property
    def end_timestamp(self) -> Optional[int]:
        return self.end_time.as_epoch_seconds()

    def time_interval(self) -> TimeInterval:
        """Event interval with missing timestamps read as 0."""
        return TimeInterval(
            start_time=self.start_timestamp or 0,
            end_time=self.end_timestamp or 0,
        )
