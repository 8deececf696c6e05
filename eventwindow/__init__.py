"""eventwindow - recurring event visibility for calendar query windows.

Public entry points:

- ``is_recurrence_in_range``: does any occurrence of a recurring event overlap a window
- ``EventFilter``: batch visibility filter over upstream event records
"""

__version__ = "0.1.0"

from typing import Optional

from .event_filter import EventFilter
from .models import CalendarEventRecord, Occurrence, QueryWindow, TimeInterval
from .recurrence_engine import is_recurrence_in_range

__all__ = [
    "CalendarEventRecord",
    "EventFilter",
    "Occurrence",
    "QueryWindow",
    "TimeInterval",
    "is_recurrence_in_range",
]


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Honors the EVENTWINDOW_DEBUG environment variable (truthy values: "1",
    "true", "yes", "on"), which forces DEBUG verbosity.
    """
    import logging
    import os
    import sys

    from colorlog import ColoredFormatter

    debug_env = os.environ.get("EVENTWINDOW_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure a handler once to avoid duplicate output
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   logger.name: message
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        candidate = getattr(logging, level_name.upper(), logging.INFO)
        level = candidate if isinstance(candidate, int) else logging.INFO
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )
