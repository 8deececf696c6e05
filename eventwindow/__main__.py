"""Command-line entry for eventwindow.

Reads upstream event records as JSON, keeps the ones visible in the
requested window and prints the listing.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, NoReturn, Optional

from dateutil.parser import isoparse

from . import _init_logging
from .config_loader import load_config
from .config_manager import ConfigManager
from .diagnostics import LoggingDiagnosticSink
from .event_filter import EventFilter
from .event_formatter import render_event_list
from .exceptions import ConfigError
from .logging_config import configure_logging, get_logging_status
from .models import TimeInterval

logger = logging.getLogger(__name__)

EXIT_USAGE = 2


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the eventwindow CLI."""
    parser = argparse.ArgumentParser(
        prog="eventwindow",
        description="List calendar events visible in a time window, recurring events included",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  eventwindow --events events.json --start 2024-01-08T00:00:00Z --end 2024-01-09T00:00:00Z
  cat events.json | eventwindow --events - --start 2024-01-08 --end 2024-01-15
        """,
    )
    parser.add_argument(
        "--events",
        required=True,
        metavar="PATH",
        help="JSON file with a list of event records or {\"items\": [...]} ('-' for stdin)",
    )
    parser.add_argument("--start", required=True, metavar="ISO", help="Window start (ISO 8601)")
    parser.add_argument("--end", required=True, metavar="ISO", help="Window end (ISO 8601)")
    parser.add_argument("--config", metavar="PATH", help="YAML or JSON config file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def iso_to_epoch(value: str) -> int:
    """Convert an ISO 8601 string to epoch seconds; naive values are UTC.

    Raises:
        ValueError: If the value is not ISO 8601
    """
    dt = isoparse(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())


def read_event_records(path: str) -> list[dict[str, Any]]:
    """Read event records from ``path`` (or stdin for '-').

    Raises:
        ValueError: If the content is not a list of records or an ``items`` mapping
    """
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)

    if isinstance(data, dict):
        data = data.get("items") or []
    if not isinstance(data, list):
        raise ValueError("Event input must be a JSON list or an object with an 'items' list")
    return [item for item in data if isinstance(item, dict)]


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the eventwindow CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    env_overrides = ConfigManager().load_full_config()
    _init_logging(env_overrides.get("log_level"))

    try:
        cfg = load_config(args.config, overrides=env_overrides)
    except (ConfigError, OSError) as exc:
        logger.error("Failed to load configuration: %s", exc)
        sys.exit(EXIT_USAGE)

    configure_logging(debug_mode=args.debug)
    if not args.debug:
        logging.getLogger().setLevel(getattr(logging, cfg.log_level, logging.INFO))
    logger.debug("Logging levels: %s", get_logging_status())

    try:
        window = TimeInterval(start_time=iso_to_epoch(args.start), end_time=iso_to_epoch(args.end))
    except (ValueError, OverflowError) as exc:
        logger.error("Invalid window bounds %r..%r: %s", args.start, args.end, exc)
        sys.exit(EXIT_USAGE)

    try:
        records = read_event_records(args.events)
    except (OSError, ValueError) as exc:
        logger.error("Failed to read events from %s: %s", args.events, exc)
        sys.exit(EXIT_USAGE)

    event_filter = EventFilter(
        diagnostics=LoggingDiagnosticSink(max_per_minute=cfg.diagnostic_rate_limit_per_minute),
        exclude_exceptions=cfg.exclude_exceptions,
    )
    visible = event_filter.filter_events(records, window)
    logger.info(
        "%d of %d events visible between %s and %s",
        len(visible),
        len(records),
        datetime.fromtimestamp(window.start_time, UTC).isoformat(),
        datetime.fromtimestamp(window.end_time, UTC).isoformat(),
    )

    print(render_event_list(visible, cfg.display_timezone))
    sys.exit(0)


if __name__ == "__main__":
    main()
