"""
Central logging configuration for eventwindow.

Sets package logger levels and quiets third-party libraries while keeping
WARNING/ERROR output, including diagnostics from the recurrence engine.
"""

import logging
import os
from typing import Optional

PACKAGE_MODULES = [
    "eventwindow",
    "eventwindow.recurrence_engine",
    "eventwindow.occurrence_generator",
    "eventwindow.rrule_normalizer",
    "eventwindow.event_filter",
    "eventwindow.config_loader",
]

# Diagnostics are always emitted at WARNING; never silence them below that
DIAGNOSTICS_LOGGER = "eventwindow.diagnostics"

THIRD_PARTY_LEVELS: dict[str, int] = {
    "dateutil": logging.WARNING,
    "asyncio": logging.WARNING,
}


def configure_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for eventwindow modules.

    Args:
        debug_mode: Whether to enable debug logging for eventwindow modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        EVENTWINDOW_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        EVENTWINDOW_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("EVENTWINDOW_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("EVENTWINDOW_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)
    logging.getLogger().setLevel(root_level)

    logger_config = dict(THIRD_PARTY_LEVELS)
    package_level = logging.DEBUG if final_debug else logging.INFO
    for module in PACKAGE_MODULES:
        logger_config[module] = package_level
    logger_config[DIAGNOSTICS_LOGGER] = logging.DEBUG if final_debug else logging.WARNING

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s package=%s",
        logging.getLevelName(root_level),
        logging.getLevelName(package_level),
    )


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ["eventwindow", DIAGNOSTICS_LOGGER, "dateutil"]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
