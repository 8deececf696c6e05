"""Environment-based configuration for eventwindow."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Environment variable -> config key
ENV_KEYS = {
    "EVENTWINDOW_DISPLAY_TIMEZONE": "display_timezone",
    "EVENTWINDOW_EXCLUDE_EXCEPTIONS": "exclude_exceptions",
    "EVENTWINDOW_LOG_LEVEL": "log_level",
    "EVENTWINDOW_DIAGNOSTIC_RATE_LIMIT": "diagnostic_rate_limit_per_minute",
}


def parse_env_text(text: str) -> dict[str, str]:
    """Parse KEY=VALUE lines, skipping blanks, comments and lines without '='."""
    entries: dict[str, str] = {}
    for line in map(str.strip, text.splitlines()):
        if line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        if key.strip():
            entries[key.strip()] = value.strip().strip("\"'")
    return entries


class ConfigManager:
    """Manages configuration overrides from environment variables and .env files."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Copy .env entries into the environment without overriding existing values.

        Returns:
            Keys that were taken from the .env file
        """
        try:
            entries = parse_env_text(self.env_file_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("No .env file found at %s", self.env_file_path)
            return []
        except OSError:
            logger.warning("Failed to read .env file %s", self.env_file_path, exc_info=True)
            return []

        loaded = [key for key in entries if key not in os.environ]
        os.environ.update({key: entries[key] for key in loaded})
        if loaded:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(loaded))
        return loaded

    def build_config_from_env(self) -> dict[str, Any]:
        """Build a config override mapping from EVENTWINDOW_* variables.

        Values are passed through as strings; Config.from_dict coerces them.
        """
        cfg: dict[str, Any] = {}
        for env_key, cfg_key in ENV_KEYS.items():
            value = os.environ.get(env_key)
            if value:
                cfg[cfg_key] = value
        return cfg

    def load_full_config(self) -> dict[str, Any]:
        """Load .env file and build configuration from environment."""
        self.load_env_file()
        return self.build_config_from_env()
