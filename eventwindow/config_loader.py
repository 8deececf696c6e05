"""eventwindow.config_loader

Config loader for eventwindow.

- Reads YAML (PyYAML) or JSON, chosen by file suffix.
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
"""

from __future__ import annotations

import json
import logging
import zoneinfo
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("eventwindow.yaml")
_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Config:
    """Typed configuration for eventwindow.

    Fields:
        display_timezone: IANA timezone used when rendering event times
        exclude_exceptions: drop detached exception instances from results
        log_level: logging level name
        diagnostic_rate_limit_per_minute: max diagnostics per event code per minute
    """

    display_timezone: str = "UTC"
    exclude_exceptions: bool = False
    log_level: str = "INFO"
    diagnostic_rate_limit_per_minute: int = 5

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Bad scalar values are replaced by defaults with a warning rather than
        raising.
        """
        if data is None:
            data = {}

        tz_name = str(data.get("display_timezone") or "UTC")
        try:
            zoneinfo.ZoneInfo(tz_name)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError):
            logger.warning("Config display_timezone=%r is not a known timezone; using UTC", tz_name)
            tz_name = "UTC"

        raw_exclude = data.get("exclude_exceptions", False)
        if isinstance(raw_exclude, str):
            exclude = raw_exclude.strip().lower() in _TRUTHY
        else:
            exclude = bool(raw_exclude)

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"

        raw_limit = data.get("diagnostic_rate_limit_per_minute", 5)
        try:
            limit = int(raw_limit)
        except (TypeError, ValueError):
            logger.warning(
                "Config diagnostic_rate_limit_per_minute=%r is not an int; using default 5",
                raw_limit,
            )
            limit = 5
        if limit < 1:
            logger.warning("diagnostic_rate_limit_per_minute %d below minimum; coercing to 1", limit)
            limit = 1

        return cls(
            display_timezone=tz_name,
            exclude_exceptions=exclude,
            log_level=log_level,
            diagnostic_rate_limit_per_minute=limit,
        )


def _load_mapping(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc
    # safe_load returns None for empty files
    return {} if loaded is None else loaded


def load_config(path: str | None = None, overrides: dict[str, Any] | None = None) -> Config:
    """Load configuration from a YAML/JSON file and return a Config instance.

    Args:
        path: Optional path to the config file. Defaults to ./eventwindow.yaml.
        overrides: Values applied on top of the file contents (e.g. from the
            environment via ConfigManager)

    Returns:
        Config dataclass instance with values from file (or defaults).

    Raises:
        ConfigError: If the file cannot be parsed or its top level is not a mapping.
    """
    p = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load config from %s", p)

    raw: Any = {}
    if p.exists():
        raw = _load_mapping(p)
        if not isinstance(raw, dict):
            logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
            raise ConfigError("Config file must contain a mapping at top level")
        logger.info("Loaded configuration from %s", p)
    else:
        logger.info("Config file %s not found; using defaults", p)

    merged = {**raw, **(overrides or {})}
    cfg = Config.from_dict(merged)
    logger.debug("Configuration values: %s", cfg)
    return cfg
