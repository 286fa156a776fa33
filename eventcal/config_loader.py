"""eventcal.config_loader

Config loader for eventcal.

- Reads YAML (PyYAML) from an optional path.
- Exposes a typed dataclass `Config` and a `load_config()` helper that
  layers environment overrides from `ConfigManager` on top of the file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .config_manager import ConfigManager
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("eventcal.yaml")


@dataclass
class Config:
    """Typed configuration for eventcal.

    Fields:
        occurrence_count: occurrences listed for a recurring event (1..50)
        monthly_lookahead_months: months searched for monthly occurrences (1..120)
        max_events_per_cell: events shown per calendar day (1..10)
        log_level: logging level name
    """

    occurrence_count: int = 5
    monthly_lookahead_months: int = 24
    max_events_per_cell: int = 3
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Config:
        """Create Config from a plain mapping, applying defaults and bounds.

        Numeric-like values are coerced to int and clamped into range; a
        warning is logged whenever a value is replaced.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int, low: int, high: int) -> int:
            raw = data.get(key, default)
            try:
                value = int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default
            if value < low:
                logger.warning("%s %d below minimum; coercing to %d", key, value, low)
                return low
            if value > high:
                logger.warning("%s %d above maximum; coercing to %d", key, value, high)
                return high
            return value

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"

        return cls(
            occurrence_count=_coerce_int("occurrence_count", 5, 1, 50),
            monthly_lookahead_months=_coerce_int("monthly_lookahead_months", 24, 1, 120),
            max_events_per_cell=_coerce_int("max_events_per_cell", 3, 1, 10),
            log_level=log_level,
        )


def _load_yaml(path: Path) -> Any:
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    # safe_load returns None for empty files
    if loaded is None:
        return {}
    return loaded


def load_config(
    path: Optional[str] = None, env_manager: Optional[ConfigManager] = None
) -> Config:
    """Load configuration from a YAML file plus environment overrides.

    Args:
        path: Optional path to the config file. Defaults to ./eventcal.yaml.
        env_manager: Source of environment overrides; a default
            ConfigManager is used when omitted.

    Returns:
        Config dataclass instance.

    Behavior:
    - If the file is missing: defaults, then environment overrides.
    - If the file's top level is not a mapping: raises ConfigError.
    """
    p = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load config from %s", p)

    raw: dict[str, Any] = {}
    if p.exists():
        loaded = _load_yaml(p)
        if not isinstance(loaded, dict):
            logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, loaded)
            raise ConfigError("Config file must contain a mapping at top level")
        raw.update(loaded)
        logger.info("Loaded configuration from %s", p)
    else:
        logger.info("Config file %s not found; using defaults", p)

    manager = env_manager or ConfigManager()
    raw.update(manager.load_full_config())

    cfg = Config.from_dict(raw)
    logger.debug("Configuration values: %s", cfg)
    return cfg
