"""Environment-based configuration overrides for eventcal."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Environment variable -> (config key, is_int)
ENV_KEYS: dict[str, tuple[str, bool]] = {
    "EVENTCAL_OCCURRENCE_COUNT": ("occurrence_count", True),
    "EVENTCAL_LOOKAHEAD_MONTHS": ("monthly_lookahead_months", True),
    "EVENTCAL_MAX_EVENTS_PER_CELL": ("max_events_per_cell", True),
    "EVENTCAL_LOG_LEVEL": ("log_level", False),
}

ENV_PREFIX = "EVENTCAL_"


def parse_env_text(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines from .env file text.

    Accepts an optional ``export`` prefix. Quoted values keep their content
    verbatim; unquoted values lose any trailing `` #`` comment. Lines without
    ``=`` are ignored. Later assignments win.
    """
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        key, sep, val = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        val = val.strip()
        if len(val) >= 2 and val[0] == val[-1] and val[0] in "'\"":
            val = val[1:-1]
        else:
            val = val.split(" #", 1)[0].rstrip()
        values[key] = val
    return values


class ConfigManager:
    """Reads configuration overrides from environment variables and .env files."""

    def __init__(self, env_file_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Copy ``EVENTCAL_*`` settings from the .env file into the environment.

        Variables already present in the environment are left alone, and keys
        without the ``EVENTCAL_`` prefix are skipped.

        Returns:
            Names of the variables taken from the .env file
        """
        try:
            text = self.env_file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No .env file found at %s", self.env_file_path)
            return []
        except OSError:
            logger.debug("Could not read %s; skipping", self.env_file_path, exc_info=True)
            return []

        applied = []
        for key, val in parse_env_text(text).items():
            if not key.startswith(ENV_PREFIX):
                logger.debug("Ignoring non-eventcal key %s in %s", key, self.env_file_path)
            elif key not in os.environ:
                os.environ[key] = val
                applied.append(key)

        if applied:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(applied))
        return applied

    def build_config_from_env(self) -> dict[str, Any]:
        """Build configuration dictionary from environment variables.

        Recognizes:
        - EVENTCAL_OCCURRENCE_COUNT -> 'occurrence_count' (int)
        - EVENTCAL_LOOKAHEAD_MONTHS -> 'monthly_lookahead_months' (int)
        - EVENTCAL_MAX_EVENTS_PER_CELL -> 'max_events_per_cell' (int)
        - EVENTCAL_LOG_LEVEL -> 'log_level'

        Returns:
            Configuration dictionary with only the keys that were set
        """
        cfg: dict[str, Any] = {}
        for env_name, (key, is_int) in ENV_KEYS.items():
            raw = os.environ.get(env_name)
            if not raw:
                continue
            if is_int:
                try:
                    cfg[key] = int(raw)
                except ValueError:
                    logger.warning("Invalid %s=%r; ignoring", env_name, raw)
            else:
                cfg[key] = raw
        return cfg

    def load_full_config(self) -> dict[str, Any]:
        """Load .env file and build configuration from environment."""
        self.load_env_file()
        return self.build_config_from_env()
