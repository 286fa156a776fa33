"""
Central logging configuration for eventcal.

Installs a colorized console handler and sets eventcal module levels, with
environment overrides for troubleshooting.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

EVENTCAL_MODULES = [
    "eventcal",
    "eventcal.nth_weekday",
    "eventcal.occurrence_projector",
    "eventcal.first_occurrence",
    "eventcal.calendar_window",
    "eventcal.event_placer",
    "eventcal.config_loader",
]


def _resolve_level(level_name: Optional[str], debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if isinstance(level_name, str) and level_name.upper() in (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
    ):
        return getattr(logging, level_name.upper())
    return logging.INFO


def configure_logging(
    level_name: Optional[str] = None,
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
) -> int:
    """
    Configure console logging for eventcal.

    Args:
        level_name: Root level name (e.g. from config); INFO when unset
        debug_mode: Whether to enable debug logging for eventcal modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        EVENTCAL_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        EVENTCAL_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The root logging level applied
    """
    env_debug = os.getenv("EVENTCAL_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("EVENTCAL_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = _resolve_level(env_log_level or level_name, final_debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if none exist to avoid duplicate output
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(
            ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS)
        )
        root_logger.addHandler(handler)

    module_level = logging.DEBUG if final_debug else root_level
    for module in EVENTCAL_MODULES:
        logging.getLogger(module).setLevel(module_level)

    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(root_level)
    )
    return root_level


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in EVENTCAL_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
