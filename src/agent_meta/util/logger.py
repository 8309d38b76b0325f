"""Logging setup for applications that use agent_meta.

Library modules only create named loggers under "agent_meta"; applications call
setup_logging once to get a consistent format.
"""

from __future__ import annotations

import logging

from agent_meta.config import get_settings

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(level: int | None = None, debug: bool = False) -> logging.Logger:
    """Configure root logging and return the package logger.

    Args:
        level: Log level. Defaults to the configured Settings.log_level.
        debug: Force DEBUG level (shows every registration).

    Returns:
        The "agent_meta" logger.
    """
    if debug:
        level = logging.DEBUG
    elif level is None:
        level = get_settings().log_level

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logger = logging.getLogger("agent_meta")
    logger.setLevel(level)
    return logger
