"""
Package logger for ipswdownloads.

Modules log through `logger`; output goes to a rich console handler. The
starting level comes from IPSWDOWNLOADS_LOG_LEVEL and can be changed later
with set_log_level(), which open_client() does when a config sets log_level.
"""

import logging
import os
from typing import Optional

from rich.logging import RichHandler

from ipswdownloads.constants import LOG_DATE_FORMAT, LOG_LEVEL_ENV_VAR, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def _parse_level(level_name: str) -> Optional[int]:
    level = logging.getLevelName(str(level_name).upper())
    return level if isinstance(level, int) else None


def set_log_level(level_name: str) -> bool:
    """
    Apply `level_name` to the package logger and its handlers.

    Returns:
        bool: False (and a warning) if the name is not a logging level.
    """
    level = _parse_level(level_name)
    if level is None:
        logger.warning("Ignoring unknown log level %r", level_name)
        return False

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.debug("Log level set to %s", logging.getLevelName(level))
    return True


def _initialize_logger() -> None:
    logger.propagate = False
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        log_time_format=LOG_DATE_FORMAT,
    )
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if not set_log_level(env_level):
        set_log_level("INFO")


_initialize_logger()
