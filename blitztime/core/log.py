"""Logging setup for applications embedding the client. The library itself only ever calls logging.getLogger(__name__)."""

import logging
from typing import Optional

from blitztime.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER_NAME = "blitztime"
CONSOLE_HANDLER_NAME = f"{ROOT_LOGGER_NAME}:console"


def configure_logging(level: Optional[int | str] = None) -> logging.Logger:
    """Attach a console handler to the package logger (once) and set its level (defaults to BLITZTIME_LOG_LEVEL)."""
    if level is None:
        level = get_settings().log_level.upper()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not any(h.get_name() == CONSOLE_HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        handler.set_name(CONSOLE_HANDLER_NAME)
        logger.addHandler(handler)

    # Handler level follows the logger, so a later call can lower/raise verbosity
    for handler in logger.handlers:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            handler.setLevel(level)
    return logger
