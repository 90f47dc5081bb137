"""Logging setup utilities for termsite.

Configures the ``termsite`` logger tree from :class:`LoggingConfig`. The
interactive console draws on the same terminal as stderr, so it asks for
file-only logging; the backend and ``exec`` log to stderr as well.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from termsite.config.settings import LoggingConfig

# Libraries that log every request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def setup_logging(config: LoggingConfig | None = None, console: bool = True) -> None:
    """Configure logging for the termsite application.

    Replaces any handlers a previous call installed, so calling this
    twice does not duplicate output.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
        console: Whether to log to stderr. With ``False`` and no
                 ``config.file``, records are discarded.
    """
    if config is None:
        config = LoggingConfig()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger = logging.getLogger("termsite")
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)
    handlers: list[logging.Handler] = []

    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.file))

    if not handlers:
        handlers.append(logging.NullHandler())
    root_logger.propagate = False

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug("Logging initialized at %s level", config.level)
