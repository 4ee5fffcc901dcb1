"""Structured logging setup for ledgerlens.

Loggers render key/value lines with structlog and hand them to the standard
library ``ledgerlens`` logger. Until ``configure_logging`` is called that
logger only has a ``NullHandler``, so library use stays silent.
"""

import logging
import os
import sys
from typing import Optional

import structlog

DEFAULT_LOG_LEVEL = "WARNING"
ROOT_LOGGER_NAME = "ledgerlens"

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.dev.ConsoleRenderer(colors=False),
]

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())
_stream_handler: Optional[logging.Handler] = None


def _resolve_level(level: Optional[str]) -> int:
    if level is None:
        level = os.environ.get("LEDGERLENS_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def configure_logging(level: Optional[str] = None) -> None:
    """Write ledgerlens log lines to stderr.

    Args:
        level: Level name such as "DEBUG". If None, LEDGERLENS_LOG_LEVEL is
            consulted, then WARNING is used.
    """
    global _stream_handler

    log_level = _resolve_level(level)
    if _stream_handler is not None:
        _root_logger.removeHandler(_stream_handler)
    _stream_handler = logging.StreamHandler(sys.stderr)
    _stream_handler.setFormatter(logging.Formatter("%(message)s"))

    _root_logger.addHandler(_stream_handler)
    _root_logger.setLevel(log_level)
    _root_logger.propagate = False


def reset_logging() -> None:
    """Detach the stderr handler and restore library defaults."""
    global _stream_handler

    if _stream_handler is not None:
        _root_logger.removeHandler(_stream_handler)
        _stream_handler = None
    _root_logger.setLevel(logging.NOTSET)
    _root_logger.propagate = True


def get_logger(name: Optional[str] = None):
    """Return a structlog logger bound to a ``ledgerlens`` stdlib logger."""
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER_NAME),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
