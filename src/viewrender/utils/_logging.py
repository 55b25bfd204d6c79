"""Logging utilities for viewrender.

This module provides a standalone structlog logger factory that writes
JSON-formatted or text-formatted logs to a file or to stderr. Loggers built
here are self-contained and do not modify global structlog configuration.

Library components that are not handed a logger fall back to
``structlog.get_logger("viewrender")`` so that the host application's
structlog setup applies to them.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import Literal, cast

import structlog
from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

LOGGER_NAME = "viewrender"


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks VIEWRENDER_DEBUG first (sets DEBUG if present), then
    VIEWRENDER_LOG_LEVEL. Defaults to INFO if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("VIEWRENDER_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("VIEWRENDER_LOG_LEVEL", "info").upper(), logging.INFO)


def _level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, VIEWRENDER_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("VIEWRENDER_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
    log_file: str = "",
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    The log level is determined by (in order of precedence):
    1. VIEWRENDER_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. VIEWRENDER_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to the log file. Empty writes to stderr.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = (
        _level_from_string(level, respect_env=True)
        if level is not None
        else _get_log_level()
    )

    raw_logger: object
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        raw_logger = structlog.WriteLoggerFactory(file=log_path.open("a"))()
    else:
        raw_logger = structlog.WriteLoggerFactory(file=sys.stderr)()

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def get_logger(**initial_values: object) -> FilteringBoundLogger:
    """Return the library logger, honouring the host's structlog configuration.

    Args:
        initial_values: Key/value pairs bound to every entry.

    Returns:
        A lazily configured structlog logger.
    """
    return cast(
        "FilteringBoundLogger",
        structlog.get_logger(LOGGER_NAME, **initial_values),
    )
