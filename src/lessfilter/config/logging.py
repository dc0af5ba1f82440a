# lessfilter:header:start
#
#   project      : LessFilter
#   file         : logging.py
#   file_relpath : src/lessfilter/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# lessfilter:header:end

"""Custom LessFilter logging with TRACE logging.

This module extends the standard logging module with LessFilter-specific features,
including a custom TRACE level, a specialized logger class, and colored output formatting.

Log records always go to standard error: standard output carries the rendered
file that the pager displays.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from lessfilter.rendering.ansi import style

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV: Final[str] = "LESSFILTER_LOG_LEVEL"


class LessFilterLogger(logging.Logger):
    """Custom logger class for LessFilter with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    # Expose TRACE_LEVEL as logging.TRACE
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(LessFilterLogger)


# Records share stderr with the pager, so every line names its origin.
LOG_FORMAT = "lessfilter: [%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "lessfilter: [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

# Severity thresholds, highest first; the first threshold <= record level wins.
LEVEL_STYLES: Final[tuple[tuple[int, str], ...]] = (
    (logging.CRITICAL, "red_bright"),
    (logging.ERROR, "red"),
    (logging.WARNING, "yellow"),
    (logging.INFO, "green"),
    (logging.DEBUG, "gray"),
    (TRACE_LEVEL, "blue"),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colours each record by severity (see ``LEVEL_STYLES``)."""

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` and colour it by its level."""
        message: str = super().format(record)
        for threshold, name in LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(name)(message)
        return style("dim.red")(message)


def resolve_env_log_level(env: Mapping[str, str] | None = None) -> int | None:
    """Return a logging level from the environment or None if unset.

    Honors ``LESSFILTER_LOG_LEVEL`` (e.g., "TRACE", "DEBUG", "INFO", numeric "10").

    Args:
        env (Mapping[str, str] | None): Environment to consult; defaults to ``os.environ``.

    Returns:
        int | None: The resolved level, or None when unset or unrecognized.
    """
    source: Mapping[str, str] = os.environ if env is None else env
    val = source.get(LOG_LEVEL_ENV)
    if not val:
        return None
    v = val.strip().upper()
    if v.isdigit():
        return int(v)
    name_to_level = {
        "TRACE": TRACE_LEVEL,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
        "FATAL": logging.CRITICAL,
        "NOTSET": logging.NOTSET,
    }
    return name_to_level.get(v)


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with a specified log level and colored output.

    If ``level`` is None, the environment is consulted via
    [`resolve_env_log_level`][lessfilter.config.logging.resolve_env_log_level].
    Default is CRITICAL when unspecified, which keeps pager sessions quiet.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove all existing handlers to prevent duplicate log messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> LessFilterLogger:
    """Retrieve a LessFilterLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        LessFilterLogger: A LessFilterLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("LessFilterLogger", logger)
