"""
Logging utilities for depsolver.

All diagnostic output of the solver goes through loggers below the
``depsolver`` namespace. The CLI configures a single stderr handler once;
library callers that never configure logging get a ``NullHandler`` so the
search stays silent.

Verbosity mapping used by the CLI:

    0   WARNING   (deadline expiry, unresolved initial entries)
    1   INFO      (input sizes, search outcome and statistics)
    2+  DEBUG     (every improved plan, configuration details)
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from depsolver.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_ROOT_NAME = "depsolver"

_logging_configured: bool = False
_lock = threading.Lock()


class ColoredFormatter(logging.Formatter):
    """Formatter that tints the level name with ANSI colors on a terminal."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if not (color and self.use_color and _stderr_supports_color()):
            return super().format(record)

        # Work on a copy so other handlers see the plain level name
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def _stderr_supports_color() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stderr.isatty()
    except (AttributeError, OSError):
        return False


def level_for_verbosity(verbose: int) -> int:
    """Translate a ``-v`` count into a logging level."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Install the depsolver stderr handler, replacing any previous one.

    Safe to call repeatedly; configuration is serialized by a
    process-wide lock.

    Args:
        level: Minimum level to emit.
        verbose: Use the timestamped format including the logger name.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            use_color=not os.environ.get("NO_COLOR"),
        )
    )

    with _lock:
        root = logging.getLogger(_ROOT_NAME)
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        root.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the ``depsolver`` hierarchy.

    ``get_logger("core.search")`` and ``get_logger("depsolver.core.search")``
    return the same logger.
    """
    if not name or name == _ROOT_NAME:
        qualified = _ROOT_NAME
    elif name.startswith(_ROOT_NAME + "."):
        qualified = name
    else:
        qualified = f"{_ROOT_NAME}.{name}"

    logger = logging.getLogger(qualified)

    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        root.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True once :func:`setup_logging` has run."""
    return _logging_configured


def disable_logging() -> None:
    """Silence all depsolver logging output."""
    global _logging_configured

    with _lock:
        root = logging.getLogger(_ROOT_NAME)
        root.handlers.clear()
        root.addHandler(logging.NullHandler())
        root.setLevel(logging.NOTSET)
        _logging_configured = False
