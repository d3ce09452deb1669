"""Logging utilities for decisions.

This module provides a custom TRAINING log level for tree building and
validation progress, and a handle for enabling/disabling decisions logging
with loguru.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that ``enable_logging()`` is the only route for decisions records to reach
    stderr. If your application configured loguru handlers before importing
    decisions, handler 0 may already be gone; the ``ValueError`` is then
    suppressed.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Trees built, folds scored and depths swept are logged at TRAINING.
TRAINING_LEVEL: Final[str] = "TRAINING"
TRAINING_LEVEL_NUMBER: Final[int] = 25  # Between INFO (20) and WARNING (30)


def _register_training_level() -> None:
    """Register the TRAINING custom log level with loguru.

    Registers the level when it does not exist yet. If it already exists with
    a different numeric value a UserWarning is emitted, because loguru does
    not allow the numeric value of an existing level to change.
    """
    try:
        existing_level = logger.level(TRAINING_LEVEL)
    except ValueError:
        logger.level(TRAINING_LEVEL, no=TRAINING_LEVEL_NUMBER, icon="🌳")
    else:
        if existing_level.no != TRAINING_LEVEL_NUMBER:
            msg = (
                f"TRAINING level already registered with numeric value {existing_level.no},"
                f" expected {TRAINING_LEVEL_NUMBER}"
            )
            warnings.warn(msg, stacklevel=2)


_register_training_level()

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "TRAINING",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]

_SHORT_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class LoggingHandle:
    """Handle for managing the lifetime of a decisions logging handler.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = build_tree(rows)

        >>> handle = enable_logging()  # doctest: +SKIP
        >>> handle.disable()  # doctest: +SKIP
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Initialize the logging handle.

        Args:
            handler_id (int): The loguru handler ID from logger.add().
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler.

        When the last active handle is disabled, ``logger.disable("decisions")``
        is called again so the package goes back to being silent.
        """
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Enter context manager.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and disable logging."""
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return the number of currently active logging handles.

        Returns:
            int: Count of handles that have not been disabled.
        """
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = TRAINING_LEVEL,
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Enable decisions logging on stderr.

    Args:
        level (LogLevel): Minimum log level to display. Defaults to "TRAINING",
            which reports tree building, depth sweeps and scoring. Use "DEBUG"
            to also see every chosen split and per-fold accuracy.
        log_format (LogFormat): "short" shows only the function name, "full"
            shows module:function:line.

    Returns:
        LoggingHandle: Independent handle for managing the logging handler.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_decisions_record,
        format=_SHORT_FORMAT if log_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_decisions_record(record: Record) -> bool:
    """Pass only records emitted from inside the decisions package.

    Args:
        record (Record): The loguru Record object to filter.

    Returns:
        bool: True if the record is from the decisions package.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
