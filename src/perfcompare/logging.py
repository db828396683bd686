"""Logging setup for perfcompare.

Two kinds of records flow through the ``perfcompare`` logger:

- diagnostics (loading progress, dropped items, warnings), shown on the
  console according to ``--verbose``/``--quiet``;
- the comparison report itself, logged on ``perfcompare.report`` by
  :meth:`JobComparisonData.pretty_print`.  It is the command's main
  output, so the console prints it bare and quiet mode does not hide it.

An optional log file receives everything at DEBUG with timestamps.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "perfcompare"
REPORT_LOGGER_NAME = f"{_LOGGER_NAME}.report"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)-8s %(message)s"


def _is_report(record: logging.LogRecord) -> bool:
    return record.name == REPORT_LOGGER_NAME


class _ConsoleFilter(logging.Filter):
    """Pass diagnostics at or above *level*, and every report record."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return _is_report(record) or record.levelno >= self.level


class _ConsoleFormatter(logging.Formatter):
    """Level-prefixed diagnostics; report text as-is."""

    def __init__(self) -> None:
        super().__init__(_CONSOLE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if _is_report(record):
            return record.getMessage().lstrip("\n")
        return super().format(record)


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the root perfcompare logger.

    Args:
        verbose: Show DEBUG diagnostics on the console.
        quiet: Show only warnings and the report. Ignored if *verbose* is True.
        log_file: If provided, also log everything at DEBUG to this path.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.WARNING
    else:
        console_level = logging.INFO
    console = logging.StreamHandler()
    console.addFilter(_ConsoleFilter(console_level))
    console.setFormatter(_ConsoleFormatter())
    logger.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named child logger under the perfcompare namespace."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def get_report_logger() -> logging.Logger:
    """The logger that carries the comparison report."""
    return logging.getLogger(REPORT_LOGGER_NAME)
