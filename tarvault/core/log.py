"""
Two logging sinks: user-facing progress and persistent diagnostics.

  - ``tarvault`` (diagnostics): WARNING and above, appended to the log file
    with every physical line prefixed ``[YYYY-MM-DD HH:MM:SS]``. The file is
    opened on the first record, so a run that logs nothing leaves no file.
  - ``tarvault.progress``: INFO messages to stdout, verbose mode only.

Neither logger propagates, so diagnostics never reach stdout and progress
never reaches the log file.
"""

from __future__ import annotations

import logging
import sys

DIAGNOSTIC_LOGGER = "tarvault"
PROGRESS_LOGGER = "tarvault.progress"

DEFAULT_LOG_FILE = "error.log"
LINE_FORMAT = "[%(asctime)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TimestampedLineFormatter(logging.Formatter):
    """Stamp each line of a multi-line record, not just the first."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message = f"{message}\n{record.exc_text}"
        stamp = self.formatTime(record, self.datefmt)
        lines = message.splitlines() or [""]
        return "\n".join(f"[{stamp}] {line}" for line in lines)


class LineFileHandler(logging.FileHandler):
    """Append-only file handler that writes each record in one call."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self.stream is None:
                self.stream = self._open()
            self.stream.write(self.format(record) + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(verbose: bool = False,
                      log_file: str = DEFAULT_LOG_FILE) -> logging.Logger:
    """Install both sinks and return the diagnostic logger.

    Safe to call more than once; previous handlers are closed and replaced.
    """
    diagnostics = logging.getLogger(DIAGNOSTIC_LOGGER)
    _reset(diagnostics)
    diagnostics.setLevel(logging.WARNING)
    diagnostics.propagate = False
    file_handler = LineFileHandler(log_file, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(TimestampedLineFormatter(LINE_FORMAT, DATE_FORMAT))
    diagnostics.addHandler(file_handler)

    progress = logging.getLogger(PROGRESS_LOGGER)
    _reset(progress)
    progress.propagate = False
    if verbose:
        progress.setLevel(logging.INFO)
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter("%(message)s"))
        progress.addHandler(console)
    else:
        progress.setLevel(logging.CRITICAL + 1)
        progress.addHandler(logging.NullHandler())

    return diagnostics


def shutdown_logging() -> None:
    """Close both sinks (releases the log file handle) and restore defaults."""
    for name in (PROGRESS_LOGGER, DIAGNOSTIC_LOGGER):
        logger = logging.getLogger(name)
        _reset(logger)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


def get_progress_logger() -> logging.Logger:
    return logging.getLogger(PROGRESS_LOGGER)
