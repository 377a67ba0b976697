"""Structured logging for the sequence statistics package.

A single ``StatsLogger`` instance wraps the stdlib ``seqstats_pkg`` logger and
adds keyword details, named timers and a list of processing issues.

>>> from seqstats_pkg.logger import setup_logging, get_logger
>>> setup_logging(console_level='DEBUG', log_file=Path("logs/seqstats.log"))
>>> logger = get_logger()
>>> logger.info("Processing file", records=1000)
"""

import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

__all__ = [
    'ProcessingIssue',
    'StatsLogger',
    'setup_logging',
    'get_logger',
]

LOGGER_NAME = 'seqstats_pkg'
CONSOLE_FORMAT = '%(levelname)-8s %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'


@dataclass
class ProcessingIssue:
    """A problem found while processing an input file."""
    level: str
    category: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class StatsLogger:
    """Wrapper around ``logging.Logger`` with structured details and timers."""

    def __init__(self, name: str = LOGGER_NAME) -> None:
        self._logger = logging.getLogger(name)
        self._timers: Dict[str, float] = {}
        self.issues: List[ProcessingIssue] = []

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @staticmethod
    def _format(message: str, details: Dict[str, Any]) -> str:
        if not details:
            return message
        rendered = ' '.join(f"{key}={value}" for key, value in details.items())
        return f"{message} [{rendered}]"

    def debug(self, message: str, **details) -> None:
        self._logger.debug(self._format(message, details))

    def info(self, message: str, **details) -> None:
        self._logger.info(self._format(message, details))

    def warning(self, message: str, **details) -> None:
        self._logger.warning(self._format(message, details))

    def error(self, message: str, **details) -> None:
        self._logger.error(self._format(message, details))

    def start_timer(self, name: str) -> None:
        """Start (or restart) a named timer."""
        self._timers[name] = time.perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop a named timer and return the elapsed seconds."""
        started = self._timers.pop(name, None)
        if started is None:
            self.debug(f"Timer '{name}' was never started")
            return 0.0
        return time.perf_counter() - started

    def add_processing_issue(
        self,
        level: str,
        category: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> ProcessingIssue:
        """Record an issue and log it at the matching level."""
        issue = ProcessingIssue(level=level.upper(), category=category,
                                message=message, details=details or {})
        self.issues.append(issue)
        log_level = logging.getLevelName(issue.level)
        if not isinstance(log_level, int):
            log_level = logging.ERROR
        self._logger.log(log_level, self._format(f"[{category}] {message}", issue.details))
        return issue

    def clear_issues(self) -> None:
        self.issues = []


_LOGGER: Optional[StatsLogger] = None


def get_logger() -> StatsLogger:
    """Return the process-wide logger, creating it on first use."""
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = StatsLogger()
    return _LOGGER


def setup_logging(
    console_level: Union[str, int] = 'INFO',
    log_file: Optional[Path] = None
) -> StatsLogger:
    """Configure console (stderr) and optional file handlers.

    Calling it again replaces the previously installed handlers.
    """
    stats_logger = get_logger()
    base = stats_logger.logger

    for handler in list(base.handlers):
        base.removeHandler(handler)
        handler.close()

    base.setLevel(logging.DEBUG)
    base.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level if isinstance(console_level, int) else console_level.upper())
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    base.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        base.addHandler(file_handler)

    return stats_logger
