"""
utils/logger.py — Project-wide logging configuration
=====================================================
Provides a single `get_logger(name)` factory so every module gets a
consistently-formatted logger with colour-coded console output.

The default level comes from the `STRESS_LOG_LEVEL` environment variable
(see config.py).  Colour is dropped when stdout is not a terminal so that
captured logs stay readable.
"""

import logging
import sys

from config import LOG_LEVEL

_COLOURS = {
    logging.DEBUG:    "\033[36m",   # cyan
    logging.INFO:     "\033[32m",   # green
    logging.WARNING:  "\033[33m",   # yellow
    logging.ERROR:    "\033[31m",   # red
    logging.CRITICAL: "\033[35m",   # magenta
}
_RESET = "\033[0m"


class _ColourFormatter(logging.Formatter):
    """Inject ANSI colour around the log-level tag."""

    def __init__(self, fmt: str, datefmt: str, use_colour: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._use_colour = use_colour

    def format(self, record: logging.LogRecord) -> str:
        if not self._use_colour:
            return super().format(record)
        # Work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        colour = _COLOURS.get(record.levelno, _RESET)
        record.levelname = f"{colour}{record.levelname:<8}{_RESET}"
        return super().format(record)


_BASE_FMT = "%(asctime)s  %(levelname)s  %(name)-22s  %(message)s"
_DATE_FMT = "%H:%M:%S"

# Module-level registry to avoid adding duplicate handlers
_loggers: dict[str, logging.Logger] = {}


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        resolved = getattr(logging, level.upper(), None)
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    """
    Return (or create) a named logger.

    Parameters
    ----------
    name  : str              Module / component name shown in log lines.
    level : int | str | None Minimum severity; defaults to STRESS_LOG_LEVEL.
    """
    if name in _loggers:
        return _loggers[name]

    resolved = _resolve_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(resolved)
    logger.propagate = False          # Avoid duplicate messages from root

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(
        _ColourFormatter(fmt=_BASE_FMT, datefmt=_DATE_FMT, use_colour=sys.stdout.isatty())
    )
    logger.addHandler(handler)

    _loggers[name] = logger
    return logger
