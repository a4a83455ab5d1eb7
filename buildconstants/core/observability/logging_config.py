"""
Logging configuration — one-time setup for the CLI entrypoint.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this config. Levels are resolved in precedence order:
    CLI flag  >  BUILDCONSTANTS_LOG_LEVEL env var  >  WARNING (default)

A log file (BUILDCONSTANTS_LOG_FILE, level BUILDCONSTANTS_LOG_FILE_LEVEL)
always gets the detailed format, whatever the console shows.
"""

from __future__ import annotations

import logging
import sys

ENV_LOG_LEVEL = "BUILDCONSTANTS_LOG_LEVEL"
ENV_LOG_FILE = "BUILDCONSTANTS_LOG_FILE"
ENV_LOG_FILE_LEVEL = "BUILDCONSTANTS_LOG_FILE_LEVEL"

_DETAILED = logging.Formatter(
    "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", datefmt="%H:%M:%S"
)
_TIMESTAMPED = logging.Formatter("%(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
_PLAIN = logging.Formatter("%(message)s")


def _console_formatter(level: int) -> logging.Formatter:
    """Build output stays bare at WARNING and widens as verbosity goes up."""
    if level <= logging.DEBUG:
        return _DETAILED
    if level <= logging.INFO:
        return _TIMESTAMPED
    return _PLAIN


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a stderr handler (and optional file).

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(parse_level(log_file_level) if log_file_level else console_level)
        file_handler.setFormatter(_DETAILED)
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # Root must pass everything the most verbose handler wants
    root.setLevel(min(h.level for h in handlers))


def parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
