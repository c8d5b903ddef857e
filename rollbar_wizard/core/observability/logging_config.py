"""
Logging configuration for the wizard process.

The wizard talks to the user through click output; logging carries
diagnostics only.  Console log lines go to stderr with a ``rollbar-wizard:``
prefix because npm/yarn/pnpm write to the same terminal while packages
install.

Level precedence (see ``resolve_level``):
    --debug  >  --verbose  >  --quiet  >  RBW_LOG_LEVEL  >  WARNING

A log file (RBW_LOG_FILE, level RBW_LOG_FILE_LEVEL) always gets the
detailed format, whatever the console level is.
"""

from __future__ import annotations

import logging
import sys
from typing import Mapping

LOG_LEVEL_ENV = "RBW_LOG_LEVEL"
LOG_FILE_ENV = "RBW_LOG_FILE"
LOG_FILE_LEVEL_ENV = "RBW_LOG_FILE_LEVEL"

_PREFIX = "rollbar-wizard"

# (max level, format, datefmt), first match wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, f"{_PREFIX} %(asctime)s %(levelname)s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, f"{_PREFIX} %(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, f"{_PREFIX}: %(levelname)s: %(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from the global CLI flags and environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return (environ or {}).get(LOG_LEVEL_ENV) or "WARNING"


def _console_formatter(level: int) -> logging.Formatter:
    for ceiling, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= ceiling:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_FORMATS[-1][1])


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger once per process.

    Replaces any handlers already attached to the root logger, so a
    second call reconfigures instead of duplicating output.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
