"""
Logging configuration for the generator process.

The generator is a short-lived build step: stderr belongs to the one
``❌`` diagnostic line the CLI prints on failure, so at the default
WARNING level console logging stays undecorated and quiet. ``-v`` and
``--debug`` add timestamps and source locations for investigating a
misbehaving rule.

Level precedence:
    --debug > -v > -q > CGF_LOG_LEVEL > WARNING

``CGF_LOG_FILE`` tees records to a file (at ``CGF_LOG_FILE_LEVEL``,
defaulting to the console level), useful when the build system
swallows stderr.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "CGF_LOG_LEVEL"
ENV_FILE = "CGF_LOG_FILE"
ENV_FILE_LEVEL = "CGF_LOG_FILE_LEVEL"

# (format, datefmt) for console output, keyed by the most verbose level it covers
_CONSOLE_FORMATS = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
]
_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(process)d %(name)s:%(lineno)d — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_from_cli(debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """Set up logging from the CLI group's flags and the CGF_LOG_* env vars."""
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LEVEL, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler, plus a file handler if ``log_file`` is set.

    Replaces any handlers already on the root logger, so calling it
    twice does not duplicate output.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(h.level for h in handlers))


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    fmt, datefmt = "%(message)s", None
    for threshold, f, d in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = f, d
            break
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
