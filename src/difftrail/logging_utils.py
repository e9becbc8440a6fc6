"""Logging setup shared by the difftrail commands.

The console gets short ``LEVEL: message`` lines on stderr, so they do not mix
with rendered output on stdout. A log file, when requested, always gets the
timestamped trace format since it is read after the fact.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    """Turn ``"debug"``, ``"10"`` or ``logging.DEBUG`` into a level number; unknown names mean WARNING."""
    if isinstance(log_level, int):
        return log_level
    name = str(log_level).strip()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _make_handler(handler: logging.Handler, level: int, trace: bool) -> logging.Handler:
    if trace:
        handler.setFormatter(logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Level number, or a name such as ``"info"``.
    log_file : str, optional
        Also append log records to this file.
    trace_mode : bool, optional
        Use timestamps and logger names on the console too.

    Returns
    -------
    logging.Logger
        The root logger, now carrying the new handlers.

    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level, trace_mode))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            root_logger.addHandler(_make_handler(file_handler, level, trace=True))
            root_logger.debug("Logging to file: %s", log_file)

    return root_logger
