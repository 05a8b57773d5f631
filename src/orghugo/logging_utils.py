#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/logging_utils.py
"""Logging setup for the orghugo command line.

Library code only creates module loggers; handlers are installed here, once
per CLI run. Handlers installed by an earlier call are replaced, handlers
that belong to the host application (or to pytest) are left in place.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from orghugo.exceptions import OutputWriteError

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attribute set on every handler installed by configure_logging
_HANDLER_MARK = "_orghugo_handler"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"info"`` into its number; unknown names give INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _console_handler(use_rich: bool, trace_mode: bool) -> logging.Handler:
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        # RichHandler prints level and time itself
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=trace_mode,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s" if trace_mode else "%(message)s"))
        return handler

    handler = logging.StreamHandler(sys.stderr)
    if trace_mode:
        handler.setFormatter(logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    use_rich: bool = False,
) -> logging.Logger:
    """Install the console handler and, optionally, a log file handler on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g. ``"DEBUG"``)
    log_file : str, optional
        Append log records to this file as well
    trace_mode : bool, default False
        Add timestamps and logger names to every record
    use_rich : bool, default False
        Write console records through ``rich.logging.RichHandler``, matching
        the CLI's ``--rich`` error output

    Returns
    -------
    logging.Logger
        The root logger

    Raises
    ------
    OutputWriteError
        If the log file cannot be opened

    """
    level = resolve_log_level(log_level)
    root_logger = logging.getLogger()

    for handler in [h for h in root_logger.handlers if getattr(h, _HANDLER_MARK, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    handlers = [_console_handler(use_rich, trace_mode)]

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(log_file, message=f"Cannot open log file {log_file}: {e}", original_error=e) from e
        file_handler.setFormatter(logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT))
        handlers.append(file_handler)

    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        setattr(handler, _HANDLER_MARK, True)
        root_logger.addHandler(handler)

    if log_file:
        root_logger.debug("Logging to file: %s", log_file)
    return root_logger


__all__ = ["configure_logging", "resolve_log_level"]
