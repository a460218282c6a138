"""Logging setup for the html2gemini command line.

Log records from the package go to stderr and, with ``--log-file``, to a
file as well. Handlers hang off the ``html2gemini`` logger so that callers
embedding the library keep control of the root logger.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/html2gemini/logging_utils.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "html2gemini"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s.%(msecs)03d] [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"
TRACE_DATE_FORMAT = "%H:%M:%S"

# Third-party loggers that flood DEBUG output while sniffing encodings or
# building trees; only --trace lets them through.
_CHATTY_LOGGERS = ("chardet", "charset_normalizer", "bs4", "html5lib")


def resolve_log_level(parsed_args: argparse.Namespace) -> int:
    """Pick the effective level from ``--trace``, ``--verbose`` and ``--log-level``.

    ``--trace`` wins, then ``--verbose`` (unless a level other than the
    default WARNING was asked for), then ``--log-level``.
    """
    if getattr(parsed_args, "trace", False):
        return logging.DEBUG
    log_level = str(getattr(parsed_args, "log_level", "WARNING") or "WARNING").upper()
    if getattr(parsed_args, "verbose", False) and log_level == "WARNING":
        return logging.DEBUG
    return getattr(logging, log_level, logging.WARNING)


def configure_logging(
    log_level: int,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the package logger.

    Parameters
    ----------
    log_level : int
        Numeric logging level.
    log_file : str, optional
        File that receives the same records as stderr, appended to.
    trace_mode : bool, default False
        Use the timestamped format with logger names and line numbers, and
        stop silencing chatty third-party loggers.

    Returns
    -------
    logging.Logger
        The ``html2gemini`` logger.

    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_mode else logging.WARNING)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.debug("Logging to file: %s", log_file)

    return package_logger
