"""
Logging configuration for NameSilo DDNS.

This module provides logging setup with support for console and file output.
The NameSilo API key travels as a query parameter, so it is masked in every
log message (including the request lines logged by httpx).
"""

from __future__ import annotations

import logging
import logging.handlers
import re
import sys
from typing import TYPE_CHECKING

from namesilo_ddns.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Final


# Pattern to match sensitive values in log messages
# Each tuple is (pattern, replacement)
# For partial masking, capture the prefix to keep and mask the rest
SENSITIVE_PATTERNS: Final[list[tuple[re.Pattern[str], str]]] = [
    # NameSilo API key as a query parameter ("?key=..." or "&key=...")
    # Keep first 6 characters of the key, mask the rest
    (
        re.compile(r"([?&]key=)([^\s&\"']{0,6})([^\s&\"']*)", re.IGNORECASE),
        r"\1\2******",
    ),
    # API key in key=value log fields ("key=..." at word start)
    (
        re.compile(r"(?<![\w?&])(key=)([^\s&\"',]{0,6})([^\s&\"',]*)", re.IGNORECASE),
        r"\1\2******",
    ),
]


# Constants
LOGGER_NAME: Final[str] = "namesilo_ddns"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that log request URLs (and therefore the API key)
_LIBRARY_LOGGERS: Final[tuple[str, ...]] = ("httpx",)


class SensitiveFilter(logging.Filter):
    """
    A logging filter that masks sensitive information.

    This filter replaces API keys with asterisks to prevent credential
    leakage in console output and log files.
    """

    @staticmethod
    def _mask_sensitive(value: str) -> str:
        """
        Apply all sensitive patterns to mask a string.

        Parameters
        ----------
        value : str
            The string to process.

        Returns
        -------
        str
            The string with sensitive data masked.
        """
        result = value
        for pattern, replacement in SENSITIVE_PATTERNS:
            result = pattern.sub(replacement, result)
        return result

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter and modify log record to mask sensitive data.

        Parameters
        ----------
        record : logging.LogRecord
            The log record to process.

        Returns
        -------
        bool
            Always returns True (record is always logged).
        """
        if record.msg:
            record.msg = self._mask_sensitive(str(record.msg))

        # httpx passes the request URL as an httpx.URL object, not a str
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self._mask_sensitive(str(v)) if _is_textual(v) else v
                    for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._mask_sensitive(str(arg)) if _is_textual(arg) else arg
                    for arg in record.args
                )

        return True


def _is_textual(value: object) -> bool:
    """Whether a log argument is rendered as text and may hold a key."""
    return not isinstance(value, (int, float, bool)) and value is not None


def _configure_handler(handler: logging.Handler) -> None:
    """
    Configure a logging handler with formatter and sensitive filter.

    Parameters
    ----------
    handler : logging.Handler
        The handler to configure.
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    sensitive_filter = SensitiveFilter()

    handler.setFormatter(formatter)
    handler.addFilter(sensitive_filter)


def setup_logging(
    *,
    debug: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Set up logging and return the package logger.

    The returned logger is handed to the updater explicitly. Library loggers
    (httpx) share the same handlers so their request lines are masked too.

    Parameters
    ----------
    debug : bool, optional
        Log at DEBUG level instead of INFO.
    log_file : Path | None, optional
        Also write log records to this file.

    Returns
    -------
    logging.Logger
        The configured "namesilo_ddns" logger.

    Raises
    ------
    ConfigError
        If the log file cannot be opened.
    """
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    _configure_handler(console_handler)
    logger.addHandler(console_handler)

    # File handler (if enabled)
    if log_file is not None:
        try:
            # Ensure log directory exists
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.WatchedFileHandler(
                str(log_file),
                encoding="utf-8",
                delay=False,
            )
            _configure_handler(file_handler)
            logger.addHandler(file_handler)
            logger.info('File logging enabled: "%s".', log_file)
        except OSError as e:
            msg = f'Failed to enable file logging "{log_file}": {e}.'
            raise ConfigError(msg) from e

    # httpx logs each request line at INFO; only surface it in debug mode
    for name in _LIBRARY_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.setLevel(level if debug else logging.WARNING)
        library_logger.handlers.clear()
        for handler in logger.handlers:
            library_logger.addHandler(handler)
        library_logger.propagate = False

    # Prevent propagation to root logger
    logger.propagate = False

    return logger
