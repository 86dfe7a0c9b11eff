"""Centralized logging configuration for transcript-sync.

This module provides consistent logging setup for the CLI and for
applications embedding the alignment library. Configuration respects
environment variables and provides sensible defaults.
"""

from __future__ import annotations

import logging
import os
import sys
import warnings
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(
    *,
    level: LogLevel | None,
    verbose: bool,
    quiet: bool,
) -> int:
    """Pick the effective root log level.

    Args:
        level: Explicit level name; wins over the flags.
        verbose: Request DEBUG output.
        quiet: Request CRITICAL-only output.

    Returns:
        The numeric logging level.
    """
    if level is not None:
        return getattr(logging, level.upper())
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.CRITICAL
    env_level = os.getenv("TRANSCRIPT_SYNC_LOG_LEVEL", "").strip().upper()
    if env_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return getattr(logging, env_level)
    return logging.INFO


def configure_logging(
    *,
    level: LogLevel | None = None,
    verbose: bool = False,
    quiet: bool = False,
    format_string: str | None = None,
) -> None:
    """Configure centralized logging for the application.

    Logs go to stderr so that formatted transcripts written to stdout stay
    machine readable. This should be called once at application startup.

    Args:
        level: Explicit log level (overrides verbose/quiet).
        verbose: Enable verbose logging (DEBUG level).
        quiet: Suppress all non-critical logs and Python warnings.
        format_string: Custom log format (uses default if None).

    Examples:
        >>> # CLI verbose mode
        >>> configure_logging(verbose=True)

        >>> # Library consumer wanting only problems
        >>> configure_logging(level="WARNING")
    """
    log_level = _resolve_level(level=level, verbose=verbose, quiet=quiet)

    logging.basicConfig(
        level=log_level,
        format=format_string or _DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Reconfigure even if already configured
    )

    if quiet:
        warnings.filterwarnings("ignore")
    else:
        logger = logging.getLogger(__name__)
        logger.debug(f"Logging configured: level={logging.getLevelName(log_level)}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of calling module).

    Returns:
        Configured logger instance.

    Examples:
        >>> logger = get_logger(__name__)
        >>> logger.info("Alignment started")
    """
    return logging.getLogger(name)
