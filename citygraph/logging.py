"""Centralized logging configuration for citygraph."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "citygraph"

# Flag to track if we've already set up the root logger
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the root citygraph logger with a single handler.

    Calling it more than once is a no-op until ``reset_logging`` runs.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to StreamHandler on stderr).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # stderr keeps stdout free for results (path listings, JSON documents)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees the records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the citygraph root configuration.

    Args:
        name: Logger name (typically ``__name__`` of the calling module).

    Returns:
        Logger instance with level NOTSET so it follows the root logger.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all citygraph loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Disable debug logging, set to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Reset logging configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
