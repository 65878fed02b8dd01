"""
Logging helpers for the pull_secrets logger hierarchy.

Library modules only create loggers under "pull_secrets"; handlers and levels
are set up by entry points through setup_logging().
"""

import logging
from typing import Optional

from pull_secrets.errors import ActionableError

PACKAGE_LOGGER = "pull_secrets"
DEFAULT_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def setup_logging(level: int = logging.INFO, fmt: Optional[str] = None) -> logging.Logger:
    """Set the level of the pull_secrets logger and make sure its records are emitted.

    A stream handler is attached only when neither the root logger nor the
    package logger has one, so repeated calls never duplicate output.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    if not logging.getLogger().handlers and not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        package_logger.addHandler(handler)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the pull_secrets hierarchy.

    Names outside the package (e.g. "__main__") are nested under it.
    """
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def log_exception(logger: logging.Logger, message: str, exc_info: Optional[BaseException] = None) -> None:
    """Log an error with its guidance, keeping the traceback at debug level.

    ActionableError suggestions and details are logged one per line; any
    other exception is logged as "<type>: <message>".

    Args:
        logger: Logger instance to use
        message: Context for the failure, logged first
        exc_info: The exception that was raised
    """
    logger.error(message)
    if isinstance(exc_info, ActionableError):
        logger.error(exc_info.message)
        for i, suggestion in enumerate(exc_info.suggestions, 1):
            logger.error(f"  fix {i}: {suggestion}")
        for key, value in exc_info.details.items():
            logger.error(f"  {key}: {value}")
    elif exc_info is not None:
        logger.error(f"{type(exc_info).__name__}: {exc_info}")

    if exc_info is not None:
        logger.debug("Traceback:", exc_info=(type(exc_info), exc_info, exc_info.__traceback__))


def mask_secret(value: Optional[str]) -> str:
    """Return a same-length mask for a secret so it can be printed or logged."""
    if not value:
        return "<empty>"
    return "*" * len(value)
