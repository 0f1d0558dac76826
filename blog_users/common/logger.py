"""
Logging configuration for the users data-access layer.

Repository log lines are tagged with the collection namespace and the
operation that emitted them, e.g. "[blog.users] [insert_user] Inserted ...".
The driver's own "pymongo" loggers are kept at a separate level so that
DEBUG output from the repository does not drown in command monitoring.
"""

import logging
import os
import sys
from typing import Optional

from .config import Config


# Global debug mode flag - can be set via environment or at runtime
_GLOBAL_DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"

DRIVER_LOGGER = "pymongo"


def set_global_debug_mode(enabled: bool) -> None:
    """Set global debug mode."""
    global _GLOBAL_DEBUG_MODE
    _GLOBAL_DEBUG_MODE = enabled


def is_debug_mode() -> bool:
    """Check if debug mode is enabled globally."""
    return _GLOBAL_DEBUG_MODE


class RepositoryLogger:
    """
    Logger bound to a collection namespace and, optionally, an operation.
    """

    def __init__(
        self,
        name: str,
        namespace: Optional[str] = None,
        operation: Optional[str] = None,
        debug_mode: Optional[bool] = None
    ):
        self.logger = logging.getLogger(name)
        self.namespace = namespace
        self.operation = operation

        self._debug_mode = debug_mode if debug_mode is not None else is_debug_mode()
        if self._debug_mode:
            self.logger.setLevel(logging.DEBUG)

        tags = [f"[{tag}]" for tag in (namespace, operation) if tag]
        self._prefix = " ".join(tags)

    def bind(self, operation: str) -> "RepositoryLogger":
        """Return a logger for the same namespace tagged with an operation."""
        return RepositoryLogger(
            self.logger.name,
            namespace=self.namespace,
            operation=operation,
            debug_mode=self._debug_mode,
        )

    def _format_message(self, message: str) -> str:
        return f"{self._prefix} {message}" if self._prefix else message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._format_message(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._format_message(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._format_message(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._format_message(message), **kwargs)


def setup_logging(
    level: Optional[str] = None,
    format: Optional[str] = None,
    driver_level: str = "WARNING",
) -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level for the application; defaults to Config.LOG_LEVEL
        format: "simple" or "json"; defaults to Config.LOG_FORMAT
        driver_level: Level for the pymongo loggers (DEBUG in debug mode)
    """
    log_level = getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO)
    log_format = format or Config.LOG_FORMAT

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if log_format == "json":
        formatter = logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    if is_debug_mode():
        driver_level = "DEBUG"
    logging.getLogger(DRIVER_LOGGER).setLevel(
        getattr(logging, driver_level.upper(), logging.WARNING)
    )


def get_logger(
    name: str,
    namespace: Optional[str] = None,
    operation: Optional[str] = None,
    debug_mode: Optional[bool] = None
) -> RepositoryLogger:
    """
    Get a repository logger.

    Args:
        name: Logger name (usually __name__)
        namespace: Collection namespace tag, e.g. "blog.users"
        operation: Operation tag, e.g. "insert_user"
        debug_mode: If True, enables DEBUG level. If None, uses global setting.
    """
    return RepositoryLogger(name, namespace, operation, debug_mode)
