"""Logging helpers for the WealthFlow application.

Loggers write to a dated file under ``logs/<subdir>/`` in the project root and
optionally mirror records to the console. ``get_app_logger`` is the default
logger injected into use cases; ``get_usage_logger`` records user-facing
actions (sign in, sign out, advisory requests).
"""

from collections.abc import Callable
from datetime import date
import logging
from pathlib import Path

from src.utils.utils import get_project_root


_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "app"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = True
        self._level = logging.INFO
        self._formatter_factory: Callable[[], logging.Formatter] = (
            LoggerBuilder._default_formatter
        )
        self._file_handler_factory: Callable[
            [Path, logging.Formatter], logging.Handler
        ] = LoggerBuilder._default_file_handler
        self._console_handler_factory: Callable[
            [logging.Formatter], logging.Handler
        ] = LoggerBuilder._default_console_handler
        self._built: logging.Logger | None = None

    def name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        self._level = level
        return self

    def formatter(
        self,
        factory: Callable[[], logging.Formatter],
    ) -> "LoggerBuilder":
        self._formatter_factory = factory
        return self

    def file_handler(
        self,
        factory: Callable[[Path, logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: Callable[[logging.Formatter], logging.Handler],
    ) -> "LoggerBuilder":
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Build the logger, or return the one already built.

        Returns:
            logging.Logger: Logger with file and optional console handlers.
        """
        if self._built is not None:
            return self._built
        logger = logging.getLogger(self._name)
        logger.setLevel(self._level)
        logger.propagate = False
        if not logger.handlers:
            fmt = self._formatter_factory()
            log_dir = get_project_root() / "logs" / self._subdir
            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"
            logger.addHandler(self._file_handler_factory(log_path, fmt))
            if self._console:
                logger.addHandler(self._console_handler_factory(fmt))
        self._built = logger
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return date.today().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(_LOG_FORMAT)

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Process-wide logger wrapper, one instance per subclass."""

    _instance = None
    _subdir = "app"
    _prefix = "app_logs"

    def __new__(cls, name: str = "app"):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(self, name: str = "app") -> None:
        if self._initialized:
            return
        self.logger = (
            LoggerBuilder()
            .name(name)
            .subdir(self._subdir)
            .prefix(self._prefix)
            .build()
        )
        self._initialized = True

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def critical(self, message: str) -> None:
        self.logger.critical(message)


class AppLogger(Logger):
    """Logger for application and infrastructure events."""

    _instance = None
    _subdir = "app"
    _prefix = "wealthflow"


class UsageLogger(Logger):
    """Logger for user-facing actions."""

    _instance = None
    _subdir = "usage"
    _prefix = "usage"


def get_app_logger() -> AppLogger:
    """Return the shared application logger."""
    return AppLogger("wealthflow")


def get_usage_logger() -> UsageLogger:
    """Return the shared usage logger."""
    return UsageLogger("wealthflow.usage")


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "UsageLogger",
    "get_app_logger",
    "get_usage_logger",
]
