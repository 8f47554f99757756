"""Logging configuration for Tianwan Config.

Provides structured logging through structlog on top of the standard
library, with Rich console output for development and JSON output for
production runs.
"""

import functools
import logging
import logging.handlers
import sys
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

LOG_FILE_NAME = "tianwan-config.log"

logger = structlog.get_logger()


def setup_logging(
    settings: Settings,
    enable_json: bool | None = None,
    enable_rich: bool | None = None,
) -> None:
    """Configure application logging.

    Args:
        settings: Process settings
        enable_json: Force JSON formatting (None = settings, then environment)
        enable_rich: Force Rich formatting (None = auto-detect from environment)
    """
    if enable_json is None:
        enable_json = (
            settings.json_logs
            if settings.json_logs is not None
            else settings.is_production()
        )
    if enable_rich is None:
        enable_rich = settings.is_development() and not enable_json

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if enable_json:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if enable_rich and not enable_json:
        console = Console(stderr=True)
        rich_handler = RichHandler(
            console=console,
            show_time=False,
            show_level=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(settings.log_level)
        handlers.append(rich_handler)
    else:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
        stream_handler.setLevel(settings.log_level)
        handlers.append(stream_handler)

    if settings.logs_dir:
        settings.logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.logs_dir / LOG_FILE_NAME,
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
        file_handler.setLevel(settings.log_level)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)

    # openpyxl warns about every unsupported workbook extension
    logging.getLogger("openpyxl").setLevel(
        max(logging.WARNING, getattr(logging, settings.log_level))
    )

    logger.debug(
        "Logging configured",
        log_level=settings.log_level,
        json_logging=enable_json,
        rich_logging=enable_rich,
        log_file=(
            str(settings.logs_dir / LOG_FILE_NAME) if settings.logs_dir else None
        ),
    )


class ContextualLogger:
    """Logger with automatic context management."""

    def __init__(self, name: str, **context: Any) -> None:
        self.name = name
        self._logger = structlog.get_logger(name)
        self._context = context

    def bind(self, **new_context: Any) -> "ContextualLogger":
        """Create a new logger with additional context."""
        combined_context = {**self._context, **new_context}
        return ContextualLogger(self.name, **combined_context)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        combined_kwargs = {**self._context, **kwargs}
        getattr(self._logger, level)(message, **combined_kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("error", message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._log("exception", message, **kwargs)


def get_logger(name: str, **context: Any) -> ContextualLogger:
    """Get a contextual logger instance.

    Args:
        name: Logger name
        **context: Additional context to include in all log messages

    Returns:
        ContextualLogger: Configured logger instance
    """
    return ContextualLogger(name, **context)


@contextmanager
def log_context(**context: Any) -> Generator[None, None, None]:
    """Bind context to every log message emitted within the block."""
    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def log_execution_time(
    logger_instance: ContextualLogger, operation: str, level: str = "info"
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log execution time of functions.

    Args:
        logger_instance: Logger to use
        operation: Name of the operation being timed
        level: Log level to use

    Returns:
        Decorator function
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger_instance.error(
                    f"{operation} failed",
                    operation=operation,
                    execution_time_seconds=time.perf_counter() - start_time,
                    error=str(e),
                    success=False,
                )
                raise
            getattr(logger_instance, level)(
                f"{operation} completed",
                operation=operation,
                execution_time_seconds=time.perf_counter() - start_time,
                success=True,
            )
            return result

        return wrapper

    return decorator
