"""Structured logging utilities for userpurge."""

import functools
import json
import logging
import logging.config
import os
import sys
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

ROOT_LOGGER_NAME = "userpurge"

# Extra record attributes surfaced by the structured and detailed formatters
CONTEXT_FIELDS = (
    "username",
    "user_id",
    "operation",
    "file_path",
    "api_endpoint",
    "status_code",
    "duration",
)


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for terminal output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def __init__(self, *args: Any, disable_colors: bool = False, **kwargs: Any) -> None:
        """Initialize formatter with color configuration.

        Args:
            disable_colors: Whether to disable colored output
        """
        super().__init__(*args, **kwargs)
        self.disable_colors = disable_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for terminal output."""
        if (
            not self.disable_colors
            and hasattr(sys.stderr, "isatty")
            and sys.stderr.isatty()
        ):
            color = self.COLORS.get(record.levelname, "")
            reset = self.COLORS["RESET"]
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{reset}"

        return super().format(record)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)

        return json.dumps(log_entry, default=str)


class DetailedFormatter(logging.Formatter):
    """Detailed formatter with context information."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with detailed context."""
        base_msg = super().format(record)

        context_parts = []
        if hasattr(record, "operation"):
            context_parts.append(f"op={record.operation}")
        if hasattr(record, "username"):
            context_parts.append(f"username={record.username}")
        if hasattr(record, "user_id"):
            context_parts.append(f"user={record.user_id}")
        if hasattr(record, "api_endpoint"):
            context_parts.append(f"endpoint={record.api_endpoint}")
        if hasattr(record, "status_code"):
            context_parts.append(f"status={record.status_code}")
        if hasattr(record, "duration"):
            context_parts.append(f"duration={record.duration:.3f}s")

        if context_parts:
            return base_msg + " [" + ", ".join(context_parts) + "]"

        return base_msg


class OperationFilter(logging.Filter):
    """Filter to add operation context to log records."""

    def __init__(self, operation: str | None = None):
        """Initialize the filter with an operation context.

        Args:
            operation: The current operation being performed
        """
        super().__init__()
        self.operation = operation

    def filter(self, record: logging.LogRecord) -> bool:
        """Add operation context to the record."""
        if self.operation and not hasattr(record, "operation"):
            record.operation = self.operation
        return True


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    structured: bool = False,
    operation: str | None = None,
    log_format: str = "console",
    disable_colors: bool = False,
) -> logging.Logger:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path for file output
        structured: Whether to use structured JSON logging
        operation: Current operation context for filtering
        log_format: Log format (console, json, detailed)
        disable_colors: Whether to disable colored output

    Returns:
        logging.Logger: Configured logger instance
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if structured or log_format == "json":
        console_formatter: logging.Formatter = StructuredFormatter()
    elif log_format == "detailed":
        console_formatter = DetailedFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:  # console format (default)
        console_formatter = ColoredFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            disable_colors=disable_colors,
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        # Files always get JSON lines
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    if operation:
        operation_filter = OperationFilter(operation)
        for handler in root_logger.handlers:
            handler.addFilter(operation_filter)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance under the userpurge namespace
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_from_env() -> logging.Logger:
    """Configure logging from environment variables.

    Environment variables:
        USERPURGE_LOG_LEVEL: Log level (default: INFO)
        USERPURGE_LOG_FILE: Log file path (optional)
        USERPURGE_LOG_STRUCTURED: Use structured logging (default: false)
        USERPURGE_LOG_OPERATION: Current operation context (optional)
        USERPURGE_LOG_FORMAT: Log format (console, json, detailed) (default: console)
        USERPURGE_LOG_DISABLE_COLORS: Disable colored output (default: false)

    Returns:
        logging.Logger: Configured logger instance
    """
    level = os.getenv("USERPURGE_LOG_LEVEL", "INFO")
    log_file = os.getenv("USERPURGE_LOG_FILE")
    structured = os.getenv("USERPURGE_LOG_STRUCTURED", "false").lower() == "true"
    operation = os.getenv("USERPURGE_LOG_OPERATION")
    log_format = os.getenv("USERPURGE_LOG_FORMAT", "console")
    disable_colors = (
        os.getenv("USERPURGE_LOG_DISABLE_COLORS", "false").lower() == "true"
    )

    return setup_logging(
        level=level,
        log_file=log_file,
        structured=structured,
        operation=operation,
        log_format=log_format,
        disable_colors=disable_colors,
    )


def configure_from_yaml(config_path: str | Path) -> logging.Logger:
    """Configure logging from a YAML dictConfig file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        logging.Logger: Configured logger instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Logging config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    except (yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
        raise ValueError(f"Invalid logging configuration: {e}") from e

    return logging.getLogger(ROOT_LOGGER_NAME)


def log_operation(operation: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator for logging operation start/end with duration.

    Args:
        operation: Operation name
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = get_logger(func.__module__)
            logger.info(f"Starting {operation}", extra={"operation": operation})
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Failed {operation}: {e}",
                    extra={
                        "operation": operation,
                        "duration": time.perf_counter() - start_time,
                    },
                    exc_info=True,
                )
                raise

            logger.info(
                f"Completed {operation}",
                extra={
                    "operation": operation,
                    "duration": time.perf_counter() - start_time,
                },
            )
            return result

        return wrapper

    return decorator


def init_default_logging() -> None:
    """Initialize default logging configuration if not already configured.

    A YAML file named by ``USERPURGE_LOG_CONFIG`` takes precedence over the
    environment variables read by :func:`configure_from_env`.
    """
    if logging.getLogger(ROOT_LOGGER_NAME).handlers:
        return

    yaml_config = os.getenv("USERPURGE_LOG_CONFIG")
    if not yaml_config:
        configure_from_env()
        return

    try:
        configure_from_yaml(yaml_config)
    except (FileNotFoundError, ValueError) as e:
        logger = configure_from_env()
        logger.warning(f"Falling back to environment logging config: {e}")


# Initialize logging when module is imported
init_default_logging()
