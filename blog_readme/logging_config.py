"""Structured logging configuration for the blog README updater."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

MASK = "***"


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    # Attributes every LogRecord carries; anything else came in via ``extra``.
    _RESERVED = frozenset(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Execution context and structured fields
        for key, value in record.__dict__.items():
            if key not in self._RESERVED and not key.startswith("_"):
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class SecretMaskingFormatter(logging.Formatter):
    """Wraps another formatter and redacts registered secrets from its output."""

    def __init__(self, inner: logging.Formatter, secrets: set[str]):
        super().__init__()
        self.inner = inner
        self.secrets = secrets

    def format(self, record: logging.LogRecord) -> str:
        return redact(self.inner.format(record), self.secrets)


_secrets: set[str] = set()


def register_secret(value: str | None) -> None:
    """Register a value that must never appear in log output.

    Empty values are ignored, matching the host platform's masking rules.
    """
    if value:
        _secrets.add(value)


def redact(text: str, secrets: set[str] | None = None) -> str:
    """Replace every registered secret in ``text`` with a fixed mask."""
    # Longest first so a secret containing another one is masked whole
    for secret in sorted(_secrets if secrets is None else secrets, key=len, reverse=True):
        text = text.replace(secret, MASK)
    return text


class ExecutionLogger:
    """Logger with execution context and structured logging."""

    def __init__(self, execution_id: str, component: str = "main"):
        """Initialize execution logger.

        Args:
            execution_id: Unique identifier for this execution
            component: Component name (e.g., 'feed_processor', 'publisher')
        """
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"blog_readme.{component}")
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None

    def _log_with_context(self, level: int, message: str, **kwargs) -> None:
        """Log message with execution context."""
        extra = {
            "execution_id": self.execution_id,
            "component": self.component,
            **kwargs,
        }
        self.logger.log(level, message, extra=extra)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with context."""
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with context."""
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message with context."""
        self._log_with_context(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with context."""
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def log_execution_start(self, **kwargs) -> None:
        """Log execution start with timestamp."""
        self.start_time = datetime.now(UTC)
        self.info(
            f"Starting {self.component} execution",
            execution_start=self.start_time.isoformat(),
            **kwargs,
        )

    def log_execution_end(self, success: bool = True, **kwargs) -> None:
        """Log execution end with timestamp and duration."""
        self.end_time = datetime.now(UTC)

        duration_seconds = None
        if self.start_time:
            duration_seconds = (self.end_time - self.start_time).total_seconds()

        self.info(
            f"Completed {self.component} execution",
            execution_end=self.end_time.isoformat(),
            execution_duration_seconds=duration_seconds,
            execution_success=success,
            **kwargs,
        )

    def log_feed_processing(self, feed_url: str, items_count: int) -> None:
        """Log feed processing with structured data."""
        self.info(
            f"Processed feed: {items_count} entries kept",
            feed_url=feed_url,
            items_count=items_count,
        )

    def log_command(self, command: str, args: list[str], exit_code: int) -> None:
        """Log a finished external command with structured data."""
        level = logging.INFO if exit_code == 0 else logging.ERROR
        self._log_with_context(
            level,
            f"Command finished: {command} {' '.join(args)}",
            command=command,
            command_args=list(args),
            exit_code=exit_code,
        )

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        """Log execution metrics."""
        self.info("Execution metrics", metrics=metrics)


def setup_structured_logging(log_level: str = "INFO") -> None:
    """Setup structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    level = _level_from_string(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(SecretMaskingFormatter(StructuredFormatter(), _secrets))
    root_logger.addHandler(console_handler)

    loggers = [
        "blog_readme",
        "blog_readme.main",
        "blog_readme.feed_processor",
        "blog_readme.readme",
        "blog_readme.command_runner",
        "blog_readme.publisher",
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


def _level_from_string(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Invalid log level: {level!r}")
    return value


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create an execution logger for a component.

    Args:
        component: Component name
        execution_id: Optional execution ID (will generate one if not provided)

    Returns:
        ExecutionLogger instance
    """
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    return ExecutionLogger(execution_id, component)
