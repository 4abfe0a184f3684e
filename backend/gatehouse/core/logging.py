# ruff: noqa: A005
"""Structured logging on top of structlog.

Loggers take keyword arguments as structured fields. Request scoped values such
as the request id and the caller's user id are bound with ``log_context`` and
merged into every line emitted while the request is served.

Architecture:
- LogConfig: Level, renderer and redaction settings per environment
- Processors: Redaction and truncation applied before rendering
- StructuredLogger: Named logger resolving the current structlog setup on each call
"""

import logging
import re
import sys
from dataclasses import dataclass, field
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars

from gatehouse.core.enums import Environment, LogFormat, LogLevel

REDACTED = "***"
SENSITIVE_KEY_PATTERN = re.compile(r"password|token|secret|credential|api_key", re.IGNORECASE)

# Third-party loggers lowered to WARNING outside development
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx", "aiosqlite")


@dataclass
class LogConfig:
    """
    Logging configuration.

    ``format`` defaults per environment: console lines in development, plain
    key/value lines in tests and JSON everywhere else.

    Usage Example:
        configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.DEVELOPMENT))
    """

    level: LogLevel = field(default=LogLevel.INFO)
    format: LogFormat | None = field(default=None)
    environment: Environment = field(default=Environment.DEVELOPMENT)
    enable_caller_info: bool | None = field(default=None)
    redact_sensitive_fields: bool = field(default=True)
    max_message_length: int = field(default=10000)

    def __post_init__(self):
        if self.format is None:
            self.format = {
                Environment.DEVELOPMENT: LogFormat.CONSOLE,
                Environment.TESTING: LogFormat.PLAIN,
            }.get(self.environment, LogFormat.JSON)
        if self.enable_caller_info is None:
            self.enable_caller_info = self.environment == Environment.DEVELOPMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "format": self.format.value,
            "environment": self.environment.value,
            "enable_caller_info": self.enable_caller_info,
            "redact_sensitive_fields": self.redact_sensitive_fields,
        }


# =====================================================================================
# PROCESSORS
# =====================================================================================


def _redact(key: Any, value: Any) -> Any:
    if value is not None and SENSITIVE_KEY_PATTERN.search(str(key)):
        return REDACTED
    if isinstance(value, dict):
        return {k: _redact(k, v) for k, v in value.items()}
    return value


def redact_sensitive_fields(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Mask values whose key looks like a password, token or secret."""
    return {
        key: value if key == "event" else _redact(key, value)
        for key, value in event_dict.items()
    }


class TruncateEvent:
    """Cut overlong messages so one log line stays readable."""

    def __init__(self, max_length: int):
        self.max_length = max_length

    def __call__(self, logger: Any, method_name: str, event_dict: dict) -> dict:
        event = event_dict.get("event")
        if isinstance(event, str) and len(event) > self.max_length:
            event_dict["event"] = event[: self.max_length] + "...[truncated]"
        return event_dict


def _renderer(log_format: LogFormat) -> Any:
    if log_format == LogFormat.JSON:
        return structlog.processors.JSONRenderer()
    if log_format == LogFormat.CONSOLE:
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    return structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])


# =====================================================================================
# CONFIGURATION
# =====================================================================================

_configured_with: LogConfig | None = None


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Safe to call again; the last configuration wins for every logger,
    including module level ones created before the call.
    """
    global _configured_with  # noqa: PLW0603

    config = config or LogConfig()
    processors: list[Any] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if config.enable_caller_info:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ],
                additional_ignores=[__name__],
            )
        )
    if config.redact_sensitive_fields:
        processors.append(redact_sensitive_fields)
    processors.extend(
        [
            TruncateEvent(config.max_message_length),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(config.format),
        ]
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=config.level.to_logging_level(),
        force=True,
    )
    if config.environment != Environment.DEVELOPMENT:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    _configured_with = config


# =====================================================================================
# LOGGERS
# =====================================================================================


class StructuredLogger:
    """
    Named logger whose keyword arguments become structured fields.

    The structlog logger is looked up on every call so reconfiguration applies
    to loggers created at import time.
    """

    def __init__(self, name: str):
        self.name = name

    def _emit(self, _level: str, _message: str, /, **kwargs: Any) -> None:
        if _configured_with is None:
            configure_logging()
        getattr(structlog.get_logger(self.name), _level)(_message, **kwargs)

    def debug(self, message: str, /, **kwargs: Any) -> None:
        self._emit("debug", message, **kwargs)

    def info(self, message: str, /, **kwargs: Any) -> None:
        self._emit("info", message, **kwargs)

    def warning(self, message: str, /, **kwargs: Any) -> None:
        self._emit("warning", message, **kwargs)

    def error(self, message: str, /, **kwargs: Any) -> None:
        self._emit("error", message, **kwargs)

    def critical(self, message: str, /, **kwargs: Any) -> None:
        self._emit("critical", message, **kwargs)

    def exception(self, message: str, /, **kwargs: Any) -> None:
        """Log at ERROR with the active exception's traceback."""
        kwargs["exc_info"] = True
        self._emit("error", message, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return StructuredLogger(name)


def log_context(**kwargs: Any) -> None:
    """Bind fields to every subsequent log line of the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "LogConfig",
    "StructuredLogger",
    "clear_context",
    "configure_logging",
    "get_logger",
    "log_context",
    "redact_sensitive_fields",
]
