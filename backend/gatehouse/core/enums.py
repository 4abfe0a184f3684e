"""Shared enums for the Gatehouse application."""

import logging
from enum import Enum


class Environment(Enum):
    """Deployment environment, read from ``ENVIRONMENT``."""

    DEVELOPMENT = "dev"
    TESTING = "test"
    STAGING = "staging"
    PRODUCTION = "prod"

    @property
    def is_production(self) -> bool:
        return self == Environment.PRODUCTION


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Numeric level understood by the standard library handlers."""
        return logging.getLevelName(self.value)


class LogFormat(Enum):
    """Renderer used for log lines."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"


class JWTAlgorithm(Enum):
    """HMAC algorithms accepted for access tokens."""

    HS256 = "HS256"
    HS512 = "HS512"


class SortOrder(str, Enum):
    """Sort direction for paginated reads."""

    ASC = "ASC"
    DESC = "DESC"
