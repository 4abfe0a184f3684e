"""Error classes, error codes and the error-code registry."""

import logging
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ValidationErrorCode(str, Enum):
    """Codes for input and state validation failures."""

    FIELD_IS_REQUIRED = "FIELD_IS_REQUIRED"
    FIELD_IS_INVALID = "FIELD_IS_INVALID"
    FIELD_IS_TOO_SHORT = "FIELD_IS_TOO_SHORT"
    FIELD_IS_TOO_LONG = "FIELD_IS_TOO_LONG"
    NO_UPDATES = "NO_UPDATES"
    OUTDATED_VERSION = "OUTDATED_VERSION"


class AuthorizationErrorCode(str, Enum):
    """Codes for authentication and authorization failures."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_TOKEN = "INVALID_TOKEN"


class SystemErrorCode(str, Enum):
    """Codes produced by the transport boundary itself."""

    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


def _code_value(code: str | Enum) -> str:
    return code.value if isinstance(code, Enum) else str(code)


class GatehouseError(Exception):
    """
    Base exception for all Gatehouse errors.

    Every error carries a stable machine-readable ``code`` and an optional
    structured ``data`` payload. The transport layer serializes both as
    ``{"error": code, "data": data}``.
    """

    default_code: str = "ERROR"
    status_code: int = 500
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        code: str | Enum | None = None,
        data: dict[str, Any] | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.code = _code_value(code) if code else self.default_code
        self.data = data
        self.message = message or self.code
        super().__init__(self.message)
        self.error_id = str(uuid.uuid4())
        self.__cause__ = kwargs.get("cause")

        self._log_error()

    def _log_error(self) -> None:
        """Log error with structured data."""
        logger = logging.getLogger(f"gatehouse.errors.{self.__class__.__name__}")
        log_data = {
            "error_id": self.error_id,
            "code": self.code,
            "error_message": self.message,
            "severity": self.severity.value,
            "status_code": self.status_code,
            "data": self._sanitize(self.data or {}),
        }

        if self.severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", extra=log_data)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error("High severity error", extra=log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error", extra=log_data)
        else:
            logger.info("Low severity error", extra=log_data)

    def _sanitize(self, data: dict) -> dict:
        """Remove sensitive values before logging."""
        sensitive_keys = {"password", "token", "secret", "key", "credential"}
        sanitized = {}

        for key, value in data.items():
            if any(sensitive in key.lower() for sensitive in sensitive_keys):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize(value)
            else:
                sanitized[key] = value

        return sanitized

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for API responses."""
        return {"error": self.code, "data": self.data}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class BusinessError(GatehouseError):
    """Expected violation of a business rule."""

    default_code = "BUSINESS_ERROR"
    status_code = 400
    severity = ErrorSeverity.LOW


class ValidationError(BusinessError):
    """Input, existence or state validation failure."""

    default_code = ValidationErrorCode.FIELD_IS_INVALID.value

    @classmethod
    def for_field(
        cls, code: str | Enum, field: str, **extra: Any
    ) -> "ValidationError":
        """Create a validation error whose data names the offending field."""
        return cls(code, {"field": field, **extra})


class UnauthorizedError(GatehouseError):
    """Caller is not authenticated."""

    default_code = AuthorizationErrorCode.UNAUTHORIZED.value
    status_code = 401
    severity = ErrorSeverity.LOW


class ForbiddenError(GatehouseError):
    """Caller is authenticated but lacks a required role."""

    default_code = AuthorizationErrorCode.FORBIDDEN.value
    status_code = 403
    severity = ErrorSeverity.MEDIUM


class InfrastructureError(GatehouseError):
    """Base class for infrastructure errors."""

    default_code = SystemErrorCode.INTERNAL_SERVER_ERROR.value
    status_code = 500
    severity = ErrorSeverity.HIGH


class ConfigurationError(InfrastructureError):
    """Configuration error."""

    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, config_key: str | None = None) -> None:
        super().__init__(
            data={"config_key": config_key} if config_key else None,
            message=message,
        )


# Error code registry

DEFAULT_STATUS_CODES: dict[str, int] = {
    AuthorizationErrorCode.UNAUTHORIZED.value: 401,
    AuthorizationErrorCode.FORBIDDEN.value: 403,
    AuthorizationErrorCode.INVALID_TOKEN.value: 401,
    ValidationErrorCode.FIELD_IS_REQUIRED.value: 400,
    ValidationErrorCode.FIELD_IS_INVALID.value: 400,
    ValidationErrorCode.FIELD_IS_TOO_SHORT.value: 400,
    ValidationErrorCode.FIELD_IS_TOO_LONG.value: 400,
    ValidationErrorCode.NO_UPDATES.value: 400,
    ValidationErrorCode.OUTDATED_VERSION.value: 409,
    SystemErrorCode.VALIDATION_ERROR.value: 400,
    SystemErrorCode.INTERNAL_SERVER_ERROR.value: 500,
}


class ErrorCodeRegistry:
    """Maps error codes to HTTP status codes."""

    def __init__(self, defaults: Mapping[str, int] | None = None) -> None:
        self._status_codes: dict[str, int] = dict(
            DEFAULT_STATUS_CODES if defaults is None else defaults
        )

    def register(self, code: str | Enum, status_code: int) -> None:
        self._status_codes[_code_value(code)] = status_code

    def register_many(self, mapping: Mapping[str | Enum, int]) -> None:
        for code, status_code in mapping.items():
            self.register(code, status_code)

    def get_status_code(self, code: str | Enum) -> int | None:
        return self._status_codes.get(_code_value(code))

    def resolve(self, error: GatehouseError) -> int:
        """Status for an error, falling back to its class default."""
        status_code = self.get_status_code(error.code)
        return status_code if status_code is not None else error.status_code


__all__ = [
    "DEFAULT_STATUS_CODES",
    "AuthorizationErrorCode",
    "BusinessError",
    "ConfigurationError",
    "ErrorCodeRegistry",
    "ErrorSeverity",
    "ForbiddenError",
    "GatehouseError",
    "InfrastructureError",
    "SystemErrorCode",
    "UnauthorizedError",
    "ValidationError",
    "ValidationErrorCode",
]
