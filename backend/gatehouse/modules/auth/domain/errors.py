"""
Auth Domain Error Codes

Auth failures are raised as the core ``ValidationError`` / ``BusinessError``
classes carrying one of these codes. The module registers their HTTP status
codes with the application's ``ErrorCodeRegistry``.
"""

from enum import Enum

from gatehouse.core.errors import BusinessError, ErrorSeverity, ValidationError


class AuthErrorCode(str, Enum):
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_TAKEN = "EMAIL_ALREADY_TAKEN"
    USERNAME_ALREADY_TAKEN = "USERNAME_ALREADY_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_DELETED = "USER_DELETED"
    USER_ALREADY_DELETED = "USER_ALREADY_DELETED"
    USER_MUST_BE_ACTIVE = "USER_MUST_BE_ACTIVE"
    USER_MUST_BE_DISABLED = "USER_MUST_BE_DISABLED"
    INVALID_USER_STATUS = "INVALID_USER_STATUS"
    USER_GROUP_NOT_FOUND = "USER_GROUP_NOT_FOUND"
    USER_GROUP_NAME_ALREADY_TAKEN = "USER_GROUP_NAME_ALREADY_TAKEN"
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    USER_ALREADY_IN_GROUP = "USER_ALREADY_IN_GROUP"
    USER_NOT_IN_GROUP = "USER_NOT_IN_GROUP"
    ROLE_ALREADY_IN_GROUP = "ROLE_ALREADY_IN_GROUP"
    ROLE_NOT_IN_GROUP = "ROLE_NOT_IN_GROUP"
    EXTERNAL_AUTHENTICATION_ERROR = "EXTERNAL_AUTHENTICATION_ERROR"


AUTH_ERROR_STATUS_CODES: dict[AuthErrorCode, int] = {
    AuthErrorCode.USER_NOT_FOUND: 404,
    AuthErrorCode.EMAIL_ALREADY_TAKEN: 400,
    AuthErrorCode.USERNAME_ALREADY_TAKEN: 400,
    AuthErrorCode.INVALID_CREDENTIALS: 401,
    AuthErrorCode.USER_DELETED: 404,
    AuthErrorCode.USER_ALREADY_DELETED: 400,
    AuthErrorCode.USER_MUST_BE_ACTIVE: 403,
    AuthErrorCode.USER_MUST_BE_DISABLED: 400,
    AuthErrorCode.INVALID_USER_STATUS: 400,
    AuthErrorCode.USER_GROUP_NOT_FOUND: 404,
    AuthErrorCode.USER_GROUP_NAME_ALREADY_TAKEN: 400,
    AuthErrorCode.ROLE_NOT_FOUND: 404,
    AuthErrorCode.USER_ALREADY_IN_GROUP: 400,
    AuthErrorCode.USER_NOT_IN_GROUP: 400,
    AuthErrorCode.ROLE_ALREADY_IN_GROUP: 400,
    AuthErrorCode.ROLE_NOT_IN_GROUP: 400,
    AuthErrorCode.EXTERNAL_AUTHENTICATION_ERROR: 500,
}


class ExternalAuthenticationError(BusinessError):
    """The identity provider failed or returned an unusable response."""

    default_code = AuthErrorCode.EXTERNAL_AUTHENTICATION_ERROR.value
    status_code = 500
    severity = ErrorSeverity.HIGH


def user_not_found(user_id: str | None = None) -> ValidationError:
    return ValidationError(
        AuthErrorCode.USER_NOT_FOUND, {"id": user_id} if user_id else None
    )


def invalid_credentials() -> ValidationError:
    return ValidationError(AuthErrorCode.INVALID_CREDENTIALS)


__all__ = [
    "AUTH_ERROR_STATUS_CODES",
    "AuthErrorCode",
    "ExternalAuthenticationError",
    "invalid_credentials",
    "user_not_found",
]
