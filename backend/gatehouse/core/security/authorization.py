"""Role-based authorization checks.

Handlers call these checks first, before any repository or provider call, so a
rejected request never leaves partial side effects.
"""

from collections.abc import Iterable
from enum import Enum

from gatehouse.core.application.context import AppContext, AppUser
from gatehouse.core.errors import (
    AuthorizationErrorCode,
    ForbiddenError,
    UnauthorizedError,
)


def _role_value(role: str | Enum) -> str:
    return role.value if isinstance(role, Enum) else role


class AuthorizationService:
    """
    Stateless guard over the caller's role list.

    Usage Example:
        authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
        authorization_service.require_one_of_roles(
            [AuthRole.AUTH_MANAGER, AuthRole.AUTH_VIEWER], context
        )
    """

    def require_authenticated(self, context: AppContext) -> AppUser:
        """
        Ensure the request carries an authenticated user.

        Returns:
            AppUser: The authenticated caller

        Raises:
            UnauthorizedError: If the context is anonymous
        """
        if context is None or context.user is None:
            raise UnauthorizedError(AuthorizationErrorCode.UNAUTHORIZED)
        return context.user

    def require_role(self, role: str | Enum, context: AppContext) -> AppUser:
        """
        Ensure the caller holds ``role``.

        Raises:
            UnauthorizedError: If the context is anonymous
            ForbiddenError: If the role is missing
        """
        user = self.require_authenticated(context)
        if not user.has_role(_role_value(role)):
            raise ForbiddenError(
                AuthorizationErrorCode.FORBIDDEN, {"required_roles": [_role_value(role)]}
            )
        return user

    def require_one_of_roles(
        self, roles: Iterable[str | Enum], context: AppContext
    ) -> AppUser:
        """Ensure the caller holds at least one of ``roles``."""
        user = self.require_authenticated(context)
        required = [_role_value(role) for role in roles]
        if not any(user.has_role(role) for role in required):
            raise ForbiddenError(
                AuthorizationErrorCode.FORBIDDEN, {"required_roles": required}
            )
        return user
