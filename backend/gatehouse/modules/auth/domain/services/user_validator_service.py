"""User Validator Service

Loads users for command handlers and distinguishes a missing user from one in
the wrong state.
"""

from gatehouse.core.domain.base import DomainService
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError
from gatehouse.modules.auth.domain.aggregates import User
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.domain.interfaces import IUserRepository
from gatehouse.modules.auth.domain.value_objects import Email, Username


class UserValidatorService(DomainService):
    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository

    async def validate_user_exists_by_id(self, user_id: Uuid) -> User:
        """
        Load a user by id.

        Raises:
            ValidationError: USER_NOT_FOUND
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise ValidationError(AuthErrorCode.USER_NOT_FOUND, {"id": str(user_id)})
        return user

    async def validate_user_not_deleted_by_id(self, user_id: Uuid) -> User:
        user = await self.validate_user_exists_by_id(user_id)
        user.ensure_not_deleted()
        return user

    async def validate_user_active_by_id(self, user_id: Uuid) -> User:
        user = await self.validate_user_not_deleted_by_id(user_id)
        user.ensure_active()
        return user

    async def validate_email_uniqueness(self, email: Email) -> None:
        if await self.user_repository.email_exists(email):
            raise ValidationError.for_field(AuthErrorCode.EMAIL_ALREADY_TAKEN, "email")

    async def validate_username_uniqueness(
        self, username: Username, exclude_id: Uuid | None = None
    ) -> None:
        if await self.user_repository.username_exists(username, exclude_id):
            raise ValidationError.for_field(AuthErrorCode.USERNAME_ALREADY_TAKEN, "username")
