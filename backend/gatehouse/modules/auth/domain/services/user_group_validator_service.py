"""User Group Validator Service"""

from gatehouse.core.domain.base import DomainService
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError
from gatehouse.modules.auth.domain.aggregates import UserGroup
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.domain.interfaces import IUserGroupRepository


class UserGroupValidatorService(DomainService):
    def __init__(self, user_group_repository: IUserGroupRepository):
        self.user_group_repository = user_group_repository

    async def validate_user_group_exists_by_id(self, user_group_id: Uuid) -> UserGroup:
        """
        Load a user group by id.

        Raises:
            ValidationError: USER_GROUP_NOT_FOUND
        """
        user_group = await self.user_group_repository.find_by_id(user_group_id)
        if user_group is None:
            raise ValidationError(
                AuthErrorCode.USER_GROUP_NOT_FOUND, {"id": str(user_group_id)}
            )
        return user_group

    async def validate_name_uniqueness(
        self, name: str, exclude_id: Uuid | None = None
    ) -> None:
        if await self.user_group_repository.name_exists(name, exclude_id):
            raise ValidationError.for_field(
                AuthErrorCode.USER_GROUP_NAME_ALREADY_TAKEN, "name"
            )
