"""
Add user to user group command implementation.

The membership row is written in the same transaction as the user's version
bump, through the save callback.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.errors import ValidationError
from gatehouse.core.events import EventDispatcher
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events, require_uuid
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.domain.interfaces import IUserRepository
from gatehouse.modules.auth.domain.services import (
    UserGroupValidatorService,
    UserValidatorService,
)


@dataclass(frozen=True)
class AddUserToUserGroupCommand(Command):
    user_group_id: str
    user_id: str


class AddUserToUserGroupCommandHandler(CommandHandler[AddUserToUserGroupCommand, None]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_group_validator_service: UserGroupValidatorService,
        user_validator_service: UserValidatorService,
        user_repository: IUserRepository,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_group_validator_service = user_group_validator_service
        self.user_validator_service = user_validator_service
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher

    async def handle(self, command: AddUserToUserGroupCommand, context: AppContext) -> None:
        """
        Raises:
            ValidationError: USER_GROUP_NOT_FOUND, USER_NOT_FOUND or
                USER_ALREADY_IN_GROUP
        """
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
        user_group_id = require_uuid(command.user_group_id, "userGroupId")
        user_id = require_uuid(command.user_id, "userId")

        user_group = await self.user_group_validator_service.validate_user_group_exists_by_id(
            user_group_id
        )
        user = await self.user_validator_service.validate_user_not_deleted_by_id(user_id)

        if await self.user_repository.user_in_group(user.id, user_group.id):
            raise ValidationError(
                AuthErrorCode.USER_ALREADY_IN_GROUP,
                {"userId": str(user.id), "userGroupId": str(user_group.id)},
            )

        user.added_to_user_group(user_group.id)
        user.prepare_update(actor.user_id)

        async def add_membership(session) -> None:
            await self.user_repository.add_to_group(user.id, user_group.id, session)

        await self.user_repository.save(user, in_transaction=add_membership)
        await dispatch_events(self.event_dispatcher, user)
