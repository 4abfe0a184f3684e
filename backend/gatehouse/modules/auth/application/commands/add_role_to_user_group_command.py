"""
Add role to user group command implementation.
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
from gatehouse.modules.auth.domain.interfaces import IRoleRepository, IUserGroupRepository
from gatehouse.modules.auth.domain.services import UserGroupValidatorService


@dataclass(frozen=True)
class AddRoleToUserGroupCommand(Command):
    user_group_id: str
    role_id: str


class AddRoleToUserGroupCommandHandler(CommandHandler[AddRoleToUserGroupCommand, None]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_group_validator_service: UserGroupValidatorService,
        user_group_repository: IUserGroupRepository,
        role_repository: IRoleRepository,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_group_validator_service = user_group_validator_service
        self.user_group_repository = user_group_repository
        self.role_repository = role_repository
        self.event_dispatcher = event_dispatcher

    async def handle(self, command: AddRoleToUserGroupCommand, context: AppContext) -> None:
        """
        Raises:
            ValidationError: USER_GROUP_NOT_FOUND, ROLE_NOT_FOUND or
                ROLE_ALREADY_IN_GROUP
        """
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
        user_group_id = require_uuid(command.user_group_id, "userGroupId")
        role_id = require_uuid(command.role_id, "roleId")

        user_group = await self.user_group_validator_service.validate_user_group_exists_by_id(
            user_group_id
        )
        if not await self.role_repository.role_exists(role_id):
            raise ValidationError(AuthErrorCode.ROLE_NOT_FOUND, {"id": str(role_id)})
        if await self.user_group_repository.role_in_group(user_group.id, role_id):
            raise ValidationError(
                AuthErrorCode.ROLE_ALREADY_IN_GROUP,
                {"roleId": str(role_id), "userGroupId": str(user_group.id)},
            )

        user_group.add_role(role_id)
        user_group.prepare_update(actor.user_id)

        async def grant_role(session) -> None:
            await self.user_group_repository.add_role(user_group.id, role_id, session)

        await self.user_group_repository.save(user_group, in_transaction=grant_role)
        await dispatch_events(self.event_dispatcher, user_group)
