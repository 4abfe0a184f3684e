"""
Update user group command implementation.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.errors import ValidationError, ValidationErrorCode
from gatehouse.core.events import EventDispatcher
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events, require_uuid
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.interfaces import IUserGroupRepository
from gatehouse.modules.auth.domain.services import UserGroupValidatorService


@dataclass(frozen=True)
class UpdateUserGroupCommand(Command):
    id: str
    name: str | None = None
    description: str | None = None


class UpdateUserGroupCommandHandler(CommandHandler[UpdateUserGroupCommand, None]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_group_validator_service: UserGroupValidatorService,
        user_group_repository: IUserGroupRepository,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_group_validator_service = user_group_validator_service
        self.user_group_repository = user_group_repository
        self.event_dispatcher = event_dispatcher

    async def handle(self, command: UpdateUserGroupCommand, context: AppContext) -> None:
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)

        if command.name is None and command.description is None:
            raise ValidationError(ValidationErrorCode.NO_UPDATES)
        user_group_id = require_uuid(command.id, "id")

        user_group = await self.user_group_validator_service.validate_user_group_exists_by_id(
            user_group_id
        )

        if command.name is not None:
            await self.user_group_validator_service.validate_name_uniqueness(
                command.name, exclude_id=user_group.id
            )
            user_group.set_name(command.name)
        if command.description is not None:
            user_group.set_description(command.description)

        user_group.prepare_update(actor.user_id)
        await self.user_group_repository.save(user_group)
        await dispatch_events(self.event_dispatcher, user_group)
