"""
Delete user group command implementation.

Groups are removed outright together with their membership and role rows.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events, require_uuid
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.interfaces import IUserGroupRepository
from gatehouse.modules.auth.domain.services import UserGroupValidatorService

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeleteUserGroupCommand(Command):
    id: str


class DeleteUserGroupCommandHandler(CommandHandler[DeleteUserGroupCommand, None]):
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

    async def handle(self, command: DeleteUserGroupCommand, context: AppContext) -> None:
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
        user_group_id = require_uuid(command.id, "id")

        user_group = await self.user_group_validator_service.validate_user_group_exists_by_id(
            user_group_id
        )
        user_group.mark_for_deletion()
        user_group.prepare_update(actor.user_id)

        await self.user_group_repository.delete(user_group)
        await dispatch_events(self.event_dispatcher, user_group)

        logger.info(
            "User group deleted",
            user_group_id=str(user_group.id),
            actor_id=str(actor.user_id),
        )
