"""
Delete user command implementation.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.events import EventDispatcher
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events, require_uuid
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.interfaces import IUserRepository
from gatehouse.modules.auth.domain.services import UserValidatorService


@dataclass(frozen=True)
class DeleteUserCommand(Command):
    id: str


class DeleteUserCommandHandler(CommandHandler[DeleteUserCommand, None]):
    """Soft-delete a user; a second delete fails with USER_ALREADY_DELETED."""

    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_validator_service: UserValidatorService,
        user_repository: IUserRepository,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_validator_service = user_validator_service
        self.user_repository = user_repository
        self.event_dispatcher = event_dispatcher

    async def handle(self, command: DeleteUserCommand, context: AppContext) -> None:
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
        user_id = require_uuid(command.id, "id")

        user = await self.user_validator_service.validate_user_exists_by_id(user_id)
        user.mark_for_deletion()

        user.prepare_update(actor.user_id)
        await self.user_repository.save(user)
        await dispatch_events(self.event_dispatcher, user)
