"""
Delete account command implementation.

Soft-deletes the caller's own account.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events
from gatehouse.modules.auth.domain.interfaces import IUserRepository
from gatehouse.modules.auth.domain.services import UserValidatorService

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeleteAccountCommand(Command):
    pass


class DeleteAccountCommandHandler(CommandHandler[DeleteAccountCommand, None]):
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

    async def handle(self, command: DeleteAccountCommand, context: AppContext) -> None:
        caller = self.authorization_service.require_authenticated(context)

        user = await self.user_validator_service.validate_user_active_by_id(caller.user_id)
        user.mark_for_deletion()

        user.prepare_update(caller.user_id)
        await self.user_repository.save(user)
        await dispatch_events(self.event_dispatcher, user)

        logger.info("Account marked for deletion", user_id=str(user.id))
