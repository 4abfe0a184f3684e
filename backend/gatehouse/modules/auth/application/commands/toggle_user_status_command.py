"""
Toggle user status command implementation.

Enables or disables a user locally, then mirrors the change on the identity
provider account. The local change and its events stay committed when the
provider update fails; the failure is reported to the caller.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events, require_uuid
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.interfaces import (
    ExternalAuthenticationService,
    IUserRepository,
)
from gatehouse.modules.auth.domain.services import UserValidatorService

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToggleUserStatusCommand(Command):
    id: str
    enabled: bool


class ToggleUserStatusCommandHandler(CommandHandler[ToggleUserStatusCommand, None]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_validator_service: UserValidatorService,
        user_repository: IUserRepository,
        external_authentication_service: ExternalAuthenticationService,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_validator_service = user_validator_service
        self.user_repository = user_repository
        self.external_authentication_service = external_authentication_service
        self.event_dispatcher = event_dispatcher

    async def handle(self, command: ToggleUserStatusCommand, context: AppContext) -> None:
        """
        Raises:
            ValidationError: USER_NOT_FOUND, USER_DELETED, USER_MUST_BE_ACTIVE or
                USER_MUST_BE_DISABLED
            ExternalAuthenticationError: If the provider update fails
        """
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
        user_id = require_uuid(command.id, "id")

        user = await self.user_validator_service.validate_user_not_deleted_by_id(user_id)
        if command.enabled:
            user.activate()
        else:
            user.disable()

        user.prepare_update(actor.user_id)
        await self.user_repository.save(user)
        await dispatch_events(self.event_dispatcher, user)

        if command.enabled:
            await self.external_authentication_service.enable_user(user.external_id)
        else:
            await self.external_authentication_service.disable_user(user.external_id)

        logger.info(
            "User status changed",
            user_id=str(user.id),
            status=user.status.value,
            actor_id=str(actor.user_id),
        )
