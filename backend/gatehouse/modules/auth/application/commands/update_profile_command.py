"""
Update profile command implementation.

Lets an authenticated user change their own display name and username.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.errors import ValidationError, ValidationErrorCode
from gatehouse.core.events import EventDispatcher
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events
from gatehouse.modules.auth.domain.interfaces import IUserRepository
from gatehouse.modules.auth.domain.services import UserValidatorService
from gatehouse.modules.auth.domain.value_objects import Username


@dataclass(frozen=True)
class UpdateProfileCommand(Command):
    display_name: str | None = None
    username: str | None = None


class UpdateProfileCommandHandler(CommandHandler[UpdateProfileCommand, None]):
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

    async def handle(self, command: UpdateProfileCommand, context: AppContext) -> None:
        caller = self.authorization_service.require_authenticated(context)

        if command.display_name is None and command.username is None:
            raise ValidationError(ValidationErrorCode.NO_UPDATES)
        username = Username.create(command.username) if command.username is not None else None

        user = await self.user_validator_service.validate_user_active_by_id(caller.user_id)

        if username is not None:
            await self.user_validator_service.validate_username_uniqueness(
                username, exclude_id=user.id
            )
            user.set_username(username)
        if command.display_name is not None:
            user.set_display_name(command.display_name)

        user.prepare_update(caller.user_id)
        await self.user_repository.save(user)
        await dispatch_events(self.event_dispatcher, user)
