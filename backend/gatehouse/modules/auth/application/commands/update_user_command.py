"""
Update user command implementation.

Administrative update of another user's display name and username.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.errors import ValidationError, ValidationErrorCode
from gatehouse.core.events import EventDispatcher
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import dispatch_events, require_uuid
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.interfaces import IUserRepository
from gatehouse.modules.auth.domain.services import UserValidatorService
from gatehouse.modules.auth.domain.value_objects import Username


@dataclass(frozen=True)
class UpdateUserCommand(Command):
    id: str
    display_name: str | None = None
    username: str | None = None


class UpdateUserCommandHandler(CommandHandler[UpdateUserCommand, None]):
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

    async def handle(self, command: UpdateUserCommand, context: AppContext) -> None:
        """
        Update a user.

        Process:
        1. Require AUTH_MANAGER
        2. Reject commands without changes before touching storage
        3. Validate the id and load the non-deleted user
        4. Check username uniqueness, excluding the user itself
        5. Apply, save and dispatch

        Raises:
            ValidationError: NO_UPDATES, FIELD_IS_INVALID, USER_NOT_FOUND,
                USER_DELETED or USERNAME_ALREADY_TAKEN
        """
        # 1. Authorize
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)

        # 2. Input
        if command.display_name is None and command.username is None:
            raise ValidationError(ValidationErrorCode.NO_UPDATES)
        user_id = require_uuid(command.id, "id")
        username = Username.create(command.username) if command.username is not None else None

        # 3. Load
        user = await self.user_validator_service.validate_user_not_deleted_by_id(user_id)

        # 4. Uniqueness
        if username is not None:
            await self.user_validator_service.validate_username_uniqueness(
                username, exclude_id=user.id
            )

        # 5. Apply
        if username is not None:
            user.set_username(username)
        if command.display_name is not None:
            user.set_display_name(command.display_name)

        user.prepare_update(actor.user_id)
        await self.user_repository.save(user)
        await dispatch_events(self.event_dispatcher, user)
