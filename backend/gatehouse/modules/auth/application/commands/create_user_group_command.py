"""
Create user group command implementation.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import IdResult, dispatch_events
from gatehouse.modules.auth.domain.aggregates import UserGroup
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.domain.interfaces import IUserGroupRepository
from gatehouse.modules.auth.domain.services import UserGroupValidatorService

logger = get_logger(__name__)


@dataclass(frozen=True)
class CreateUserGroupCommand(Command):
    name: str
    description: str | None = None


class CreateUserGroupCommandHandler(CommandHandler[CreateUserGroupCommand, IdResult]):
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

    async def handle(self, command: CreateUserGroupCommand, context: AppContext) -> IdResult:
        """
        Raises:
            ValidationError: USER_GROUP_NAME_ALREADY_TAKEN or an invalid field
        """
        actor = self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)

        user_group = UserGroup.create(
            id=Uuid.generate(),
            name=command.name,
            description=command.description,
            created_by=actor.user_id,
        )
        await self.user_group_validator_service.validate_name_uniqueness(user_group.name)

        await self.user_group_repository.save(user_group)
        await dispatch_events(self.event_dispatcher, user_group)

        logger.info("User group created", user_group_id=str(user_group.id))
        return IdResult(id=str(user_group.id))
