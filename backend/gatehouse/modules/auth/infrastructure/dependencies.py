"""Auth module dependency configuration.

Builds the module's repositories, services and handlers once and exposes them as
attributes. The transports read handlers from here; tests build the module
around a throwaway database and a mocked identity provider.
"""

from gatehouse.core.config import Settings
from gatehouse.core.database import DatabaseManager
from gatehouse.core.errors import ErrorCodeRegistry
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.core.security import AuthorizationService, JwtService
from gatehouse.modules.auth.application.commands import (
    AddRoleToUserGroupCommandHandler,
    AddUserToUserGroupCommandHandler,
    CreateUserGroupCommandHandler,
    DeleteAccountCommandHandler,
    DeleteUserCommandHandler,
    DeleteUserGroupCommandHandler,
    RegisterCommandHandler,
    RegisterServiceDependencies,
    RemoveRoleFromUserGroupCommandHandler,
    RemoveUserFromUserGroupCommandHandler,
    RequestAccessTokenCommandHandler,
    SignInCommandHandler,
    ToggleUserStatusCommandHandler,
    UpdateProfileCommandHandler,
    UpdateUserCommandHandler,
    UpdateUserGroupCommandHandler,
)
from gatehouse.modules.auth.application.event_handlers import UserRegisteredHandler
from gatehouse.modules.auth.application.queries import (
    FindRolesQueryHandler,
    FindUserGroupsQueryHandler,
    FindUsersQueryHandler,
    GetProfileQueryHandler,
    GetRoleQueryHandler,
    GetUserGroupQueryHandler,
    GetUserQueryHandler,
)
from gatehouse.modules.auth.domain.errors import AUTH_ERROR_STATUS_CODES
from gatehouse.modules.auth.domain.interfaces import ExternalAuthenticationService
from gatehouse.modules.auth.domain.services import (
    UserGroupValidatorService,
    UserValidatorService,
)
from gatehouse.modules.auth.infrastructure.repositories import (
    SQLRoleReadRepository,
    SQLRoleRepository,
    SQLUserGroupReadRepository,
    SQLUserGroupRepository,
    SQLUserReadRepository,
    SQLUserRepository,
)
from gatehouse.modules.auth.infrastructure.services import UserIdGenerator

logger = get_logger(__name__)


def register_auth_error_codes(registry: ErrorCodeRegistry) -> None:
    """Contribute the auth module's error codes to the HTTP status registry."""
    registry.register_many(AUTH_ERROR_STATUS_CODES)


class AuthModule:
    """
    Composition root of the auth module.

    Usage Example:
        module = AuthModule(database, settings, firebase_service, EventDispatcher())
        result = await module.sign_in.execute(SignInCommand(...), context)
    """

    def __init__(
        self,
        database: DatabaseManager,
        settings: Settings,
        external_authentication_service: ExternalAuthenticationService,
        event_dispatcher: EventDispatcher,
    ):
        self.database = database
        self.settings = settings
        self.external_authentication_service = external_authentication_service
        self.event_dispatcher = event_dispatcher
        max_items_per_page = settings.pagination.max_items_per_page

        # Services
        self.authorization_service = AuthorizationService()
        self.jwt_service = JwtService(settings.security)
        self.user_id_generator = UserIdGenerator(settings.app.app_code)

        # Repositories
        self.user_repository = SQLUserRepository(database, external_authentication_service)
        self.user_group_repository = SQLUserGroupRepository(database)
        self.role_repository = SQLRoleRepository(database)
        self.user_read_repository = SQLUserReadRepository(database, max_items_per_page)
        self.user_group_read_repository = SQLUserGroupReadRepository(
            database, max_items_per_page
        )
        self.role_read_repository = SQLRoleReadRepository(database, max_items_per_page)

        # Domain services
        self.user_validator_service = UserValidatorService(self.user_repository)
        self.user_group_validator_service = UserGroupValidatorService(
            self.user_group_repository
        )

        self._build_command_handlers()
        self._build_query_handlers()
        self._register_event_handlers()

    def _build_command_handlers(self) -> None:
        auth = self.authorization_service
        dispatcher = self.event_dispatcher

        self.register = RegisterCommandHandler(
            self.user_repository,
            RegisterServiceDependencies(
                user_validator_service=self.user_validator_service,
                user_id_generator=self.user_id_generator,
                external_authentication_service=self.external_authentication_service,
            ),
            dispatcher,
        )
        self.sign_in = SignInCommandHandler(
            self.user_repository, self.external_authentication_service
        )
        self.request_access_token = RequestAccessTokenCommandHandler(
            self.user_repository,
            self.user_group_repository,
            self.external_authentication_service,
            self.user_id_generator,
            self.jwt_service,
            dispatcher,
        )

        # Own account
        self.update_profile = UpdateProfileCommandHandler(
            auth, self.user_validator_service, self.user_repository, dispatcher
        )
        self.delete_account = DeleteAccountCommandHandler(
            auth, self.user_validator_service, self.user_repository, dispatcher
        )

        # User administration
        self.update_user = UpdateUserCommandHandler(
            auth, self.user_validator_service, self.user_repository, dispatcher
        )
        self.toggle_user_status = ToggleUserStatusCommandHandler(
            auth,
            self.user_validator_service,
            self.user_repository,
            self.external_authentication_service,
            dispatcher,
        )
        self.delete_user = DeleteUserCommandHandler(
            auth, self.user_validator_service, self.user_repository, dispatcher
        )
        self.add_user_to_user_group = AddUserToUserGroupCommandHandler(
            auth,
            self.user_group_validator_service,
            self.user_validator_service,
            self.user_repository,
            dispatcher,
        )
        self.remove_user_from_user_group = RemoveUserFromUserGroupCommandHandler(
            auth,
            self.user_group_validator_service,
            self.user_validator_service,
            self.user_repository,
            dispatcher,
        )

        # User group administration
        self.create_user_group = CreateUserGroupCommandHandler(
            auth, self.user_group_validator_service, self.user_group_repository, dispatcher
        )
        self.update_user_group = UpdateUserGroupCommandHandler(
            auth, self.user_group_validator_service, self.user_group_repository, dispatcher
        )
        self.delete_user_group = DeleteUserGroupCommandHandler(
            auth, self.user_group_validator_service, self.user_group_repository, dispatcher
        )
        self.add_role_to_user_group = AddRoleToUserGroupCommandHandler(
            auth,
            self.user_group_validator_service,
            self.user_group_repository,
            self.role_repository,
            dispatcher,
        )
        self.remove_role_from_user_group = RemoveRoleFromUserGroupCommandHandler(
            auth,
            self.user_group_validator_service,
            self.user_group_repository,
            self.role_repository,
            dispatcher,
        )

    def _build_query_handlers(self) -> None:
        auth = self.authorization_service
        max_items_per_page = self.settings.pagination.max_items_per_page

        self.find_users = FindUsersQueryHandler(
            auth, self.user_read_repository, max_items_per_page
        )
        self.find_user_groups = FindUserGroupsQueryHandler(
            auth, self.user_group_read_repository, max_items_per_page
        )
        self.find_roles = FindRolesQueryHandler(
            auth, self.role_read_repository, max_items_per_page
        )
        self.get_user = GetUserQueryHandler(auth, self.user_read_repository)
        self.get_user_group = GetUserGroupQueryHandler(
            auth, self.user_group_read_repository
        )
        self.get_role = GetRoleQueryHandler(auth, self.role_read_repository)
        self.get_profile = GetProfileQueryHandler(auth, self.user_read_repository)

    def _register_event_handlers(self) -> None:
        self.event_dispatcher.register_handler(UserRegisteredHandler())
        logger.debug("Auth event handlers registered")

    async def seed(self) -> None:
        """Insert reference data the module relies on."""
        await self.role_repository.seed_roles()


__all__ = ["AuthModule", "register_auth_error_codes"]
