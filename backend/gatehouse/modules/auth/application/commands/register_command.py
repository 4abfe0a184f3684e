"""
Register command implementation.

Handles self-service registration with email and password.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.application.common import SignInResult, dispatch_events
from gatehouse.modules.auth.domain.aggregates import User
from gatehouse.modules.auth.domain.enums import SignInType
from gatehouse.modules.auth.domain.errors import (
    AuthErrorCode,
    ExternalAuthenticationError,
)
from gatehouse.modules.auth.domain.interfaces import (
    ExternalAuthenticationService,
    IUserIdGenerator,
    IUserRepository,
)
from gatehouse.modules.auth.domain.services import UserValidatorService
from gatehouse.modules.auth.domain.value_objects import Email, Password, Username

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegisterCommand(Command):
    email: str
    password: str
    username: str | None = None
    display_name: str | None = None


@dataclass
class RegisterServiceDependencies:
    """Service dependencies for the register handler."""

    user_validator_service: UserValidatorService
    user_id_generator: IUserIdGenerator
    external_authentication_service: ExternalAuthenticationService


class RegisterCommandHandler(CommandHandler[RegisterCommand, SignInResult]):
    """Handler for user registration."""

    def __init__(
        self,
        user_repository: IUserRepository,
        services: RegisterServiceDependencies,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.user_repository = user_repository
        self.user_validator_service = services.user_validator_service
        self.user_id_generator = services.user_id_generator
        self.external_authentication_service = services.external_authentication_service
        self.event_dispatcher = event_dispatcher

    async def handle(self, command: RegisterCommand, context: AppContext) -> SignInResult:
        """
        Register a new user.

        Process:
        1. Validate email, password and username
        2. Check email then username uniqueness
        3. Derive the user id from the email
        4. Create the provider account
        5. Create and save the user
        6. Sign in with the provider
        7. Dispatch events

        Raises:
            ValidationError: Invalid input, EMAIL_ALREADY_TAKEN, USERNAME_ALREADY_TAKEN
            ExternalAuthenticationError: If the provider rejects the new credentials
        """
        # 1. Validate input
        email = Email.create(command.email)
        password = Password.create(command.password)
        username = Username.create(command.username) if command.username else None

        # 2. Uniqueness
        await self.user_validator_service.validate_email_uniqueness(email)
        if username:
            await self.user_validator_service.validate_username_uniqueness(username)

        # 3. Deterministic id
        user_id = self.user_id_generator.generate_user_id(email.value)

        # 4. Provider account
        external_id = await self.external_authentication_service.create_user(
            email.value, password.value
        )

        # 5. Aggregate
        user = User.create(
            id=user_id,
            email=email,
            sign_in_type=SignInType.EMAIL,
            external_id=external_id,
            username=username,
            display_name=command.display_name,
        )
        await self.user_repository.save(user)

        # 6. Sign in
        credentials = await self.external_authentication_service.verify_password(
            email.value, password.value
        )
        if credentials is None:
            raise ExternalAuthenticationError(
                AuthErrorCode.EXTERNAL_AUTHENTICATION_ERROR,
                message="Registered credentials were rejected by the provider",
            )
        sign_in_token = await self.external_authentication_service.create_sign_in_token(
            external_id
        )

        # 7. Events
        await dispatch_events(self.event_dispatcher, user)

        logger.info("User registered", user_id=str(user.id))
        return SignInResult(
            id=str(user.id),
            id_token=credentials.id_token,
            sign_in_token=sign_in_token,
        )
