"""
Sign in command implementation.

Accepts an email or a username. Every failure reports INVALID_CREDENTIALS so
callers cannot tell which identifiers exist.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.application.common import SignInResult
from gatehouse.modules.auth.domain.aggregates import User
from gatehouse.modules.auth.domain.errors import invalid_credentials
from gatehouse.modules.auth.domain.interfaces import (
    ExternalAuthenticationService,
    IUserRepository,
)
from gatehouse.modules.auth.domain.value_objects import Email, Username

logger = get_logger(__name__)


@dataclass(frozen=True)
class SignInCommand(Command):
    email_or_username: str
    password: str


class SignInCommandHandler(CommandHandler[SignInCommand, SignInResult]):
    def __init__(
        self,
        user_repository: IUserRepository,
        external_authentication_service: ExternalAuthenticationService,
    ):
        super().__init__()
        self.user_repository = user_repository
        self.external_authentication_service = external_authentication_service

    async def _find_user(self, identifier: str) -> User | None:
        email = Email.try_create(identifier)
        if email.is_success:
            return await self.user_repository.find_by_email(email.value)

        username = Username.try_create(identifier)
        if username.is_success:
            return await self.user_repository.find_by_username(username.value)

        return None

    async def handle(self, command: SignInCommand, context: AppContext) -> SignInResult:
        """
        Sign in with email or username and password.

        Raises:
            ValidationError: INVALID_CREDENTIALS
        """
        user = await self._find_user(command.email_or_username or "")
        if user is None or not user.is_active:
            raise invalid_credentials()

        credentials = await self.external_authentication_service.verify_password(
            user.email.value, command.password
        )
        if credentials is None:
            logger.info("Sign in rejected", user_id=str(user.id))
            raise invalid_credentials()

        sign_in_token = await self.external_authentication_service.create_sign_in_token(
            user.external_id
        )
        return SignInResult(
            id=str(user.id),
            id_token=credentials.id_token,
            sign_in_token=sign_in_token,
        )
