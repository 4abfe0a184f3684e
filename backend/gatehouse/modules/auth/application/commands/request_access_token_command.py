"""
Request access token command implementation.

Exchanges an identity provider id token for an internal access token carrying
the user's role codes. Users who signed in with a social provider for the first
time are created on the way.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Command, CommandHandler
from gatehouse.core.errors import ValidationError, ValidationErrorCode
from gatehouse.core.events import EventDispatcher
from gatehouse.core.logging import get_logger
from gatehouse.core.security import JwtService
from gatehouse.modules.auth.application.common import AccessTokenResult, dispatch_events
from gatehouse.modules.auth.domain.aggregates import User
from gatehouse.modules.auth.domain.enums import SignInType
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.domain.interfaces import (
    ExternalAuthenticationService,
    IUserGroupRepository,
    IUserIdGenerator,
    IUserRepository,
)
from gatehouse.modules.auth.domain.value_objects import Email

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestAccessTokenCommand(Command):
    id_token: str


class RequestAccessTokenCommandHandler(
    CommandHandler[RequestAccessTokenCommand, AccessTokenResult]
):
    def __init__(
        self,
        user_repository: IUserRepository,
        user_group_repository: IUserGroupRepository,
        external_authentication_service: ExternalAuthenticationService,
        user_id_generator: IUserIdGenerator,
        jwt_service: JwtService,
        event_dispatcher: EventDispatcher,
    ):
        super().__init__()
        self.user_repository = user_repository
        self.user_group_repository = user_group_repository
        self.external_authentication_service = external_authentication_service
        self.user_id_generator = user_id_generator
        self.jwt_service = jwt_service
        self.event_dispatcher = event_dispatcher

    async def handle(
        self, command: RequestAccessTokenCommand, context: AppContext
    ) -> AccessTokenResult:
        """
        Issue an access token for the owner of ``id_token``.

        Process:
        1. Verify the id token with the provider
        2. Load the user, or create it from the provider account
        3. Collect role codes and sign the token

        Raises:
            ValidationError: INVALID_TOKEN, USER_NOT_FOUND, USER_MUST_BE_ACTIVE,
                EMAIL_ALREADY_TAKEN, FIELD_IS_REQUIRED or FIELD_IS_INVALID
        """
        # 1. Verify
        external_id = await self.external_authentication_service.verify_token(
            command.id_token
        )

        # 2. Load or create
        user = await self.user_repository.find_by_external_id(external_id)
        if user is not None:
            user.ensure_active()
        else:
            user = await self._create_from_provider(external_id)

        # 3. Sign
        roles = await self.user_group_repository.get_user_role_codes(user.id)
        token = self.jwt_service.sign_token({"user_id": str(user.id), "roles": roles})
        return AccessTokenResult(token=token)

    async def _create_from_provider(self, external_id: str) -> User:
        external_user = await self.external_authentication_service.find_user_by_id(
            external_id
        )
        if external_user is None:
            raise ValidationError(AuthErrorCode.USER_NOT_FOUND, {"externalId": external_id})
        if not external_user.email:
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, "email")

        email = Email.create(external_user.email)
        existing = await self.user_repository.find_by_email(email)
        if existing is not None and existing.external_id != external_id:
            raise ValidationError.for_field(AuthErrorCode.EMAIL_ALREADY_TAKEN, "email")

        sign_in_type = SignInType.from_provider_id(external_user.provider_id)
        if sign_in_type is None:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_INVALID,
                "signInType",
                value=external_user.provider_id,
            )

        user = User.create(
            id=self.user_id_generator.generate_user_id(email.value),
            email=email,
            sign_in_type=sign_in_type,
            external_id=external_id,
            display_name=external_user.display_name,
        )
        await self.user_repository.save(user)
        await dispatch_events(self.event_dispatcher, user)

        logger.info(
            "User created from identity provider",
            user_id=str(user.id),
            sign_in_type=sign_in_type.value,
        )
        return user
