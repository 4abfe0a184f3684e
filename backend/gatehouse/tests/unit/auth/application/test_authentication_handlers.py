"""
Test cases for the registration, sign-in and access token handlers.

The identity provider and repositories are mocked; the validator services and
authorization service are the real ones.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from gatehouse.core.config import SecurityConfig
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError
from gatehouse.core.security import JwtService
from gatehouse.modules.auth.application.commands import (
    RegisterCommand,
    RegisterCommandHandler,
    RegisterServiceDependencies,
    RequestAccessTokenCommand,
    RequestAccessTokenCommandHandler,
    SignInCommand,
    SignInCommandHandler,
)
from gatehouse.modules.auth.domain.enums import SignInType, UserEventType, UserStatus
from gatehouse.modules.auth.domain.errors import ExternalAuthenticationError
from gatehouse.modules.auth.domain.interfaces import ExternalUser
from gatehouse.modules.auth.domain.services import UserValidatorService
from gatehouse.modules.auth.domain.value_objects import Email
from gatehouse.modules.auth.infrastructure.services import UserIdGenerator


@pytest.fixture
def user_repository():
    repository = Mock()
    repository.save = AsyncMock()
    repository.find_by_id = AsyncMock(return_value=None)
    repository.find_by_email = AsyncMock(return_value=None)
    repository.find_by_username = AsyncMock(return_value=None)
    repository.find_by_external_id = AsyncMock(return_value=None)
    repository.email_exists = AsyncMock(return_value=False)
    repository.username_exists = AsyncMock(return_value=False)
    return repository


@pytest.fixture
def user_id_generator() -> UserIdGenerator:
    return UserIdGenerator("GATEHOUSE_TEST")


class TestRegisterCommandHandler:
    """Test user registration."""

    @pytest.fixture
    def handler(
        self,
        user_repository,
        user_id_generator,
        external_authentication_service,
        event_dispatcher,
    ):
        return RegisterCommandHandler(
            user_repository,
            RegisterServiceDependencies(
                user_validator_service=UserValidatorService(user_repository),
                user_id_generator=user_id_generator,
                external_authentication_service=external_authentication_service,
            ),
            event_dispatcher,
        )

    @pytest.mark.asyncio
    async def test_successful_registration(
        self,
        handler,
        user_repository,
        user_id_generator,
        external_authentication_service,
        event_dispatcher,
    ):
        # Arrange
        command = RegisterCommand(
            email="Jane@Example.com",
            password="S3cret!pw",
            username="jane_doe1",
            display_name="Jane",
        )

        # Act
        result = await handler.execute(command)

        # Assert
        expected_id = user_id_generator.generate_user_id("jane@example.com")
        assert result.id == str(expected_id)
        assert result.id_token == "id-token"
        assert result.sign_in_token == "sign-in-token"

        external_authentication_service.create_user.assert_awaited_once_with(
            "jane@example.com", "S3cret!pw"
        )
        saved = user_repository.save.await_args.args[0]
        assert saved.id == expected_id
        assert saved.external_id == "firebase-uid-1"
        assert saved.sign_in_type is SignInType.EMAIL
        assert saved.username.value == "jane_doe1"
        assert saved.display_name == "Jane"

        events = event_dispatcher.dispatch.await_args.args[0]
        assert [e.event_type for e in events] == [UserEventType.REGISTERED.value]
        assert not saved.has_events()

    @pytest.mark.asyncio
    async def test_invalid_password_stops_before_any_call(
        self, handler, user_repository, external_authentication_service
    ):
        command = RegisterCommand(email="jane@example.com", password="weak")

        with pytest.raises(ValidationError) as exc_info:
            await handler.execute(command)

        assert exc_info.value.code == "FIELD_IS_TOO_SHORT"
        assert exc_info.value.data["field"] == "password"
        user_repository.email_exists.assert_not_called()
        external_authentication_service.create_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_checked_before_username(self, handler, user_repository):
        user_repository.email_exists.return_value = True
        user_repository.username_exists.return_value = True
        command = RegisterCommand(
            email="jane@example.com", password="S3cret!pw", username="jane_doe1"
        )

        with pytest.raises(ValidationError, match="EMAIL_ALREADY_TAKEN"):
            await handler.execute(command)

        user_repository.username_exists.assert_not_called()

    @pytest.mark.asyncio
    async def test_username_taken(
        self, handler, user_repository, external_authentication_service
    ):
        user_repository.username_exists.return_value = True
        command = RegisterCommand(
            email="jane@example.com", password="S3cret!pw", username="jane_doe1"
        )

        with pytest.raises(ValidationError, match="USERNAME_ALREADY_TAKEN"):
            await handler.execute(command)

        external_authentication_service.create_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_rejects_new_credentials(
        self, handler, external_authentication_service, event_dispatcher
    ):
        external_authentication_service.verify_password.return_value = None
        command = RegisterCommand(email="jane@example.com", password="S3cret!pw")

        with pytest.raises(ExternalAuthenticationError):
            await handler.execute(command)

        event_dispatcher.dispatch.assert_not_called()


class TestSignInCommandHandler:
    """Test password sign-in."""

    @pytest.fixture
    def handler(self, user_repository, external_authentication_service):
        return SignInCommandHandler(user_repository, external_authentication_service)

    @pytest.mark.asyncio
    async def test_sign_in_with_email(
        self, handler, user_repository, external_authentication_service, make_user
    ):
        # Arrange
        user = make_user()
        user_repository.find_by_email.return_value = user

        # Act
        result = await handler.execute(
            SignInCommand(email_or_username="JANE.DOE@example.com", password="S3cret!pw")
        )

        # Assert
        assert result.id == str(user.id)
        assert result.sign_in_token == "sign-in-token"
        user_repository.find_by_email.assert_awaited_once_with(
            Email.create("jane.doe@example.com")
        )
        user_repository.find_by_username.assert_not_called()
        external_authentication_service.verify_password.assert_awaited_once_with(
            "jane.doe@example.com", "S3cret!pw"
        )
        external_authentication_service.create_sign_in_token.assert_awaited_once_with(
            user.external_id
        )

    @pytest.mark.asyncio
    async def test_sign_in_with_username_uses_stored_email(
        self, handler, user_repository, external_authentication_service, make_user
    ):
        user = make_user()
        user_repository.find_by_username.return_value = user

        await handler.execute(SignInCommand(email_or_username="jane_doe1", password="S3cret!pw"))

        user_repository.find_by_email.assert_not_called()
        external_authentication_service.verify_password.assert_awaited_once_with(
            "jane.doe@example.com", "S3cret!pw"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["nobody@example.com", "nobody_1", "x", ""])
    async def test_unknown_identifier(self, handler, external_authentication_service, identifier):
        with pytest.raises(ValidationError, match="INVALID_CREDENTIALS"):
            await handler.execute(SignInCommand(email_or_username=identifier, password="pw"))

        external_authentication_service.verify_password.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [UserStatus.DISABLED, UserStatus.DELETED])
    async def test_inactive_user(self, handler, user_repository, make_user, status):
        user_repository.find_by_email.return_value = make_user(status=status)

        with pytest.raises(ValidationError, match="INVALID_CREDENTIALS"):
            await handler.execute(
                SignInCommand(email_or_username="jane.doe@example.com", password="S3cret!pw")
            )

    @pytest.mark.asyncio
    async def test_wrong_password(
        self, handler, user_repository, external_authentication_service, make_user
    ):
        user_repository.find_by_email.return_value = make_user()
        external_authentication_service.verify_password.return_value = None

        with pytest.raises(ValidationError, match="INVALID_CREDENTIALS"):
            await handler.execute(
                SignInCommand(email_or_username="jane.doe@example.com", password="Wr0ng!pw")
            )

        external_authentication_service.create_sign_in_token.assert_not_called()


class TestRequestAccessTokenCommandHandler:
    """Test access token issuance."""

    @pytest.fixture
    def jwt_service(self) -> JwtService:
        return JwtService(SecurityConfig(access_token_secret="s" * 48))

    @pytest.fixture
    def user_group_repository(self):
        repository = Mock()
        repository.get_user_role_codes = AsyncMock(return_value=["AUTH_VIEWER"])
        return repository

    @pytest.fixture
    def handler(
        self,
        user_repository,
        user_group_repository,
        external_authentication_service,
        user_id_generator,
        jwt_service,
        event_dispatcher,
    ):
        return RequestAccessTokenCommandHandler(
            user_repository,
            user_group_repository,
            external_authentication_service,
            user_id_generator,
            jwt_service,
            event_dispatcher,
        )

    @pytest.mark.asyncio
    async def test_existing_user(
        self, handler, user_repository, user_group_repository, jwt_service, make_user
    ):
        # Arrange
        user = make_user()
        user_repository.find_by_external_id.return_value = user

        # Act
        result = await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

        # Assert
        assert jwt_service.verify_token(result.token) == {
            "user_id": str(user.id),
            "roles": ["AUTH_VIEWER"],
        }
        user_group_repository.get_user_role_codes.assert_awaited_once_with(user.id)
        user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_disabled_user_rejected(self, handler, user_repository, make_user):
        user_repository.find_by_external_id.return_value = make_user(status=UserStatus.DISABLED)

        with pytest.raises(ValidationError, match="USER_MUST_BE_ACTIVE"):
            await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

    @pytest.mark.asyncio
    async def test_invalid_id_token(self, handler, external_authentication_service):
        external_authentication_service.verify_token.side_effect = ValidationError(
            "INVALID_TOKEN"
        )

        with pytest.raises(ValidationError, match="INVALID_TOKEN"):
            await handler.execute(RequestAccessTokenCommand(id_token="forged"))

    @pytest.mark.asyncio
    async def test_first_social_sign_in_creates_user(
        self,
        handler,
        user_repository,
        user_group_repository,
        external_authentication_service,
        user_id_generator,
        event_dispatcher,
    ):
        # Arrange
        external_authentication_service.find_user_by_id.return_value = ExternalUser(
            external_id="firebase-uid-1",
            email="Jane@Example.com",
            display_name="Jane",
            provider_id="google.com",
        )
        user_group_repository.get_user_role_codes.return_value = []

        # Act
        await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

        # Assert
        saved = user_repository.save.await_args.args[0]
        assert saved.id == user_id_generator.generate_user_id("jane@example.com")
        assert saved.sign_in_type is SignInType.GOOGLE
        assert saved.display_name == "Jane"
        assert saved.username is None
        event_dispatcher.dispatch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_provider_account_missing(self, handler):
        with pytest.raises(ValidationError) as exc_info:
            await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

        assert exc_info.value.code == "USER_NOT_FOUND"
        assert exc_info.value.data == {"externalId": "firebase-uid-1"}

    @pytest.mark.asyncio
    async def test_provider_account_without_email(self, handler, external_authentication_service):
        external_authentication_service.find_user_by_id.return_value = ExternalUser(
            external_id="firebase-uid-1", email=None, provider_id="apple.com"
        )

        with pytest.raises(ValidationError, match="FIELD_IS_REQUIRED"):
            await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

    @pytest.mark.asyncio
    async def test_email_owned_by_other_account(
        self, handler, user_repository, external_authentication_service, make_user
    ):
        external_authentication_service.find_user_by_id.return_value = ExternalUser(
            external_id="firebase-uid-1", email="jane.doe@example.com", provider_id="google.com"
        )
        user_repository.find_by_email.return_value = make_user(external_id="firebase-uid-2")

        with pytest.raises(ValidationError, match="EMAIL_ALREADY_TAKEN"):
            await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

        user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_provider(self, handler, external_authentication_service):
        external_authentication_service.find_user_by_id.return_value = ExternalUser(
            external_id="firebase-uid-1", email="jane@example.com", provider_id="github.com"
        )

        with pytest.raises(ValidationError) as exc_info:
            await handler.execute(RequestAccessTokenCommand(id_token="id-token"))

        assert exc_info.value.code == "FIELD_IS_INVALID"
        assert exc_info.value.data == {"field": "signInType", "value": "github.com"}

    @pytest.mark.asyncio
    async def test_anonymous_context_is_allowed(self, handler, user_repository, make_user):
        user_repository.find_by_external_id.return_value = make_user()

        result = await handler.execute(RequestAccessTokenCommand(id_token="id-token"), None)

        assert result.token


def test_user_id_is_derived_from_email():
    generator = UserIdGenerator("GATEHOUSE_TEST")

    first = generator.generate_user_id("jane@example.com")

    assert isinstance(first, Uuid)
    assert first == UserIdGenerator("GATEHOUSE_TEST").generate_user_id("jane@example.com")
    assert first != UserIdGenerator("OTHER_APP").generate_user_id("jane@example.com")
