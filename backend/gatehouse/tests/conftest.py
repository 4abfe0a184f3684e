"""
Global pytest configuration and fixtures for all tests.

Provides:
- Contexts for anonymous, viewer and manager callers
- Domain object factories
- A mocked identity provider
- An in-memory database
"""

from unittest.mock import AsyncMock, Mock

import pytest

from gatehouse.core.application.context import AppContext, AppUser
from gatehouse.core.config import DatabaseConfig, Settings
from gatehouse.core.database import DatabaseManager
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.events import EventDispatcher
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.domain.aggregates import User, UserGroup
from gatehouse.modules.auth.domain.enums import AuthRole, SignInType, UserStatus
from gatehouse.modules.auth.domain.interfaces import (
    ExternalAuthenticationService,
    VerifiedCredentials,
)
from gatehouse.modules.auth.domain.value_objects import Email, Username
from gatehouse.modules.auth.infrastructure import models  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Contexts


@pytest.fixture
def anonymous_context() -> AppContext:
    return AppContext.anonymous()


@pytest.fixture
def caller_id() -> Uuid:
    return Uuid.generate()


@pytest.fixture
def user_context(caller_id) -> AppContext:
    """Authenticated caller without roles."""
    return AppContext(AppUser(user_id=caller_id, roles=[]))


@pytest.fixture
def viewer_context(caller_id) -> AppContext:
    return AppContext(AppUser(user_id=caller_id, roles=[AuthRole.AUTH_VIEWER.value]))


@pytest.fixture
def manager_context(caller_id) -> AppContext:
    return AppContext(AppUser(user_id=caller_id, roles=[AuthRole.AUTH_MANAGER.value]))


# Domain factories


@pytest.fixture
def make_user():
    """Build a persisted-looking user aggregate."""

    def _make_user(
        email: str = "jane.doe@example.com",
        username: str | None = "jane_doe1",
        status: UserStatus = UserStatus.ACTIVE,
        external_id: str = "firebase-uid-1",
        user_id: Uuid | None = None,
        version: int = 1,
    ) -> User:
        return User(
            id=user_id or Uuid.generate(),
            email=Email.create(email),
            sign_in_type=SignInType.EMAIL,
            external_id=external_id,
            status=status,
            username=Username.create(username) if username else None,
            display_name="Jane Doe",
            version=version,
        )

    return _make_user


@pytest.fixture
def make_user_group():
    def _make_user_group(name: str = "Support", version: int = 1) -> UserGroup:
        return UserGroup(
            id=Uuid.generate(),
            name=name,
            description="Support staff",
            version=version,
        )

    return _make_user_group


# Services


@pytest.fixture
def authorization_service() -> AuthorizationService:
    return AuthorizationService()


@pytest.fixture
def event_dispatcher() -> Mock:
    dispatcher = Mock(spec=EventDispatcher)
    dispatcher.dispatch = AsyncMock()
    return dispatcher


@pytest.fixture
def external_authentication_service() -> Mock:
    """Identity provider double that accepts every request."""
    service = Mock(spec=ExternalAuthenticationService)
    service.verify_password = AsyncMock(
        return_value=VerifiedCredentials(external_id="firebase-uid-1", id_token="id-token")
    )
    service.create_sign_in_token = AsyncMock(return_value="sign-in-token")
    service.create_user = AsyncMock(return_value="firebase-uid-1")
    service.enable_user = AsyncMock()
    service.disable_user = AsyncMock()
    service.verify_token = AsyncMock(return_value="firebase-uid-1")
    service.find_user_by_id = AsyncMock(return_value=None)
    service.find_user_by_email = AsyncMock(return_value=None)
    return service


# Infrastructure


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    """Settings isolated from the developer's environment."""
    for key in ("DATABASE_URL", "JWT_SECRET", "ENVIRONMENT", "APP_CODE", "CORS_ORIGINS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("APP_CODE", "GATEHOUSE_TEST")
    return Settings(env_file=str(tmp_path / "missing.env"))


@pytest.fixture
async def database():
    """Fresh in-memory database with the schema created."""
    manager = DatabaseManager(DatabaseConfig(url=TEST_DATABASE_URL))
    await manager.create_all()
    yield manager
    await manager.dispose()
