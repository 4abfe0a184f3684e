"""Tests for the authorization guard and JWT access tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from gatehouse.core.application.context import AppContext
from gatehouse.core.config import SecurityConfig
from gatehouse.core.errors import ForbiddenError, UnauthorizedError
from gatehouse.core.security import AuthorizationService, JwtService
from gatehouse.modules.auth.domain.enums import AuthRole


class TestAuthorizationService:
    """Test role checks against the request context."""

    @pytest.fixture
    def service(self) -> AuthorizationService:
        return AuthorizationService()

    def test_anonymous_is_unauthorized(self, service, anonymous_context):
        with pytest.raises(UnauthorizedError, match="UNAUTHORIZED"):
            service.require_authenticated(anonymous_context)

    def test_none_context_is_unauthorized(self, service):
        with pytest.raises(UnauthorizedError):
            service.require_role(AuthRole.AUTH_MANAGER, None)

    def test_authenticated_returns_caller(self, service, user_context, caller_id):
        assert service.require_authenticated(user_context).user_id == caller_id

    def test_missing_role_is_forbidden(self, service, viewer_context):
        with pytest.raises(ForbiddenError) as exc_info:
            service.require_role(AuthRole.AUTH_MANAGER, viewer_context)

        assert exc_info.value.data == {"required_roles": ["AUTH_MANAGER"]}

    def test_role_accepted(self, service, manager_context):
        user = service.require_role(AuthRole.AUTH_MANAGER, manager_context)

        assert user.has_role("AUTH_MANAGER")

    def test_one_of_roles(self, service, viewer_context, manager_context, user_context):
        assert service.require_one_of_roles(AuthRole.readers(), viewer_context)
        assert service.require_one_of_roles(AuthRole.readers(), manager_context)
        with pytest.raises(ForbiddenError):
            service.require_one_of_roles(AuthRole.readers(), user_context)


class TestJwtService:
    """Test access token signing and verification."""

    @pytest.fixture
    def config(self) -> SecurityConfig:
        return SecurityConfig(access_token_secret="x" * 48)

    @pytest.fixture
    def jwt_service(self, config) -> JwtService:
        return JwtService(config)

    def test_round_trip(self, jwt_service, caller_id):
        token = jwt_service.sign_token(
            {"user_id": str(caller_id), "roles": ["AUTH_VIEWER"]}
        )

        payload = jwt_service.verify_token(token)

        assert payload == {"user_id": str(caller_id), "roles": ["AUTH_VIEWER"]}

    def test_claims(self, jwt_service, config, caller_id):
        token = jwt_service.sign_token({"user_id": str(caller_id), "roles": []})

        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == str(caller_id)
        assert claims["type"] == "access"
        assert claims["aud"] == config.jwt_audience
        assert claims["iss"] == config.jwt_issuer
        assert claims["exp"] > claims["iat"]

    def test_expired_token_rejected(self, jwt_service, caller_id):
        token = jwt_service.sign_token(
            {"user_id": str(caller_id), "roles": []}, expires_delta=timedelta(seconds=-5)
        )

        with pytest.raises(UnauthorizedError, match="INVALID_TOKEN"):
            jwt_service.verify_token(token)

    def test_foreign_signature_rejected(self, jwt_service, caller_id):
        other = JwtService(SecurityConfig(access_token_secret="y" * 48))
        token = other.sign_token({"user_id": str(caller_id), "roles": []})

        with pytest.raises(UnauthorizedError, match="INVALID_TOKEN"):
            jwt_service.verify_token(token)

    def test_garbage_rejected(self, jwt_service):
        with pytest.raises(UnauthorizedError, match="INVALID_TOKEN"):
            jwt_service.verify_token("not.a.token")

    def test_token_without_roles_list_rejected(self, jwt_service, config, caller_id):
        token = jwt.encode(
            {
                "sub": str(caller_id),
                "roles": "AUTH_MANAGER",
                "type": "access",
                "aud": config.jwt_audience,
                "iss": config.jwt_issuer,
            },
            config.access_token_secret,
            algorithm=config.jwt_algorithm.value,
        )

        with pytest.raises(UnauthorizedError, match="INVALID_TOKEN"):
            jwt_service.verify_token(token)
