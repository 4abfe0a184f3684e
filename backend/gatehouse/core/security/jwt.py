"""JWT access tokens for the internal API.

Tokens carry the user id as ``sub`` and the user's role codes as ``roles``.
They are signed with the symmetric secret from ``SecurityConfig``.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from gatehouse.core.config import SecurityConfig
from gatehouse.core.errors import AuthorizationErrorCode, UnauthorizedError
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


class JwtService:
    """
    Sign and verify access tokens.

    Usage Example:
        jwt_service = JwtService(settings.security)
        token = jwt_service.sign_token({"user_id": str(user.id), "roles": ["AUTH_VIEWER"]})
        payload = jwt_service.verify_token(token)
    """

    def __init__(self, config: SecurityConfig):
        self.config = config

    def sign_token(
        self, payload: dict[str, Any], expires_delta: timedelta | None = None
    ) -> str:
        """
        Create a signed access token.

        Args:
            payload: ``{"user_id": str, "roles": list[str]}``
            expires_delta: Optional custom lifetime

        Returns:
            str: Encoded JWT
        """
        now = datetime.now(UTC)
        expire = now + (
            expires_delta or timedelta(minutes=self.config.access_token_expire_minutes)
        )
        claims = {
            "sub": str(payload["user_id"]),
            "roles": list(payload.get("roles") or []),
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "type": ACCESS_TOKEN_TYPE,
            "aud": self.config.jwt_audience,
            "iss": self.config.jwt_issuer,
            "jti": secrets.token_urlsafe(16),
        }

        token = jwt.encode(
            claims,
            self.config.access_token_secret,
            algorithm=self.config.jwt_algorithm.value,
        )
        logger.debug("Access token created", subject=claims["sub"], jti=claims["jti"])
        return token

    def verify_token(self, token: str) -> dict[str, Any]:
        """
        Decode and validate an access token.

        Returns:
            dict: ``{"user_id": str, "roles": list[str]}``

        Raises:
            UnauthorizedError: With code INVALID_TOKEN if the token is unusable
        """
        try:
            claims = jwt.decode(
                token,
                self.config.access_token_secret,
                algorithms=[self.config.jwt_algorithm.value],
                audience=self.config.jwt_audience,
                issuer=self.config.jwt_issuer,
            )
        except JWTError as e:
            logger.warning(
                "JWT token validation failed", error=str(e), error_type=type(e).__name__
            )
            raise UnauthorizedError(AuthorizationErrorCode.INVALID_TOKEN) from e

        roles = claims.get("roles")
        if (
            claims.get("type") != ACCESS_TOKEN_TYPE
            or not claims.get("sub")
            or not isinstance(roles, list)
        ):
            raise UnauthorizedError(AuthorizationErrorCode.INVALID_TOKEN)

        return {"user_id": claims["sub"], "roles": [str(role) for role in roles]}
