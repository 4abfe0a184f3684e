"""Authorization and access token services."""

from gatehouse.core.security.authorization import AuthorizationService
from gatehouse.core.security.jwt import JwtService

__all__ = ["AuthorizationService", "JwtService"]
