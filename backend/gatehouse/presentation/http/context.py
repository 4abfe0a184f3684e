"""
Request Context

Builds the per-request ``AppContext`` from the bearer token and exposes the
application objects stored on ``app.state`` as FastAPI dependencies.
"""

from fastapi import Request

from gatehouse.core.application import AppContext, AppUser
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import GatehouseError
from gatehouse.core.logging import get_logger, log_context
from gatehouse.core.security import JwtService

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Token from an ``Authorization`` header, or None if it is not a bearer header."""
    if not authorization:
        return None
    header = authorization.strip()
    if not header.lower().startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


def build_app_context(authorization: str | None, jwt_service: JwtService) -> AppContext:
    """
    Resolve the caller from the ``Authorization`` header.

    A missing, malformed or rejected token yields an anonymous context; handlers
    decide whether anonymous callers are allowed.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        return AppContext.anonymous()

    try:
        payload = jwt_service.verify_token(token)
    except GatehouseError as e:
        logger.debug("Access token rejected", error_code=e.code)
        return AppContext.anonymous()

    result = Uuid.try_create(payload.get("user_id"), "userId")
    if not result.is_success:
        return AppContext.anonymous()

    log_context(user_id=str(result.value))
    return AppContext(user=AppUser(user_id=result.value, roles=list(payload.get("roles", []))))


def get_auth_module(request: Request):
    """FastAPI dependency returning the auth module built at startup."""
    return request.app.state.auth_module


def get_app_context(request: Request) -> AppContext:
    """FastAPI dependency returning the caller's context."""
    return build_app_context(
        request.headers.get("Authorization"),
        request.app.state.auth_module.jwt_service,
    )
