"""HTTP transport plumbing shared by the module routers."""

from .context import build_app_context, extract_bearer_token, get_app_context, get_auth_module
from .errors import register_exception_handlers
from .health import router as health_router
from .middleware import RequestContextMiddleware
from .serialization import paginated, to_camel_dict

__all__ = [
    "RequestContextMiddleware",
    "build_app_context",
    "extract_bearer_token",
    "get_app_context",
    "get_auth_module",
    "health_router",
    "paginated",
    "register_exception_handlers",
    "to_camel_dict",
]
