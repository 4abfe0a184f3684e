"""Auth REST API."""

from fastapi import APIRouter

from .auth_routes import router as auth_router
from .role_routes import router as role_router
from .user_group_routes import router as user_group_router
from .user_routes import router as user_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(user_router)
router.include_router(user_group_router)
router.include_router(role_router)

__all__ = ["router"]
