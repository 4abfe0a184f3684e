"""Auth repository implementations."""

from .read_repositories import (
    SQLRoleReadRepository,
    SQLUserGroupReadRepository,
    SQLUserReadRepository,
)
from .role_repository import DEFAULT_ROLES, SQLRoleRepository
from .user_group_repository import SQLUserGroupRepository
from .user_repository import SQLUserRepository

__all__ = [
    "DEFAULT_ROLES",
    "SQLRoleReadRepository",
    "SQLRoleRepository",
    "SQLUserGroupReadRepository",
    "SQLUserGroupRepository",
    "SQLUserReadRepository",
    "SQLUserRepository",
]
