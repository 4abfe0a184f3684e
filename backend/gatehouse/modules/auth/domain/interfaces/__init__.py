"""Auth domain interfaces."""

from .repositories import (
    InTransaction,
    IRoleRepository,
    IUserGroupRepository,
    IUserRepository,
)
from .services import (
    ExternalAuthenticationService,
    ExternalUser,
    IUserIdGenerator,
    VerifiedCredentials,
)

__all__ = [
    "ExternalAuthenticationService",
    "ExternalUser",
    "IRoleRepository",
    "IUserGroupRepository",
    "IUserIdGenerator",
    "IUserRepository",
    "InTransaction",
    "VerifiedCredentials",
]
