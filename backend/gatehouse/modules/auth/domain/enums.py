"""
Auth Domain Enumerations
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status. DELETED is terminal."""

    ACTIVE = "ACTIVE"
    DISABLED = "DISABLED"
    DELETED = "DELETED"


class SignInType(str, Enum):
    """How the user authenticates with the identity provider."""

    EMAIL = "EMAIL"
    GOOGLE = "GOOGLE"
    APPLE = "APPLE"

    @classmethod
    def from_provider_id(cls, provider_id: str | None) -> "SignInType | None":
        """Map an identity provider id; ``None`` for unknown providers."""
        if not provider_id or provider_id == "password":
            return cls.EMAIL
        return {
            "google.com": cls.GOOGLE,
            "apple.com": cls.APPLE,
        }.get(provider_id)


class AuthRole(str, Enum):
    """Role codes granted through user groups."""

    AUTH_MANAGER = "AUTH_MANAGER"
    AUTH_VIEWER = "AUTH_VIEWER"

    @classmethod
    def readers(cls) -> list["AuthRole"]:
        return [cls.AUTH_MANAGER, cls.AUTH_VIEWER]


class UserEventType(str, Enum):
    REGISTERED = "USER_REGISTERED"
    UPDATED = "USER_UPDATED"
    DISABLED = "USER_DISABLED"
    ACTIVATED = "USER_ACTIVATED"
    DELETED = "USER_DELETED"
    ADDED_TO_USER_GROUP = "USER_ADDED_TO_USER_GROUP"
    REMOVED_FROM_USER_GROUP = "USER_REMOVED_FROM_USER_GROUP"


class UserGroupEventType(str, Enum):
    CREATED = "USER_GROUP_CREATED"
    UPDATED = "USER_GROUP_UPDATED"
    DELETED = "USER_GROUP_DELETED"
    ROLE_ADDED = "USER_GROUP_ROLE_ADDED"
    ROLE_REMOVED = "USER_GROUP_ROLE_REMOVED"


# Sort fields accepted by the read side
class UserSortField(str, Enum):
    EMAIL = "email"
    USERNAME = "username"
    CREATED_AT = "createdAt"
    LAST_MODIFIED_AT = "lastModifiedAt"


class UserGroupSortField(str, Enum):
    NAME = "name"
    CREATED_AT = "createdAt"


class RoleSortField(str, Enum):
    NAME = "name"
    CODE = "code"
