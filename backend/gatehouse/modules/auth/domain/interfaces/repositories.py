"""Auth Repository Interfaces

Domain contracts for write-side persistence implemented by the infrastructure
layer. Every ``save`` is one transaction with an optimistic version check and
accepts an optional callback that runs inside that transaction.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

from gatehouse.core.domain.value_objects import Uuid

if TYPE_CHECKING:
    from gatehouse.modules.auth.domain.aggregates import Role, User, UserGroup
    from gatehouse.modules.auth.domain.value_objects import Email, Username

InTransaction = Callable[[Any], Awaitable[None]]


class IUserRepository(Protocol):
    """Repository interface for users."""

    async def save(self, user: "User", in_transaction: InTransaction | None = None) -> None:
        """Persist the user.

        Raises:
            ValidationError: OUTDATED_VERSION, EMAIL_ALREADY_TAKEN or
                USERNAME_ALREADY_TAKEN
        """
        ...

    async def delete(self, user: "User") -> None:
        """Not supported; users are soft-deleted with ``mark_for_deletion``."""
        ...

    async def find_by_id(self, user_id: Uuid) -> "User | None": ...

    async def find_by_email(self, email: "Email") -> "User | None": ...

    async def find_by_username(self, username: "Username") -> "User | None": ...

    async def find_by_external_id(self, external_id: str) -> "User | None": ...

    async def email_exists(self, email: "Email") -> bool:
        """Check local storage and the identity provider."""
        ...

    async def username_exists(
        self, username: "Username", exclude_id: Uuid | None = None
    ) -> bool: ...

    async def user_in_group(self, user_id: Uuid, user_group_id: Uuid) -> bool: ...

    async def add_to_group(
        self, user_id: Uuid, user_group_id: Uuid, session: Any | None = None
    ) -> None: ...

    async def remove_from_group(
        self, user_id: Uuid, user_group_id: Uuid, session: Any | None = None
    ) -> None: ...


class IUserGroupRepository(Protocol):
    """Repository interface for user groups."""

    async def save(
        self, user_group: "UserGroup", in_transaction: InTransaction | None = None
    ) -> None: ...

    async def delete(self, user_group: "UserGroup") -> None:
        """Remove the group with its membership and role rows; a stale version is OUTDATED_VERSION."""
        ...

    async def find_by_id(self, user_group_id: Uuid) -> "UserGroup | None": ...

    async def name_exists(self, name: str, exclude_id: Uuid | None = None) -> bool: ...

    async def role_in_group(self, user_group_id: Uuid, role_id: Uuid) -> bool: ...

    async def add_role(
        self, user_group_id: Uuid, role_id: Uuid, session: Any | None = None
    ) -> None: ...

    async def remove_role(
        self, user_group_id: Uuid, role_id: Uuid, session: Any | None = None
    ) -> None: ...

    async def get_user_role_codes(self, user_id: Uuid) -> list[str]:
        """Distinct codes of the roles granted through the user's groups."""
        ...


class IRoleRepository(Protocol):
    """Repository interface for roles."""

    async def find_by_id(self, role_id: Uuid) -> "Role | None": ...

    async def role_exists(self, role_id: Uuid) -> bool: ...
