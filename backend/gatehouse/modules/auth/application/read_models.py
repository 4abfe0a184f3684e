"""
Auth read models, filters and read repository contracts.

Read models are flat projections returned by the query handlers; they are never
turned back into aggregates.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from gatehouse.core.cqrs import PageRequest, PaginatedResult
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.enums import SortOrder

# =====================================================================================
# READ MODELS
# =====================================================================================


@dataclass(frozen=True)
class UserReadModel:
    id: str
    email: str | None = None
    username: str | None = None
    display_name: str | None = None
    status: str | None = None
    sign_in_type: str | None = None
    created_at: datetime | None = None
    last_modified_at: datetime | None = None


@dataclass(frozen=True)
class UserGroupReadModel:
    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    last_modified_at: datetime | None = None


@dataclass(frozen=True)
class RoleReadModel:
    id: str
    code: str
    name: str
    description: str | None = None


# =====================================================================================
# FILTERS
# =====================================================================================


@dataclass(frozen=True)
class UserFilter:
    """
    Filter for user searches.

    ``fields`` limits the projected columns; ``id`` is always returned.
    """

    search_term: str | None = None
    user_group_id: Uuid | None = None
    fields: list[str] | None = None
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    page: PageRequest = field(default_factory=PageRequest)


@dataclass(frozen=True)
class UserGroupFilter:
    search_term: str | None = None
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    page: PageRequest = field(default_factory=PageRequest)


@dataclass(frozen=True)
class RoleFilter:
    search_term: str | None = None
    user_group_id: Uuid | None = None
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    page: PageRequest = field(default_factory=PageRequest)


# =====================================================================================
# READ REPOSITORY CONTRACTS
# =====================================================================================


class IUserReadRepository(Protocol):
    async def find_by_id(self, user_id: Uuid) -> UserReadModel | None: ...

    async def find(self, user_filter: UserFilter) -> PaginatedResult[UserReadModel]:
        """Search non-deleted users."""
        ...


class IUserGroupReadRepository(Protocol):
    async def find_by_id(self, user_group_id: Uuid) -> UserGroupReadModel | None: ...

    async def find(
        self, user_group_filter: UserGroupFilter
    ) -> PaginatedResult[UserGroupReadModel]: ...


class IRoleReadRepository(Protocol):
    async def find_by_id(self, role_id: Uuid) -> RoleReadModel | None: ...

    async def find(self, role_filter: RoleFilter) -> PaginatedResult[RoleReadModel]: ...


__all__ = [
    "IRoleReadRepository",
    "IUserGroupReadRepository",
    "IUserReadRepository",
    "RoleFilter",
    "RoleReadModel",
    "UserFilter",
    "UserGroupFilter",
    "UserGroupReadModel",
    "UserReadModel",
]
