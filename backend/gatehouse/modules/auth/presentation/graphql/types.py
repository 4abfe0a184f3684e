"""
Auth GraphQL Type Definitions

Output types mirror the read models; inputs mirror the REST request bodies.
"""

from datetime import datetime

import strawberry

from gatehouse.core.cqrs import PaginatedResult
from gatehouse.core.enums import SortOrder as DomainSortOrder
from gatehouse.modules.auth.application.common import (
    AccessTokenResult,
    IdResult,
    SignInResult,
)
from gatehouse.modules.auth.application.read_models import (
    RoleReadModel,
    UserGroupReadModel,
    UserReadModel,
)

SortOrder = strawberry.enum(DomainSortOrder, name="SortOrder")


# =====================================================================================
# OUTPUT TYPES
# =====================================================================================


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    email: str | None = None
    username: str | None = None
    display_name: str | None = None
    status: str | None = None
    sign_in_type: str | None = None
    created_at: datetime | None = None
    last_modified_at: datetime | None = None

    @classmethod
    def from_read_model(cls, model: UserReadModel) -> "UserType":
        return cls(
            id=strawberry.ID(model.id),
            email=model.email,
            username=model.username,
            display_name=model.display_name,
            status=model.status,
            sign_in_type=model.sign_in_type,
            created_at=model.created_at,
            last_modified_at=model.last_modified_at,
        )


@strawberry.type(name="UserGroup")
class UserGroupType:
    id: strawberry.ID
    name: str
    description: str | None = None
    created_at: datetime | None = None
    last_modified_at: datetime | None = None

    @classmethod
    def from_read_model(cls, model: UserGroupReadModel) -> "UserGroupType":
        return cls(
            id=strawberry.ID(model.id),
            name=model.name,
            description=model.description,
            created_at=model.created_at,
            last_modified_at=model.last_modified_at,
        )


@strawberry.type(name="Role")
class RoleType:
    id: strawberry.ID
    code: str
    name: str
    description: str | None = None

    @classmethod
    def from_read_model(cls, model: RoleReadModel) -> "RoleType":
        return cls(
            id=strawberry.ID(model.id),
            code=model.code,
            name=model.name,
            description=model.description,
        )


@strawberry.type
class Pagination:
    count: int
    page_index: int

    @classmethod
    def from_result(cls, result: PaginatedResult) -> "Pagination":
        return cls(count=result.pagination.count, page_index=result.pagination.page_index)


@strawberry.type
class UserPage:
    data: list[UserType]
    pagination: Pagination


@strawberry.type
class UserGroupPage:
    data: list[UserGroupType]
    pagination: Pagination


@strawberry.type
class RolePage:
    data: list[RoleType]
    pagination: Pagination


@strawberry.type
class SignInPayload:
    id: strawberry.ID
    id_token: str
    sign_in_token: str

    @classmethod
    def from_result(cls, result: SignInResult) -> "SignInPayload":
        return cls(
            id=strawberry.ID(result.id),
            id_token=result.id_token,
            sign_in_token=result.sign_in_token,
        )


@strawberry.type
class AccessTokenPayload:
    token: str

    @classmethod
    def from_result(cls, result: AccessTokenResult) -> "AccessTokenPayload":
        return cls(token=result.token)


@strawberry.type
class IdPayload:
    id: strawberry.ID

    @classmethod
    def from_result(cls, result: IdResult) -> "IdPayload":
        return cls(id=strawberry.ID(result.id))


# =====================================================================================
# INPUT TYPES
# =====================================================================================


@strawberry.input
class RegisterInput:
    email: str
    password: str
    username: str | None = None
    display_name: str | None = None


@strawberry.input
class SignInInput:
    email_or_username: str
    password: str


@strawberry.input
class UpdateProfileInput:
    display_name: str | None = None
    username: str | None = None


@strawberry.input
class UpdateUserInput:
    display_name: str | None = None
    username: str | None = None


@strawberry.input
class CreateUserGroupInput:
    name: str
    description: str | None = None


@strawberry.input
class UpdateUserGroupInput:
    name: str | None = None
    description: str | None = None


@strawberry.input
class PageInput:
    page_index: int | None = None
    items_per_page: int | None = None
    sort_field: str | None = None
    sort_order: SortOrder | None = None
