"""
Single-item read queries.

Each handler requires AUTH_MANAGER or AUTH_VIEWER, validates the id and reports
a missing item with the aggregate's not-found code.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import Query, QueryHandler
from gatehouse.core.errors import ValidationError
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import require_uuid
from gatehouse.modules.auth.application.read_models import (
    IRoleReadRepository,
    IUserGroupReadRepository,
    IUserReadRepository,
    RoleReadModel,
    UserGroupReadModel,
    UserReadModel,
)
from gatehouse.modules.auth.domain.enums import AuthRole, UserStatus
from gatehouse.modules.auth.domain.errors import AuthErrorCode


@dataclass(frozen=True)
class GetUserQuery(Query):
    id: str


@dataclass(frozen=True)
class GetUserGroupQuery(Query):
    id: str


@dataclass(frozen=True)
class GetRoleQuery(Query):
    id: str


@dataclass(frozen=True)
class GetProfileQuery(Query):
    pass


class GetUserQueryHandler(QueryHandler[GetUserQuery, UserReadModel]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_read_repository: IUserReadRepository,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_read_repository = user_read_repository

    async def handle(self, query: GetUserQuery, context: AppContext) -> UserReadModel:
        self.authorization_service.require_one_of_roles(AuthRole.readers(), context)
        user_id = require_uuid(query.id, "id")

        user = await self.user_read_repository.find_by_id(user_id)
        if user is None:
            raise ValidationError(AuthErrorCode.USER_NOT_FOUND, {"id": str(user_id)})
        return user


class GetUserGroupQueryHandler(QueryHandler[GetUserGroupQuery, UserGroupReadModel]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_group_read_repository: IUserGroupReadRepository,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_group_read_repository = user_group_read_repository

    async def handle(
        self, query: GetUserGroupQuery, context: AppContext
    ) -> UserGroupReadModel:
        self.authorization_service.require_one_of_roles(AuthRole.readers(), context)
        user_group_id = require_uuid(query.id, "id")

        user_group = await self.user_group_read_repository.find_by_id(user_group_id)
        if user_group is None:
            raise ValidationError(
                AuthErrorCode.USER_GROUP_NOT_FOUND, {"id": str(user_group_id)}
            )
        return user_group


class GetRoleQueryHandler(QueryHandler[GetRoleQuery, RoleReadModel]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        role_read_repository: IRoleReadRepository,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.role_read_repository = role_read_repository

    async def handle(self, query: GetRoleQuery, context: AppContext) -> RoleReadModel:
        self.authorization_service.require_one_of_roles(AuthRole.readers(), context)
        role_id = require_uuid(query.id, "id")

        role = await self.role_read_repository.find_by_id(role_id)
        if role is None:
            raise ValidationError(AuthErrorCode.ROLE_NOT_FOUND, {"id": str(role_id)})
        return role


class GetProfileQueryHandler(QueryHandler[GetProfileQuery, UserReadModel]):
    """The caller's own user, which must be active."""

    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_read_repository: IUserReadRepository,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_read_repository = user_read_repository

    async def handle(self, query: GetProfileQuery, context: AppContext) -> UserReadModel:
        caller = self.authorization_service.require_authenticated(context)

        user = await self.user_read_repository.find_by_id(caller.user_id)
        if user is None:
            raise ValidationError(AuthErrorCode.USER_NOT_FOUND, {"id": str(caller.user_id)})
        if user.status != UserStatus.ACTIVE.value:
            raise ValidationError(
                AuthErrorCode.USER_MUST_BE_ACTIVE, {"id": str(caller.user_id)}
            )
        return user
