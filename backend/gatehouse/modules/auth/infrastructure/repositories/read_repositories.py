"""
Auth Read Repositories

Read-side queries returning flat read models. They share the database with the
write repositories but never build aggregates.
"""

from typing import Any, ClassVar

from sqlalchemy import or_
from sqlmodel import select

from gatehouse.core.cqrs import PaginatedResult, Pagination
from gatehouse.core.domain.base import as_utc
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.infrastructure import SQLReadRepository
from gatehouse.modules.auth.application.read_models import (
    RoleFilter,
    RoleReadModel,
    UserFilter,
    UserGroupFilter,
    UserGroupReadModel,
    UserReadModel,
)
from gatehouse.modules.auth.domain.enums import (
    RoleSortField,
    UserGroupSortField,
    UserSortField,
    UserStatus,
)
from gatehouse.modules.auth.infrastructure.models import (
    RoleModel,
    UserGroupModel,
    UserGroupRoleModel,
    UserGroupUserModel,
    UserModel,
)


def _contains(term: str) -> str:
    return f"%{term.strip().lower()}%"


# =====================================================================================
# USERS
# =====================================================================================


class SQLUserReadRepository(SQLReadRepository):
    sort_columns: ClassVar[dict[str, Any]] = {
        UserSortField.EMAIL.value: UserModel.email,
        UserSortField.USERNAME.value: UserModel.username,
        UserSortField.CREATED_AT.value: UserModel.created_at,
        UserSortField.LAST_MODIFIED_AT.value: UserModel.last_modified_at,
    }

    # Public field names accepted by ``UserFilter.fields``
    PROJECTABLE_FIELDS: ClassVar[dict[str, str]] = {
        "email": "email",
        "username": "username",
        "displayName": "display_name",
        "status": "status",
        "signInType": "sign_in_type",
        "createdAt": "created_at",
        "lastModifiedAt": "last_modified_at",
    }

    @classmethod
    def _to_read_model(
        cls, model: UserModel, fields: list[str] | None = None
    ) -> UserReadModel:
        values = {
            "email": model.email,
            "username": model.username,
            "display_name": model.display_name,
            "status": model.status,
            "sign_in_type": model.sign_in_type,
            "created_at": as_utc(model.created_at),
            "last_modified_at": as_utc(model.last_modified_at),
        }
        if fields:
            selected = {cls.PROJECTABLE_FIELDS[f] for f in fields if f in cls.PROJECTABLE_FIELDS}
            values = {key: value for key, value in values.items() if key in selected}
        return UserReadModel(id=model.id, **values)

    async def find_by_id(self, user_id: Uuid) -> UserReadModel | None:
        async with self.database.session() as session:
            model = await session.get(UserModel, str(user_id))
        if model is None or model.status == UserStatus.DELETED.value:
            return None
        return self._to_read_model(model)

    async def find(self, user_filter: UserFilter) -> PaginatedResult[UserReadModel]:
        stmt = select(UserModel).where(UserModel.status != UserStatus.DELETED.value)

        if user_filter.search_term:
            pattern = _contains(user_filter.search_term)
            stmt = stmt.where(
                or_(
                    UserModel.email.ilike(pattern),
                    UserModel.username.ilike(pattern),
                    UserModel.display_name.ilike(pattern),
                )
            )
        if user_filter.user_group_id is not None:
            stmt = stmt.join(
                UserGroupUserModel, UserGroupUserModel.user_id == UserModel.id
            ).where(UserGroupUserModel.user_group_id == str(user_filter.user_group_id))

        async with self.database.session() as session:
            rows, count = await self._paginate(
                session,
                stmt,
                user_filter.page,
                user_filter.sort_field,
                user_filter.sort_order,
            )

        return PaginatedResult(
            data=[self._to_read_model(row, user_filter.fields) for row in rows],
            pagination=Pagination(count=count, page_index=user_filter.page.page_index),
        )


# =====================================================================================
# USER GROUPS
# =====================================================================================


class SQLUserGroupReadRepository(SQLReadRepository):
    sort_columns: ClassVar[dict[str, Any]] = {
        UserGroupSortField.NAME.value: UserGroupModel.name,
        UserGroupSortField.CREATED_AT.value: UserGroupModel.created_at,
    }

    @staticmethod
    def _to_read_model(model: UserGroupModel) -> UserGroupReadModel:
        return UserGroupReadModel(
            id=model.id,
            name=model.name,
            description=model.description,
            created_at=as_utc(model.created_at),
            last_modified_at=as_utc(model.last_modified_at),
        )

    async def find_by_id(self, user_group_id: Uuid) -> UserGroupReadModel | None:
        async with self.database.session() as session:
            model = await session.get(UserGroupModel, str(user_group_id))
        return self._to_read_model(model) if model else None

    async def find(
        self, user_group_filter: UserGroupFilter
    ) -> PaginatedResult[UserGroupReadModel]:
        stmt = select(UserGroupModel)
        if user_group_filter.search_term:
            pattern = _contains(user_group_filter.search_term)
            stmt = stmt.where(
                or_(
                    UserGroupModel.name.ilike(pattern),
                    UserGroupModel.description.ilike(pattern),
                )
            )

        async with self.database.session() as session:
            rows, count = await self._paginate(
                session,
                stmt,
                user_group_filter.page,
                user_group_filter.sort_field,
                user_group_filter.sort_order,
            )

        return PaginatedResult(
            data=[self._to_read_model(row) for row in rows],
            pagination=Pagination(count=count, page_index=user_group_filter.page.page_index),
        )


# =====================================================================================
# ROLES
# =====================================================================================


class SQLRoleReadRepository(SQLReadRepository):
    sort_columns: ClassVar[dict[str, Any]] = {
        RoleSortField.NAME.value: RoleModel.name,
        RoleSortField.CODE.value: RoleModel.code,
    }

    @staticmethod
    def _to_read_model(model: RoleModel) -> RoleReadModel:
        return RoleReadModel(
            id=model.id, code=model.code, name=model.name, description=model.description
        )

    async def find_by_id(self, role_id: Uuid) -> RoleReadModel | None:
        async with self.database.session() as session:
            model = await session.get(RoleModel, str(role_id))
        return self._to_read_model(model) if model else None

    async def find(self, role_filter: RoleFilter) -> PaginatedResult[RoleReadModel]:
        stmt = select(RoleModel)
        if role_filter.search_term:
            pattern = _contains(role_filter.search_term)
            stmt = stmt.where(
                or_(
                    RoleModel.code.ilike(pattern),
                    RoleModel.name.ilike(pattern),
                    RoleModel.description.ilike(pattern),
                )
            )
        if role_filter.user_group_id is not None:
            stmt = stmt.join(
                UserGroupRoleModel, UserGroupRoleModel.role_id == RoleModel.id
            ).where(UserGroupRoleModel.user_group_id == str(role_filter.user_group_id))

        async with self.database.session() as session:
            rows, count = await self._paginate(
                session,
                stmt,
                role_filter.page,
                role_filter.sort_field,
                role_filter.sort_order,
            )

        return PaginatedResult(
            data=[self._to_read_model(row) for row in rows],
            pagination=Pagination(count=count, page_index=role_filter.page.page_index),
        )
