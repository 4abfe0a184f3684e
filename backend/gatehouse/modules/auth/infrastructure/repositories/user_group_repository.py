"""
User Group Repository Implementation

SQLModel-based implementation of the user group repository interface.
"""

from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import and_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.infrastructure import (
    RepositoryError,
    SQLAggregateRepository,
    UniqueConstraint,
)
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.domain.aggregates import UserGroup
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.infrastructure.models import (
    RoleModel,
    UserGroupModel,
    UserGroupRoleModel,
    UserGroupUserModel,
)

logger = get_logger(__name__)


class SQLUserGroupRepository(SQLAggregateRepository[UserGroup, UserGroupModel]):
    """SQLModel implementation of user group repository."""

    model_class = UserGroupModel
    unique_constraints = (
        UniqueConstraint(
            "user_groups", "name", AuthErrorCode.USER_GROUP_NAME_ALREADY_TAKEN, "name"
        ),
    )

    def to_model(self, aggregate: UserGroup) -> UserGroupModel:
        return UserGroupModel.from_domain(aggregate)

    def to_domain(self, model: UserGroupModel) -> UserGroup:
        return model.to_domain()

    def update_values(self, aggregate: UserGroup) -> dict[str, Any]:
        return {
            "name": aggregate.name,
            "description": aggregate.description,
            "last_modified_at": aggregate.last_modified_at,
            "last_modified_by": (
                str(aggregate.last_modified_by) if aggregate.last_modified_by else None
            ),
        }

    async def delete(self, user_group: UserGroup) -> None:
        """
        Remove the group with its memberships and role grants.

        Raises:
            ValidationError: OUTDATED_VERSION when the group changed since it was
                loaded; the join rows are kept
        """
        group_id = str(user_group.id)
        try:
            async with self.database.transaction() as session:
                await session.execute(
                    delete(UserGroupUserModel).where(
                        UserGroupUserModel.user_group_id == group_id
                    )
                )
                await session.execute(
                    delete(UserGroupRoleModel).where(
                        UserGroupRoleModel.user_group_id == group_id
                    )
                )
                await self._delete_versioned(session, user_group)
        except SQLAlchemyError as e:
            raise RepositoryError(message="Failed to delete user group", cause=e) from e

        logger.debug("User group removed", user_group_id=group_id)

    async def find_by_id(self, user_group_id: Uuid) -> UserGroup | None:
        model = await self.find_model_by_id(str(user_group_id))
        return model.to_domain() if model else None

    async def name_exists(self, name: str, exclude_id: Uuid | None = None) -> bool:
        stmt = select(UserGroupModel.id).where(UserGroupModel.name == name.strip())
        if exclude_id is not None:
            stmt = stmt.where(UserGroupModel.id != str(exclude_id))
        async with self.database.session() as session:
            result = await session.exec(stmt)
            return result.first() is not None

    # Role grants

    async def role_in_group(self, user_group_id: Uuid, role_id: Uuid) -> bool:
        async with self.database.session() as session:
            grant = await session.get(
                UserGroupRoleModel, (str(user_group_id), str(role_id))
            )
            return grant is not None

    async def add_role(
        self, user_group_id: Uuid, role_id: Uuid, session: AsyncSession | None = None
    ) -> None:
        row = UserGroupRoleModel(user_group_id=str(user_group_id), role_id=str(role_id))
        if session is not None:
            session.add(row)
            await session.flush()
            return
        async with self.database.transaction() as own_session:
            own_session.add(row)

    async def remove_role(
        self, user_group_id: Uuid, role_id: Uuid, session: AsyncSession | None = None
    ) -> None:
        stmt = delete(UserGroupRoleModel).where(
            and_(
                UserGroupRoleModel.user_group_id == str(user_group_id),
                UserGroupRoleModel.role_id == str(role_id),
            )
        )
        if session is not None:
            await session.execute(stmt)
            return
        async with self.database.transaction() as own_session:
            await own_session.execute(stmt)

    async def get_user_role_codes(self, user_id: Uuid) -> list[str]:
        stmt = (
            select(RoleModel.code)
            .join(UserGroupRoleModel, UserGroupRoleModel.role_id == RoleModel.id)
            .join(
                UserGroupUserModel,
                UserGroupUserModel.user_group_id == UserGroupRoleModel.user_group_id,
            )
            .where(UserGroupUserModel.user_id == str(user_id))
            .distinct()
            .order_by(RoleModel.code)
        )
        async with self.database.session() as session:
            result = await session.exec(stmt)
            return list(result.all())
