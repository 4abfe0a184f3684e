"""
User Repository Implementation

SQLModel-based implementation of the user repository interface.
"""

from typing import Any

from sqlalchemy import delete
from sqlmodel import and_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from gatehouse.core.database import DatabaseManager
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.infrastructure import SQLAggregateRepository, UniqueConstraint
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.domain.aggregates import User
from gatehouse.modules.auth.domain.enums import UserStatus
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.domain.interfaces import ExternalAuthenticationService
from gatehouse.modules.auth.domain.value_objects import Email, Username
from gatehouse.modules.auth.infrastructure.models import (
    UserGroupUserModel,
    UserModel,
    UserPendingDeletionModel,
)

logger = get_logger(__name__)


class SQLUserRepository(SQLAggregateRepository[User, UserModel]):
    """SQLModel implementation of user repository."""

    model_class = UserModel
    unique_constraints = (
        UniqueConstraint("users", "email", AuthErrorCode.EMAIL_ALREADY_TAKEN, "email"),
        UniqueConstraint("users", "username", AuthErrorCode.USERNAME_ALREADY_TAKEN, "username"),
        UniqueConstraint("users", "external_id", AuthErrorCode.EMAIL_ALREADY_TAKEN, "email"),
    )

    def __init__(
        self,
        database: DatabaseManager,
        external_authentication_service: ExternalAuthenticationService,
    ):
        super().__init__(database)
        self.external_authentication_service = external_authentication_service

    # Mapping

    def to_model(self, aggregate: User) -> UserModel:
        return UserModel.from_domain(aggregate)

    def to_domain(self, model: UserModel) -> User:
        return model.to_domain()

    def update_values(self, aggregate: User) -> dict[str, Any]:
        return {
            "email": aggregate.email.value,
            "username": aggregate.username.value if aggregate.username else None,
            "display_name": aggregate.display_name,
            "status": aggregate.status.value,
            "sign_in_type": aggregate.sign_in_type.value,
            "last_modified_at": aggregate.last_modified_at,
            "last_modified_by": (
                str(aggregate.last_modified_by) if aggregate.last_modified_by else None
            ),
        }

    async def _after_write(self, session: AsyncSession, aggregate: User) -> None:
        if aggregate.status != UserStatus.DELETED:
            return
        pending = await session.get(UserPendingDeletionModel, str(aggregate.id))
        if pending is None:
            session.add(
                UserPendingDeletionModel(
                    user_id=str(aggregate.id), external_id=aggregate.external_id
                )
            )
            logger.info("User queued for deletion", user_id=str(aggregate.id))

    async def delete(self, user: User) -> None:
        raise NotImplementedError(
            "Deleting users is not supported, use User.mark_for_deletion"
        )

    # Lookups

    async def _find_one(self, *conditions) -> User | None:
        async with self.database.session() as session:
            result = await session.exec(select(UserModel).where(*conditions))
            model = result.first()
        return model.to_domain() if model else None

    async def find_by_id(self, user_id: Uuid) -> User | None:
        return await self._find_one(UserModel.id == str(user_id))

    async def find_by_email(self, email: Email) -> User | None:
        return await self._find_one(UserModel.email == email.value)

    async def find_by_username(self, username: Username) -> User | None:
        return await self._find_one(UserModel.username == username.value)

    async def find_by_external_id(self, external_id: str) -> User | None:
        return await self._find_one(UserModel.external_id == external_id)

    # Uniqueness

    async def email_exists(self, email: Email) -> bool:
        """Check local users first, then the identity provider."""
        async with self.database.session() as session:
            result = await session.exec(
                select(UserModel.id).where(UserModel.email == email.value)
            )
            if result.first() is not None:
                return True

        external_user = await self.external_authentication_service.find_user_by_email(
            email.value
        )
        return external_user is not None

    async def username_exists(
        self, username: Username, exclude_id: Uuid | None = None
    ) -> bool:
        stmt = select(UserModel.id).where(UserModel.username == username.value)
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != str(exclude_id))
        async with self.database.session() as session:
            result = await session.exec(stmt)
            return result.first() is not None

    # Group membership

    async def user_in_group(self, user_id: Uuid, user_group_id: Uuid) -> bool:
        async with self.database.session() as session:
            membership = await session.get(
                UserGroupUserModel, (str(user_group_id), str(user_id))
            )
            return membership is not None

    async def add_to_group(
        self, user_id: Uuid, user_group_id: Uuid, session: AsyncSession | None = None
    ) -> None:
        row = UserGroupUserModel(user_group_id=str(user_group_id), user_id=str(user_id))
        if session is not None:
            session.add(row)
            await session.flush()
            return
        async with self.database.transaction() as own_session:
            own_session.add(row)

    async def remove_from_group(
        self, user_id: Uuid, user_group_id: Uuid, session: AsyncSession | None = None
    ) -> None:
        stmt = delete(UserGroupUserModel).where(
            and_(
                UserGroupUserModel.user_group_id == str(user_group_id),
                UserGroupUserModel.user_id == str(user_id),
            )
        )
        if session is not None:
            await session.execute(stmt)
            return
        async with self.database.transaction() as own_session:
            await own_session.execute(stmt)
