"""
User Group Models

SQLModel definitions for user groups and their join tables.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from gatehouse.core.domain.base import as_utc
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.modules.auth.domain.aggregates import UserGroup


class UserGroupModel(SQLModel, table=True):
    """User group persistence model."""

    __tablename__ = "user_groups"

    id: str = Field(primary_key=True, max_length=36)
    name: str = Field(index=True, unique=True, max_length=255)
    description: str | None = Field(default=None, max_length=1000)

    version: int | None = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    last_modified_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    created_by: str | None = Field(default=None, max_length=36)
    last_modified_by: str | None = Field(default=None, max_length=36)

    @classmethod
    def from_domain(cls, user_group: UserGroup) -> "UserGroupModel":
        return cls(
            id=str(user_group.id),
            name=user_group.name,
            description=user_group.description,
            version=user_group.version,
            created_at=user_group.created_at,
            last_modified_at=user_group.last_modified_at,
            created_by=str(user_group.created_by) if user_group.created_by else None,
            last_modified_by=(
                str(user_group.last_modified_by) if user_group.last_modified_by else None
            ),
        )

    def to_domain(self) -> UserGroup:
        return UserGroup(
            id=Uuid(self.id),
            name=self.name,
            description=self.description,
            version=self.version or 0,
            created_at=as_utc(self.created_at),
            last_modified_at=as_utc(self.last_modified_at),
            created_by=Uuid(self.created_by) if self.created_by else None,
            last_modified_by=Uuid(self.last_modified_by) if self.last_modified_by else None,
        )


class UserGroupUserModel(SQLModel, table=True):
    """Membership of a user in a user group."""

    __tablename__ = "user_group_users"

    user_group_id: str = Field(primary_key=True, foreign_key="user_groups.id", max_length=36)
    user_id: str = Field(primary_key=True, foreign_key="users.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class UserGroupRoleModel(SQLModel, table=True):
    """Role granted to every member of a user group."""

    __tablename__ = "user_group_roles"

    user_group_id: str = Field(primary_key=True, foreign_key="user_groups.id", max_length=36)
    role_id: str = Field(primary_key=True, foreign_key="roles.id", index=True, max_length=36)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
