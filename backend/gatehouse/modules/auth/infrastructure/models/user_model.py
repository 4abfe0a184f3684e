"""
User Models

SQLModel definitions for user persistence.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from gatehouse.core.domain.base import as_utc
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.modules.auth.domain.aggregates import User
from gatehouse.modules.auth.domain.enums import SignInType, UserStatus
from gatehouse.modules.auth.domain.value_objects import Email, Username


class UserModel(SQLModel, table=True):
    """User persistence model."""

    __tablename__ = "users"

    # Identity
    id: str = Field(primary_key=True, max_length=36)
    email: str = Field(index=True, unique=True, max_length=254)
    username: str | None = Field(default=None, index=True, unique=True, max_length=20)
    external_id: str = Field(index=True, unique=True, max_length=128)

    # Profile
    display_name: str | None = Field(default=None, max_length=255)
    sign_in_type: str = Field(default=SignInType.EMAIL.value, max_length=16)
    status: str = Field(default=UserStatus.ACTIVE.value, index=True, max_length=16)

    # Versioning and audit
    version: int | None = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
    last_modified_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    created_by: str | None = Field(default=None, max_length=36)
    last_modified_by: str | None = Field(default=None, max_length=36)

    @classmethod
    def from_domain(cls, user: User) -> "UserModel":
        """Create model from domain aggregate."""
        return cls(
            id=str(user.id),
            email=user.email.value,
            username=user.username.value if user.username else None,
            external_id=user.external_id,
            display_name=user.display_name,
            sign_in_type=user.sign_in_type.value,
            status=user.status.value,
            version=user.version,
            created_at=user.created_at,
            last_modified_at=user.last_modified_at,
            created_by=str(user.created_by) if user.created_by else None,
            last_modified_by=str(user.last_modified_by) if user.last_modified_by else None,
        )

    def to_domain(self) -> User:
        """Convert to domain aggregate."""
        return User(
            id=Uuid(self.id),
            email=Email(self.email),
            sign_in_type=SignInType(self.sign_in_type),
            external_id=self.external_id,
            status=UserStatus(self.status),
            username=Username(self.username) if self.username else None,
            display_name=self.display_name,
            version=self.version or 0,
            created_at=as_utc(self.created_at),
            last_modified_at=as_utc(self.last_modified_at),
            created_by=Uuid(self.created_by) if self.created_by else None,
            last_modified_by=Uuid(self.last_modified_by) if self.last_modified_by else None,
        )


class UserPendingDeletionModel(SQLModel, table=True):
    """Users waiting for their provider account and data to be purged."""

    __tablename__ = "user_pending_deletions"

    user_id: str = Field(primary_key=True, foreign_key="users.id", max_length=36)
    external_id: str = Field(max_length=128)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
