"""
Role Model

SQLModel definition for role persistence.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from gatehouse.core.domain.base import as_utc
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.modules.auth.domain.aggregates import Role


class RoleModel(SQLModel, table=True):
    """Role persistence model."""

    __tablename__ = "roles"

    id: str = Field(primary_key=True, max_length=36)
    code: str = Field(index=True, unique=True, max_length=100)
    name: str = Field(unique=True, max_length=255)
    description: str | None = Field(default=None, max_length=1000)

    version: int | None = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_modified_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_domain(cls, role: Role) -> "RoleModel":
        return cls(
            id=str(role.id),
            code=role.code,
            name=role.name,
            description=role.description,
            version=role.version,
            created_at=role.created_at,
            last_modified_at=role.last_modified_at,
        )

    def to_domain(self) -> Role:
        return Role(
            id=Uuid(self.id),
            code=self.code,
            name=self.name,
            description=self.description,
            version=self.version or 0,
            created_at=as_utc(self.created_at),
            last_modified_at=as_utc(self.last_modified_at),
        )
