"""
Role Repository Implementation

Roles are read-mostly; the only writes are the startup seed.
"""

from typing import Any

from sqlmodel import select

from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationErrorCode
from gatehouse.core.infrastructure import SQLAggregateRepository, UniqueConstraint
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.domain.aggregates import Role
from gatehouse.modules.auth.domain.enums import AuthRole
from gatehouse.modules.auth.infrastructure.models import RoleModel

logger = get_logger(__name__)

# Fixed ids keep the seed idempotent across databases
DEFAULT_ROLES: tuple[tuple[str, AuthRole, str, str], ...] = (
    (
        "5b0c8f7e-1c9e-4f3a-9a51-0d1f4f2b7a01",
        AuthRole.AUTH_MANAGER,
        "Auth manager",
        "Manage users, user groups and their roles",
    ),
    (
        "5b0c8f7e-1c9e-4f3a-9a51-0d1f4f2b7a02",
        AuthRole.AUTH_VIEWER,
        "Auth viewer",
        "Read users, user groups and roles",
    ),
)


class SQLRoleRepository(SQLAggregateRepository[Role, RoleModel]):
    """SQLModel implementation of role repository."""

    model_class = RoleModel
    unique_constraints = (
        UniqueConstraint("roles", "code", ValidationErrorCode.FIELD_IS_INVALID, "code"),
        UniqueConstraint("roles", "name", ValidationErrorCode.FIELD_IS_INVALID, "name"),
    )

    def to_model(self, aggregate: Role) -> RoleModel:
        return RoleModel.from_domain(aggregate)

    def to_domain(self, model: RoleModel) -> Role:
        return model.to_domain()

    def update_values(self, aggregate: Role) -> dict[str, Any]:
        return {
            "code": aggregate.code,
            "name": aggregate.name,
            "description": aggregate.description,
            "last_modified_at": aggregate.last_modified_at,
        }

    async def find_by_id(self, role_id: Uuid) -> Role | None:
        model = await self.find_model_by_id(str(role_id))
        return model.to_domain() if model else None

    async def role_exists(self, role_id: Uuid) -> bool:
        return await self.find_model_by_id(str(role_id)) is not None

    async def seed_roles(self) -> int:
        """Insert the default roles that are missing; returns how many were added."""
        async with self.database.session() as session:
            result = await session.exec(select(RoleModel.code))
            existing = set(result.all())

        added = 0
        for role_id, code, name, description in DEFAULT_ROLES:
            if code.value in existing:
                continue
            # Seeded roles start at version 1 so later saves take the update path
            role = Role(id=Uuid(role_id), code=code.value, name=name, description=description)
            role.version = 1
            await self.save(role)
            added += 1

        if added:
            logger.info("Default roles seeded", count=added)
        return added
