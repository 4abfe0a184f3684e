"""
UserGroup Aggregate Root

Named set of users that grants its roles to every member. Memberships and role
grants are stored in join tables owned by the repository; the aggregate only
records the events describing them.
"""

from datetime import datetime
from typing import Any

from gatehouse.core.domain.base import AggregateRoot
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError, ValidationErrorCode
from gatehouse.modules.auth.domain.enums import UserGroupEventType


class UserGroup(AggregateRoot):
    """User group aggregate root."""

    aggregate_name = "UserGroup"

    NAME_MAX_LENGTH = 255
    DESCRIPTION_MAX_LENGTH = 1000

    def __init__(
        self,
        id: Uuid,  # noqa: A002
        name: str,
        description: str | None = None,
        version: int = 0,
        created_at: datetime | None = None,
        last_modified_at: datetime | None = None,
        created_by: Uuid | None = None,
        last_modified_by: Uuid | None = None,
    ):
        super().__init__(
            id,
            version=version,
            created_at=created_at,
            last_modified_at=last_modified_at,
            created_by=created_by,
            last_modified_by=last_modified_by,
        )
        self.name = name
        self.description = description

    @classmethod
    def _validate_name(cls, name: str | None) -> str:
        if name is None or not name.strip():
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, "name")
        name = name.strip()
        if len(name) > cls.NAME_MAX_LENGTH:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_LONG, "name", max_length=cls.NAME_MAX_LENGTH
            )
        return name

    @classmethod
    def _validate_description(cls, description: str | None) -> str | None:
        if description is not None and len(description) > cls.DESCRIPTION_MAX_LENGTH:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_LONG,
                "description",
                max_length=cls.DESCRIPTION_MAX_LENGTH,
            )
        return description

    @classmethod
    def create(
        cls,
        id: Uuid,  # noqa: A002
        name: str,
        description: str | None,
        created_by: Uuid,
    ) -> "UserGroup":
        """
        Create a user group and record CREATED.

        Raises:
            ValidationError: If the creator is missing or a field is invalid
        """
        if created_by is None:
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, "createdBy")

        group = cls(
            id=id,
            name=cls._validate_name(name),
            description=cls._validate_description(description),
            created_by=created_by,
        )
        group._record(
            UserGroupEventType.CREATED,
            {"name": group.name, "description": group.description},
        )
        return group

    def set_name(self, name: str) -> None:
        self.name = self._validate_name(name)
        self._record(UserGroupEventType.UPDATED, {"field": "name", "value": self.name})

    def set_description(self, description: str | None) -> None:
        self.description = self._validate_description(description)
        self._record(
            UserGroupEventType.UPDATED, {"field": "description", "value": description}
        )

    def mark_for_deletion(self) -> None:
        self._record(UserGroupEventType.DELETED, {})

    def add_role(self, role_id: Uuid) -> None:
        self._record(UserGroupEventType.ROLE_ADDED, {"roleId": str(role_id)})

    def remove_role(self, role_id: Uuid) -> None:
        self._record(UserGroupEventType.ROLE_REMOVED, {"roleId": str(role_id)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "created_at": self.created_at,
            "last_modified_at": self.last_modified_at,
            "created_by": str(self.created_by) if self.created_by else None,
            "last_modified_by": str(self.last_modified_by) if self.last_modified_by else None,
        }
