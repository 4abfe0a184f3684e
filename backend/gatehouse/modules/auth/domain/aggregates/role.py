"""
Role Aggregate

Read-mostly role identified by a unique code. Roles are seeded at startup and
granted to users through user groups.
"""

from datetime import datetime
from typing import Any

from gatehouse.core.domain.base import AggregateRoot
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError, ValidationErrorCode


class Role(AggregateRoot):
    aggregate_name = "Role"

    CODE_MAX_LENGTH = 100
    NAME_MAX_LENGTH = 255
    DESCRIPTION_MAX_LENGTH = 1000

    def __init__(
        self,
        id: Uuid,  # noqa: A002
        code: str,
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
        self.code = self._check_length("code", code, self.CODE_MAX_LENGTH, required=True)
        self.name = self._check_length("name", name, self.NAME_MAX_LENGTH, required=True)
        self.description = self._check_length(
            "description", description, self.DESCRIPTION_MAX_LENGTH
        )

    @staticmethod
    def _check_length(
        field: str, value: str | None, max_length: int, required: bool = False
    ) -> str | None:
        if required and (value is None or not value.strip()):
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, field)
        if value is not None and len(value) > max_length:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_LONG, field, max_length=max_length
            )
        return value

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "version": self.version,
        }
