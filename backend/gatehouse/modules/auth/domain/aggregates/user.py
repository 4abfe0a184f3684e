"""
User Aggregate Root

Registered account linked to an identity provider account through
``external_id``. Status moves between ACTIVE and DISABLED and ends in DELETED,
from which it never leaves.
"""

from datetime import datetime
from typing import Any

from gatehouse.core.domain.base import AggregateRoot
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError
from gatehouse.modules.auth.domain.enums import SignInType, UserEventType, UserStatus
from gatehouse.modules.auth.domain.errors import AuthErrorCode
from gatehouse.modules.auth.domain.value_objects import Email, Username


class User(AggregateRoot):
    """User aggregate root."""

    aggregate_name = "User"

    def __init__(
        self,
        id: Uuid,  # noqa: A002
        email: Email,
        sign_in_type: SignInType,
        external_id: str,
        status: UserStatus = UserStatus.ACTIVE,
        username: Username | None = None,
        display_name: str | None = None,
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
        self.email = email
        self.sign_in_type = sign_in_type
        self.external_id = external_id
        self.status = status
        self.username = username
        self.display_name = display_name

    @classmethod
    def create(
        cls,
        id: Uuid,  # noqa: A002
        email: Email,
        sign_in_type: SignInType,
        external_id: str,
        username: Username | None = None,
        display_name: str | None = None,
        created_by: Uuid | None = None,
    ) -> "User":
        """Register a new active user and record REGISTERED."""
        user = cls(
            id=id,
            email=email,
            sign_in_type=sign_in_type,
            external_id=external_id,
            status=UserStatus.ACTIVE,
            username=username,
            display_name=display_name,
            created_by=created_by,
        )
        user._record(
            UserEventType.REGISTERED,
            {
                "email": email.value,
                "username": username.value if username else None,
            },
        )
        return user

    # State checks

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self.status == UserStatus.DELETED

    def ensure_not_deleted(self) -> None:
        if self.is_deleted:
            raise ValidationError(AuthErrorCode.USER_DELETED, {"id": str(self.id)})

    def ensure_active(self) -> None:
        if not self.is_active:
            raise ValidationError(AuthErrorCode.USER_MUST_BE_ACTIVE, {"id": str(self.id)})

    def ensure_disabled(self) -> None:
        if self.status != UserStatus.DISABLED:
            raise ValidationError(
                AuthErrorCode.USER_MUST_BE_DISABLED, {"id": str(self.id)}
            )

    # Mutations

    def set_username(self, username: Username | None) -> None:
        self.ensure_not_deleted()
        self.username = username
        self._record(
            UserEventType.UPDATED,
            {"field": "username", "value": username.value if username else None},
        )

    def set_display_name(self, display_name: str | None) -> None:
        self.ensure_not_deleted()
        self.display_name = display_name
        self._record(UserEventType.UPDATED, {"field": "displayName", "value": display_name})

    def disable(self) -> None:
        self.ensure_active()
        self.status = UserStatus.DISABLED
        self._record(UserEventType.DISABLED, {})

    def activate(self) -> None:
        self.ensure_disabled()
        self.status = UserStatus.ACTIVE
        self._record(UserEventType.ACTIVATED, {})

    def mark_for_deletion(self) -> None:
        if self.is_deleted:
            raise ValidationError(AuthErrorCode.USER_ALREADY_DELETED, {"id": str(self.id)})
        self.status = UserStatus.DELETED
        self._record(UserEventType.DELETED, {})

    def added_to_user_group(self, user_group_id: Uuid) -> None:
        self._record(UserEventType.ADDED_TO_USER_GROUP, {"userGroupId": str(user_group_id)})

    def removed_from_user_group(self, user_group_id: Uuid) -> None:
        self._record(
            UserEventType.REMOVED_FROM_USER_GROUP, {"userGroupId": str(user_group_id)}
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "email": self.email.value,
            "sign_in_type": self.sign_in_type.value,
            "external_id": self.external_id,
            "username": self.username.value if self.username else None,
            "display_name": self.display_name,
            "status": self.status.value,
            "version": self.version,
            "created_at": self.created_at,
            "last_modified_at": self.last_modified_at,
            "created_by": str(self.created_by) if self.created_by else None,
            "last_modified_by": str(self.last_modified_by) if self.last_modified_by else None,
        }
