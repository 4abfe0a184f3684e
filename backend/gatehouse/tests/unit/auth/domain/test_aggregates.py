"""Tests for the User, UserGroup and Role aggregates."""

import pytest

from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ValidationError
from gatehouse.modules.auth.domain.aggregates import Role, User, UserGroup
from gatehouse.modules.auth.domain.enums import (
    SignInType,
    UserEventType,
    UserGroupEventType,
    UserStatus,
)
from gatehouse.modules.auth.domain.value_objects import Email, Username


class TestUser:
    """Test user lifecycle and events."""

    def test_create_records_registration(self):
        # Arrange
        user_id = Uuid.generate()

        # Act
        user = User.create(
            id=user_id,
            email=Email.create("jane@example.com"),
            sign_in_type=SignInType.EMAIL,
            external_id="firebase-uid-1",
            username=Username.create("jane_doe1"),
        )

        # Assert
        assert user.status is UserStatus.ACTIVE
        assert user.version == 1
        assert user.is_new
        events = user.get_events()
        assert len(events) == 1
        assert events[0].event_type == UserEventType.REGISTERED.value
        assert events[0].data == {"email": "jane@example.com", "username": "jane_doe1"}

    def test_every_change_records_one_event(self, make_user):
        user = make_user(version=4)

        user.set_username(Username.create("jane_doe2"))
        user.set_display_name("Jane D.")

        assert user.version == 6
        assert user.persisted_version == 4
        assert [e.data for e in user.get_events()] == [
            {"field": "username", "value": "jane_doe2"},
            {"field": "displayName", "value": "Jane D."},
        ]

    def test_disable_and_activate(self, make_user):
        user = make_user()

        user.disable()
        assert user.status is UserStatus.DISABLED
        user.activate()

        assert user.is_active
        assert [e.event_type for e in user.get_events()] == [
            UserEventType.DISABLED.value,
            UserEventType.ACTIVATED.value,
        ]

    def test_disable_requires_active(self, make_user):
        user = make_user(status=UserStatus.DISABLED)

        with pytest.raises(ValidationError, match="USER_MUST_BE_ACTIVE"):
            user.disable()

    def test_activate_requires_disabled(self, make_user):
        user = make_user()

        with pytest.raises(ValidationError, match="USER_MUST_BE_DISABLED"):
            user.activate()

    def test_deleted_is_terminal(self, make_user):
        user = make_user()
        user.mark_for_deletion()

        assert user.is_deleted
        with pytest.raises(ValidationError, match="USER_ALREADY_DELETED"):
            user.mark_for_deletion()
        with pytest.raises(ValidationError, match="USER_DELETED"):
            user.set_display_name("Ghost")
        with pytest.raises(ValidationError, match="USER_MUST_BE_DISABLED"):
            user.activate()

    def test_error_names_the_user(self, make_user):
        user = make_user(status=UserStatus.DELETED)

        with pytest.raises(ValidationError) as exc_info:
            user.ensure_active()

        assert exc_info.value.data == {"id": str(user.id)}

    def test_group_membership_events(self, make_user):
        user = make_user()
        group_id = Uuid.generate()

        user.added_to_user_group(group_id)
        user.removed_from_user_group(group_id)

        assert [e.data for e in user.get_events()] == [
            {"userGroupId": str(group_id)},
            {"userGroupId": str(group_id)},
        ]


class TestUserGroup:
    """Test user group invariants."""

    def test_create(self, caller_id):
        group = UserGroup.create(
            id=Uuid.generate(), name="  Support  ", description=None, created_by=caller_id
        )

        assert group.name == "Support"
        assert group.created_by == caller_id
        assert group.last_modified_by == caller_id
        event = group.get_events()[0]
        assert event.event_type == UserGroupEventType.CREATED.value
        assert event.data == {"name": "Support", "description": None}

    def test_create_requires_creator(self):
        with pytest.raises(ValidationError) as exc_info:
            UserGroup.create(id=Uuid.generate(), name="Support", description=None, created_by=None)

        assert exc_info.value.data == {"field": "createdBy"}

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_name_required(self, caller_id, name):
        with pytest.raises(ValidationError, match="FIELD_IS_REQUIRED"):
            UserGroup.create(id=Uuid.generate(), name=name, description=None, created_by=caller_id)

    def test_length_limits(self, make_user_group):
        group = make_user_group()

        with pytest.raises(ValidationError, match="FIELD_IS_TOO_LONG"):
            group.set_name("n" * 256)
        with pytest.raises(ValidationError, match="FIELD_IS_TOO_LONG"):
            group.set_description("d" * 1001)
        assert not group.has_events()

    def test_role_grants_and_deletion(self, make_user_group):
        group = make_user_group(version=2)
        role_id = Uuid.generate()

        group.add_role(role_id)
        group.remove_role(role_id)
        group.mark_for_deletion()

        assert group.version == 5
        assert [e.event_type for e in group.get_events()] == [
            UserGroupEventType.ROLE_ADDED.value,
            UserGroupEventType.ROLE_REMOVED.value,
            UserGroupEventType.DELETED.value,
        ]
        assert group.get_events()[0].data == {"roleId": str(role_id)}


class TestRole:
    """Test role field checks."""

    def test_valid(self):
        role = Role(id=Uuid.generate(), code="AUTH_VIEWER", name="Auth viewer")

        assert role.to_dict()["code"] == "AUTH_VIEWER"
        assert role.version == 0

    @pytest.mark.parametrize(
        ("code", "name", "expected"),
        [
            ("", "Auth viewer", "FIELD_IS_REQUIRED"),
            ("AUTH_VIEWER", None, "FIELD_IS_REQUIRED"),
            ("C" * 101, "Auth viewer", "FIELD_IS_TOO_LONG"),
            ("AUTH_VIEWER", "N" * 256, "FIELD_IS_TOO_LONG"),
        ],
    )
    def test_invalid(self, code, name, expected):
        with pytest.raises(ValidationError, match=expected):
            Role(id=Uuid.generate(), code=code, name=name)
