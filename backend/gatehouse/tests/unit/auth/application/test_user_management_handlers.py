"""Test cases for profile, user administration and group membership handlers."""

from unittest.mock import AsyncMock, Mock

import pytest

from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.errors import ForbiddenError, UnauthorizedError, ValidationError
from gatehouse.modules.auth.application.commands import (
    AddUserToUserGroupCommand,
    AddUserToUserGroupCommandHandler,
    DeleteAccountCommand,
    DeleteAccountCommandHandler,
    DeleteUserCommand,
    DeleteUserCommandHandler,
    RemoveUserFromUserGroupCommand,
    RemoveUserFromUserGroupCommandHandler,
    ToggleUserStatusCommand,
    ToggleUserStatusCommandHandler,
    UpdateProfileCommand,
    UpdateProfileCommandHandler,
    UpdateUserCommand,
    UpdateUserCommandHandler,
)
from gatehouse.modules.auth.domain.enums import UserEventType, UserStatus
from gatehouse.modules.auth.domain.errors import ExternalAuthenticationError
from gatehouse.modules.auth.domain.services import (
    UserGroupValidatorService,
    UserValidatorService,
)


@pytest.fixture
def user_repository():
    repository = Mock()
    repository.save = AsyncMock()
    repository.find_by_id = AsyncMock(return_value=None)
    repository.username_exists = AsyncMock(return_value=False)
    repository.user_in_group = AsyncMock(return_value=False)
    repository.add_to_group = AsyncMock()
    repository.remove_from_group = AsyncMock()
    return repository


@pytest.fixture
def user_group_repository():
    repository = Mock()
    repository.find_by_id = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def user_validator_service(user_repository) -> UserValidatorService:
    return UserValidatorService(user_repository)


@pytest.fixture
def user_group_validator_service(user_group_repository) -> UserGroupValidatorService:
    return UserGroupValidatorService(user_group_repository)


def dispatched_event_types(event_dispatcher) -> list[str]:
    return [event.event_type for event in event_dispatcher.dispatch.await_args.args[0]]


class TestUpdateProfileCommandHandler:
    """Test updates of the caller's own profile."""

    @pytest.fixture
    def handler(
        self, authorization_service, user_validator_service, user_repository, event_dispatcher
    ):
        return UpdateProfileCommandHandler(
            authorization_service, user_validator_service, user_repository, event_dispatcher
        )

    @pytest.mark.asyncio
    async def test_updates_both_fields(
        self, handler, user_repository, event_dispatcher, user_context, caller_id, make_user
    ):
        # Arrange
        user = make_user(user_id=caller_id, version=3)
        user_repository.find_by_id.return_value = user

        # Act
        await handler.execute(
            UpdateProfileCommand(display_name="Jane D.", username="jane_doe2"), user_context
        )

        # Assert
        assert user.username.value == "jane_doe2"
        assert user.display_name == "Jane D."
        assert user.version == 5
        assert user.last_modified_by == caller_id
        user_repository.username_exists.assert_awaited_once_with(user.username, caller_id)
        user_repository.save.assert_awaited_once_with(user)
        assert dispatched_event_types(event_dispatcher) == [UserEventType.UPDATED.value] * 2

    @pytest.mark.asyncio
    async def test_requires_authentication(self, handler, user_repository, anonymous_context):
        with pytest.raises(UnauthorizedError):
            await handler.execute(UpdateProfileCommand(display_name="Jane"), anonymous_context)

        user_repository.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_updates(self, handler, user_repository, user_context):
        with pytest.raises(ValidationError, match="NO_UPDATES"):
            await handler.execute(UpdateProfileCommand(), user_context)

        user_repository.find_by_id.assert_not_called()
        user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_username_before_lookup(self, handler, user_repository, user_context):
        with pytest.raises(ValidationError, match="FIELD_IS_TOO_SHORT"):
            await handler.execute(UpdateProfileCommand(username="jane"), user_context)

        user_repository.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_disabled_caller_rejected(
        self, handler, user_repository, user_context, caller_id, make_user
    ):
        user_repository.find_by_id.return_value = make_user(
            user_id=caller_id, status=UserStatus.DISABLED
        )

        with pytest.raises(ValidationError, match="USER_MUST_BE_ACTIVE"):
            await handler.execute(UpdateProfileCommand(display_name="Jane"), user_context)

        user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_outdated_version_propagates(
        self, handler, user_repository, event_dispatcher, user_context, caller_id, make_user
    ):
        user_repository.find_by_id.return_value = make_user(user_id=caller_id)
        user_repository.save.side_effect = ValidationError("OUTDATED_VERSION")

        with pytest.raises(ValidationError, match="OUTDATED_VERSION"):
            await handler.execute(UpdateProfileCommand(display_name="Jane"), user_context)

        event_dispatcher.dispatch.assert_not_called()


class TestDeleteAccountCommandHandler:
    """Test self-service account deletion."""

    @pytest.fixture
    def handler(
        self, authorization_service, user_validator_service, user_repository, event_dispatcher
    ):
        return DeleteAccountCommandHandler(
            authorization_service, user_validator_service, user_repository, event_dispatcher
        )

    @pytest.mark.asyncio
    async def test_marks_caller_for_deletion(
        self, handler, user_repository, event_dispatcher, user_context, caller_id, make_user
    ):
        user = make_user(user_id=caller_id)
        user_repository.find_by_id.return_value = user

        await handler.execute(DeleteAccountCommand(), user_context)

        assert user.status is UserStatus.DELETED
        user_repository.save.assert_awaited_once_with(user)
        assert dispatched_event_types(event_dispatcher) == [UserEventType.DELETED.value]

    @pytest.mark.asyncio
    async def test_deleted_caller(self, handler, user_repository, user_context, caller_id, make_user):
        user_repository.find_by_id.return_value = make_user(
            user_id=caller_id, status=UserStatus.DELETED
        )

        with pytest.raises(ValidationError, match="USER_DELETED"):
            await handler.execute(DeleteAccountCommand(), user_context)


class TestUpdateUserCommandHandler:
    """Test administrative user updates."""

    @pytest.fixture
    def handler(
        self, authorization_service, user_validator_service, user_repository, event_dispatcher
    ):
        return UpdateUserCommandHandler(
            authorization_service, user_validator_service, user_repository, event_dispatcher
        )

    @pytest.mark.asyncio
    async def test_manager_updates_disabled_user(
        self, handler, user_repository, manager_context, caller_id, make_user
    ):
        user = make_user(status=UserStatus.DISABLED)
        user_repository.find_by_id.return_value = user

        await handler.execute(
            UpdateUserCommand(id=str(user.id), display_name="Renamed"), manager_context
        )

        assert user.display_name == "Renamed"
        assert user.last_modified_by == caller_id
        user_repository.username_exists.assert_not_called()

    @pytest.mark.asyncio
    async def test_viewer_is_forbidden(self, handler, user_repository, viewer_context):
        with pytest.raises(ForbiddenError):
            await handler.execute(
                UpdateUserCommand(id=str(Uuid.generate()), display_name="x"), viewer_context
            )

        user_repository.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_updates_before_id_check(self, handler, manager_context):
        with pytest.raises(ValidationError, match="NO_UPDATES"):
            await handler.execute(UpdateUserCommand(id="not-a-uuid"), manager_context)

    @pytest.mark.asyncio
    async def test_invalid_id(self, handler, user_repository, manager_context):
        with pytest.raises(ValidationError) as exc_info:
            await handler.execute(
                UpdateUserCommand(id="not-a-uuid", display_name="x"), manager_context
            )

        assert exc_info.value.code == "FIELD_IS_INVALID"
        assert exc_info.value.data["field"] == "id"
        user_repository.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_username_taken_by_someone_else(
        self, handler, user_repository, manager_context, make_user
    ):
        user = make_user()
        user_repository.find_by_id.return_value = user
        user_repository.username_exists.return_value = True

        with pytest.raises(ValidationError, match="USERNAME_ALREADY_TAKEN"):
            await handler.execute(
                UpdateUserCommand(id=str(user.id), username="taken_name"), manager_context
            )

        user_repository.save.assert_not_called()


class TestToggleUserStatusCommandHandler:
    """Test enabling and disabling users."""

    @pytest.fixture
    def handler(
        self,
        authorization_service,
        user_validator_service,
        user_repository,
        external_authentication_service,
        event_dispatcher,
    ):
        return ToggleUserStatusCommandHandler(
            authorization_service,
            user_validator_service,
            user_repository,
            external_authentication_service,
            event_dispatcher,
        )

    @pytest.mark.asyncio
    async def test_disable(
        self,
        handler,
        user_repository,
        external_authentication_service,
        event_dispatcher,
        manager_context,
        make_user,
    ):
        user = make_user()
        user_repository.find_by_id.return_value = user

        await handler.execute(ToggleUserStatusCommand(id=str(user.id), enabled=False), manager_context)

        assert user.status is UserStatus.DISABLED
        external_authentication_service.disable_user.assert_awaited_once_with(user.external_id)
        external_authentication_service.enable_user.assert_not_called()
        assert dispatched_event_types(event_dispatcher) == [UserEventType.DISABLED.value]

    @pytest.mark.asyncio
    async def test_enable(
        self, handler, user_repository, external_authentication_service, manager_context, make_user
    ):
        user = make_user(status=UserStatus.DISABLED)
        user_repository.find_by_id.return_value = user

        await handler.execute(ToggleUserStatusCommand(id=str(user.id), enabled=True), manager_context)

        assert user.is_active
        external_authentication_service.enable_user.assert_awaited_once_with(user.external_id)

    @pytest.mark.asyncio
    async def test_enable_active_user_rejected(
        self, handler, user_repository, external_authentication_service, manager_context, make_user
    ):
        user = make_user()
        user_repository.find_by_id.return_value = user

        with pytest.raises(ValidationError, match="USER_MUST_BE_DISABLED"):
            await handler.execute(
                ToggleUserStatusCommand(id=str(user.id), enabled=True), manager_context
            )

        user_repository.save.assert_not_called()
        external_authentication_service.enable_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_not_called_when_save_fails(
        self, handler, user_repository, external_authentication_service, manager_context, make_user
    ):
        user = make_user()
        user_repository.find_by_id.return_value = user
        user_repository.save.side_effect = ValidationError("OUTDATED_VERSION")

        with pytest.raises(ValidationError):
            await handler.execute(
                ToggleUserStatusCommand(id=str(user.id), enabled=False), manager_context
            )

        external_authentication_service.disable_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_events_dispatched_when_provider_fails(
        self,
        handler,
        user_repository,
        external_authentication_service,
        event_dispatcher,
        manager_context,
        make_user,
    ):
        # Arrange
        user = make_user(status=UserStatus.DISABLED)
        user_repository.find_by_id.return_value = user
        external_authentication_service.enable_user.side_effect = ExternalAuthenticationError(
            message="Provider unavailable"
        )

        # Act
        with pytest.raises(ExternalAuthenticationError):
            await handler.execute(
                ToggleUserStatusCommand(id=str(user.id), enabled=True), manager_context
            )

        # Assert
        user_repository.save.assert_awaited_once_with(user)
        event_dispatcher.dispatch.assert_awaited_once()
        assert dispatched_event_types(event_dispatcher) == [UserEventType.ACTIVATED.value]


class TestDeleteUserCommandHandler:
    """Test administrative deletion."""

    @pytest.fixture
    def handler(
        self, authorization_service, user_validator_service, user_repository, event_dispatcher
    ):
        return DeleteUserCommandHandler(
            authorization_service, user_validator_service, user_repository, event_dispatcher
        )

    @pytest.mark.asyncio
    async def test_delete(self, handler, user_repository, manager_context, make_user):
        user = make_user(status=UserStatus.DISABLED)
        user_repository.find_by_id.return_value = user

        await handler.execute(DeleteUserCommand(id=str(user.id)), manager_context)

        assert user.is_deleted
        user_repository.save.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_already_deleted(self, handler, user_repository, manager_context, make_user):
        user = make_user(status=UserStatus.DELETED)
        user_repository.find_by_id.return_value = user

        with pytest.raises(ValidationError, match="USER_ALREADY_DELETED"):
            await handler.execute(DeleteUserCommand(id=str(user.id)), manager_context)

    @pytest.mark.asyncio
    async def test_unknown_user(self, handler, manager_context):
        with pytest.raises(ValidationError, match="USER_NOT_FOUND"):
            await handler.execute(DeleteUserCommand(id=str(Uuid.generate())), manager_context)


class TestUserGroupMembershipHandlers:
    """Test adding users to and removing users from groups."""

    @pytest.fixture
    def add_handler(
        self,
        authorization_service,
        user_group_validator_service,
        user_validator_service,
        user_repository,
        event_dispatcher,
    ):
        return AddUserToUserGroupCommandHandler(
            authorization_service,
            user_group_validator_service,
            user_validator_service,
            user_repository,
            event_dispatcher,
        )

    @pytest.fixture
    def remove_handler(
        self,
        authorization_service,
        user_group_validator_service,
        user_validator_service,
        user_repository,
        event_dispatcher,
    ):
        return RemoveUserFromUserGroupCommandHandler(
            authorization_service,
            user_group_validator_service,
            user_validator_service,
            user_repository,
            event_dispatcher,
        )

    @pytest.fixture
    def membership(self, user_repository, user_group_repository, make_user, make_user_group):
        user = make_user()
        group = make_user_group()
        user_repository.find_by_id.return_value = user
        user_group_repository.find_by_id.return_value = group
        return user, group

    @pytest.mark.asyncio
    async def test_add_runs_membership_write_in_save_transaction(
        self, add_handler, user_repository, event_dispatcher, manager_context, membership
    ):
        # Arrange
        user, group = membership
        session = Mock()

        # Act
        await add_handler.execute(
            AddUserToUserGroupCommand(user_group_id=str(group.id), user_id=str(user.id)),
            manager_context,
        )

        # Assert
        save_call = user_repository.save.await_args
        assert save_call.args[0] is user
        await save_call.kwargs["in_transaction"](session)
        user_repository.add_to_group.assert_awaited_once_with(user.id, group.id, session)
        assert dispatched_event_types(event_dispatcher) == [
            UserEventType.ADDED_TO_USER_GROUP.value
        ]

    @pytest.mark.asyncio
    async def test_add_existing_member(
        self, add_handler, user_repository, manager_context, membership
    ):
        user, group = membership
        user_repository.user_in_group.return_value = True

        with pytest.raises(ValidationError) as exc_info:
            await add_handler.execute(
                AddUserToUserGroupCommand(user_group_id=str(group.id), user_id=str(user.id)),
                manager_context,
            )

        assert exc_info.value.code == "USER_ALREADY_IN_GROUP"
        user_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_validates_group_id_first(self, add_handler, manager_context):
        with pytest.raises(ValidationError) as exc_info:
            await add_handler.execute(
                AddUserToUserGroupCommand(user_group_id="bad", user_id="bad"), manager_context
            )

        assert exc_info.value.data["field"] == "userGroupId"

    @pytest.mark.asyncio
    async def test_add_unknown_group(self, add_handler, user_repository, manager_context):
        with pytest.raises(ValidationError, match="USER_GROUP_NOT_FOUND"):
            await add_handler.execute(
                AddUserToUserGroupCommand(
                    user_group_id=str(Uuid.generate()), user_id=str(Uuid.generate())
                ),
                manager_context,
            )

        user_repository.find_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove(
        self, remove_handler, user_repository, event_dispatcher, manager_context, membership
    ):
        user, group = membership
        user_repository.user_in_group.return_value = True
        session = Mock()

        await remove_handler.execute(
            RemoveUserFromUserGroupCommand(user_group_id=str(group.id), user_id=str(user.id)),
            manager_context,
        )

        await user_repository.save.await_args.kwargs["in_transaction"](session)
        user_repository.remove_from_group.assert_awaited_once_with(user.id, group.id, session)
        assert dispatched_event_types(event_dispatcher) == [
            UserEventType.REMOVED_FROM_USER_GROUP.value
        ]

    @pytest.mark.asyncio
    async def test_remove_non_member(
        self, remove_handler, user_repository, manager_context, membership
    ):
        user, group = membership

        with pytest.raises(ValidationError, match="USER_NOT_IN_GROUP"):
            await remove_handler.execute(
                RemoveUserFromUserGroupCommand(user_group_id=str(group.id), user_id=str(user.id)),
                manager_context,
            )
