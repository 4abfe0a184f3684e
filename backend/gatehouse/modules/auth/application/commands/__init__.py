"""Auth commands and their handlers."""

from .add_role_to_user_group_command import (
    AddRoleToUserGroupCommand,
    AddRoleToUserGroupCommandHandler,
)
from .add_user_to_user_group_command import (
    AddUserToUserGroupCommand,
    AddUserToUserGroupCommandHandler,
)
from .create_user_group_command import CreateUserGroupCommand, CreateUserGroupCommandHandler
from .delete_account_command import DeleteAccountCommand, DeleteAccountCommandHandler
from .delete_user_command import DeleteUserCommand, DeleteUserCommandHandler
from .delete_user_group_command import DeleteUserGroupCommand, DeleteUserGroupCommandHandler
from .register_command import (
    RegisterCommand,
    RegisterCommandHandler,
    RegisterServiceDependencies,
)
from .remove_role_from_user_group_command import (
    RemoveRoleFromUserGroupCommand,
    RemoveRoleFromUserGroupCommandHandler,
)
from .remove_user_from_user_group_command import (
    RemoveUserFromUserGroupCommand,
    RemoveUserFromUserGroupCommandHandler,
)
from .request_access_token_command import (
    RequestAccessTokenCommand,
    RequestAccessTokenCommandHandler,
)
from .sign_in_command import SignInCommand, SignInCommandHandler
from .toggle_user_status_command import (
    ToggleUserStatusCommand,
    ToggleUserStatusCommandHandler,
)
from .update_profile_command import UpdateProfileCommand, UpdateProfileCommandHandler
from .update_user_command import UpdateUserCommand, UpdateUserCommandHandler
from .update_user_group_command import UpdateUserGroupCommand, UpdateUserGroupCommandHandler

__all__ = [
    "AddRoleToUserGroupCommand",
    "AddRoleToUserGroupCommandHandler",
    "AddUserToUserGroupCommand",
    "AddUserToUserGroupCommandHandler",
    "CreateUserGroupCommand",
    "CreateUserGroupCommandHandler",
    "DeleteAccountCommand",
    "DeleteAccountCommandHandler",
    "DeleteUserCommand",
    "DeleteUserCommandHandler",
    "DeleteUserGroupCommand",
    "DeleteUserGroupCommandHandler",
    "RegisterCommand",
    "RegisterCommandHandler",
    "RegisterServiceDependencies",
    "RemoveRoleFromUserGroupCommand",
    "RemoveRoleFromUserGroupCommandHandler",
    "RemoveUserFromUserGroupCommand",
    "RemoveUserFromUserGroupCommandHandler",
    "RequestAccessTokenCommand",
    "RequestAccessTokenCommandHandler",
    "SignInCommand",
    "SignInCommandHandler",
    "ToggleUserStatusCommand",
    "ToggleUserStatusCommandHandler",
    "UpdateProfileCommand",
    "UpdateProfileCommandHandler",
    "UpdateUserCommand",
    "UpdateUserCommandHandler",
    "UpdateUserGroupCommand",
    "UpdateUserGroupCommandHandler",
]
