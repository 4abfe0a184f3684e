"""Auth persistence models."""

from .role_model import RoleModel
from .user_group_model import UserGroupModel, UserGroupRoleModel, UserGroupUserModel
from .user_model import UserModel, UserPendingDeletionModel

__all__ = [
    "RoleModel",
    "UserGroupModel",
    "UserGroupRoleModel",
    "UserGroupUserModel",
    "UserModel",
    "UserPendingDeletionModel",
]
