"""Auth queries and their handlers."""

from .find_roles_query import FindRolesQuery, FindRolesQueryHandler
from .find_user_groups_query import FindUserGroupsQuery, FindUserGroupsQueryHandler
from .find_users_query import FindUsersQuery, FindUsersQueryHandler
from .get_queries import (
    GetProfileQuery,
    GetProfileQueryHandler,
    GetRoleQuery,
    GetRoleQueryHandler,
    GetUserGroupQuery,
    GetUserGroupQueryHandler,
    GetUserQuery,
    GetUserQueryHandler,
)

__all__ = [
    "FindRolesQuery",
    "FindRolesQueryHandler",
    "FindUserGroupsQuery",
    "FindUserGroupsQueryHandler",
    "FindUsersQuery",
    "FindUsersQueryHandler",
    "GetProfileQuery",
    "GetProfileQueryHandler",
    "GetRoleQuery",
    "GetRoleQueryHandler",
    "GetUserGroupQuery",
    "GetUserGroupQueryHandler",
    "GetUserQuery",
    "GetUserQueryHandler",
]
