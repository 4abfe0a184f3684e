"""
Auth GraphQL Operations

Resolvers build the same commands and queries as the REST routes and run them
through the handlers of the ``AuthModule`` found in the request context.
"""

import strawberry
from strawberry.types import Info

from gatehouse.modules.auth.application.commands import (
    AddRoleToUserGroupCommand,
    AddUserToUserGroupCommand,
    CreateUserGroupCommand,
    DeleteAccountCommand,
    DeleteUserCommand,
    DeleteUserGroupCommand,
    RegisterCommand,
    RemoveRoleFromUserGroupCommand,
    RemoveUserFromUserGroupCommand,
    RequestAccessTokenCommand,
    SignInCommand,
    ToggleUserStatusCommand,
    UpdateProfileCommand,
    UpdateUserCommand,
    UpdateUserGroupCommand,
)
from gatehouse.modules.auth.application.queries import (
    FindRolesQuery,
    FindUserGroupsQuery,
    FindUsersQuery,
    GetProfileQuery,
    GetRoleQuery,
    GetUserGroupQuery,
    GetUserQuery,
)

from .types import (
    AccessTokenPayload,
    CreateUserGroupInput,
    IdPayload,
    PageInput,
    Pagination,
    RegisterInput,
    RolePage,
    RoleType,
    SignInInput,
    SignInPayload,
    UpdateProfileInput,
    UpdateUserGroupInput,
    UpdateUserInput,
    UserGroupPage,
    UserGroupType,
    UserPage,
    UserType,
)


def _module(info: Info):
    return info.context["auth_module"]


def _context(info: Info):
    return info.context["app_context"]


def _page_args(page: PageInput | None) -> dict:
    if page is None:
        return {}
    return {
        "page_index": page.page_index,
        "items_per_page": page.items_per_page,
        "sort_field": page.sort_field,
        "sort_order": page.sort_order,
    }


@strawberry.type
class AuthQueries:
    @strawberry.field
    async def me(self, info: Info) -> UserType:
        result = await _module(info).get_profile.execute(GetProfileQuery(), _context(info))
        return UserType.from_read_model(result)

    @strawberry.field
    async def users(
        self,
        info: Info,
        search_term: str | None = None,
        user_group_id: strawberry.ID | None = None,
        page: PageInput | None = None,
    ) -> UserPage:
        result = await _module(info).find_users.execute(
            FindUsersQuery(
                search_term=search_term,
                user_group_id=user_group_id,
                **_page_args(page),
            ),
            _context(info),
        )
        return UserPage(
            data=[UserType.from_read_model(item) for item in result.data],
            pagination=Pagination.from_result(result),
        )

    @strawberry.field
    async def user(self, info: Info, id: strawberry.ID) -> UserType:
        result = await _module(info).get_user.execute(GetUserQuery(id=id), _context(info))
        return UserType.from_read_model(result)

    @strawberry.field
    async def user_groups(
        self,
        info: Info,
        search_term: str | None = None,
        page: PageInput | None = None,
    ) -> UserGroupPage:
        result = await _module(info).find_user_groups.execute(
            FindUserGroupsQuery(search_term=search_term, **_page_args(page)),
            _context(info),
        )
        return UserGroupPage(
            data=[UserGroupType.from_read_model(item) for item in result.data],
            pagination=Pagination.from_result(result),
        )

    @strawberry.field
    async def user_group(self, info: Info, id: strawberry.ID) -> UserGroupType:
        result = await _module(info).get_user_group.execute(
            GetUserGroupQuery(id=id), _context(info)
        )
        return UserGroupType.from_read_model(result)

    @strawberry.field
    async def roles(
        self,
        info: Info,
        search_term: str | None = None,
        user_group_id: strawberry.ID | None = None,
        page: PageInput | None = None,
    ) -> RolePage:
        result = await _module(info).find_roles.execute(
            FindRolesQuery(
                search_term=search_term,
                user_group_id=user_group_id,
                **_page_args(page),
            ),
            _context(info),
        )
        return RolePage(
            data=[RoleType.from_read_model(item) for item in result.data],
            pagination=Pagination.from_result(result),
        )

    @strawberry.field
    async def role(self, info: Info, id: strawberry.ID) -> RoleType:
        result = await _module(info).get_role.execute(GetRoleQuery(id=id), _context(info))
        return RoleType.from_read_model(result)


@strawberry.type
class AuthMutations:
    # Account

    @strawberry.mutation
    async def register(self, info: Info, input: RegisterInput) -> SignInPayload:
        result = await _module(info).register.execute(
            RegisterCommand(
                email=input.email,
                password=input.password,
                username=input.username,
                display_name=input.display_name,
            )
        )
        return SignInPayload.from_result(result)

    @strawberry.mutation
    async def sign_in(self, info: Info, input: SignInInput) -> SignInPayload:
        result = await _module(info).sign_in.execute(
            SignInCommand(email_or_username=input.email_or_username, password=input.password)
        )
        return SignInPayload.from_result(result)

    @strawberry.mutation
    async def request_access_token(self, info: Info, id_token: str) -> AccessTokenPayload:
        result = await _module(info).request_access_token.execute(
            RequestAccessTokenCommand(id_token=id_token)
        )
        return AccessTokenPayload.from_result(result)

    @strawberry.mutation
    async def update_profile(self, info: Info, input: UpdateProfileInput) -> bool:
        await _module(info).update_profile.execute(
            UpdateProfileCommand(display_name=input.display_name, username=input.username),
            _context(info),
        )
        return True

    @strawberry.mutation
    async def delete_account(self, info: Info) -> bool:
        await _module(info).delete_account.execute(DeleteAccountCommand(), _context(info))
        return True

    # Users

    @strawberry.mutation
    async def update_user(self, info: Info, id: strawberry.ID, input: UpdateUserInput) -> bool:
        await _module(info).update_user.execute(
            UpdateUserCommand(id=id, display_name=input.display_name, username=input.username),
            _context(info),
        )
        return True

    @strawberry.mutation
    async def toggle_user_status(self, info: Info, id: strawberry.ID, enabled: bool) -> bool:
        await _module(info).toggle_user_status.execute(
            ToggleUserStatusCommand(id=id, enabled=enabled), _context(info)
        )
        return True

    @strawberry.mutation
    async def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        await _module(info).delete_user.execute(DeleteUserCommand(id=id), _context(info))
        return True

    @strawberry.mutation
    async def add_user_to_user_group(
        self, info: Info, user_id: strawberry.ID, user_group_id: strawberry.ID
    ) -> bool:
        await _module(info).add_user_to_user_group.execute(
            AddUserToUserGroupCommand(user_group_id=user_group_id, user_id=user_id),
            _context(info),
        )
        return True

    @strawberry.mutation
    async def remove_user_from_user_group(
        self, info: Info, user_id: strawberry.ID, user_group_id: strawberry.ID
    ) -> bool:
        await _module(info).remove_user_from_user_group.execute(
            RemoveUserFromUserGroupCommand(user_group_id=user_group_id, user_id=user_id),
            _context(info),
        )
        return True

    # User groups

    @strawberry.mutation
    async def create_user_group(self, info: Info, input: CreateUserGroupInput) -> IdPayload:
        result = await _module(info).create_user_group.execute(
            CreateUserGroupCommand(name=input.name, description=input.description),
            _context(info),
        )
        return IdPayload.from_result(result)

    @strawberry.mutation
    async def update_user_group(
        self, info: Info, id: strawberry.ID, input: UpdateUserGroupInput
    ) -> bool:
        await _module(info).update_user_group.execute(
            UpdateUserGroupCommand(id=id, name=input.name, description=input.description),
            _context(info),
        )
        return True

    @strawberry.mutation
    async def delete_user_group(self, info: Info, id: strawberry.ID) -> bool:
        await _module(info).delete_user_group.execute(
            DeleteUserGroupCommand(id=id), _context(info)
        )
        return True

    @strawberry.mutation
    async def add_role_to_user_group(
        self, info: Info, user_group_id: strawberry.ID, role_id: strawberry.ID
    ) -> bool:
        await _module(info).add_role_to_user_group.execute(
            AddRoleToUserGroupCommand(user_group_id=user_group_id, role_id=role_id),
            _context(info),
        )
        return True

    @strawberry.mutation
    async def remove_role_from_user_group(
        self, info: Info, user_group_id: strawberry.ID, role_id: strawberry.ID
    ) -> bool:
        await _module(info).remove_role_from_user_group.execute(
            RemoveRoleFromUserGroupCommand(user_group_id=user_group_id, role_id=role_id),
            _context(info),
        )
        return True
