"""User administration endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from gatehouse.core.application import AppContext
from gatehouse.core.enums import SortOrder
from gatehouse.modules.auth.application.commands import (
    AddUserToUserGroupCommand,
    DeleteUserCommand,
    RemoveUserFromUserGroupCommand,
    ToggleUserStatusCommand,
    UpdateUserCommand,
)
from gatehouse.modules.auth.application.queries import FindUsersQuery, GetUserQuery
from gatehouse.modules.auth.domain.enums import UserSortField
from gatehouse.presentation.http import (
    get_app_context,
    get_auth_module,
    paginated,
    to_camel_dict,
)

from .schemas import ToggleUserStatusRequest, UpdateUserRequest

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def find_users(
    search_term: str | None = Query(None, alias="searchTerm"),
    user_group_id: str | None = Query(None, alias="userGroupId"),
    page_index: int | None = Query(None, alias="pageIndex", ge=0),
    items_per_page: int | None = Query(None, alias="itemsPerPage", ge=1),
    fields: list[str] | None = Query(None),
    sort_field: UserSortField | None = Query(None, alias="sortField"),
    sort_order: SortOrder | None = Query(None, alias="sortOrder"),
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.find_users.execute(
        FindUsersQuery(
            search_term=search_term,
            user_group_id=user_group_id,
            fields=fields,
            sort_field=sort_field.value if sort_field else None,
            sort_order=sort_order,
            page_index=page_index,
            items_per_page=items_per_page,
        ),
        context,
    )
    return paginated(result, set(fields) if fields else None)


@router.get("/{id}")
async def get_user(
    id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.get_user.execute(GetUserQuery(id=id), context)
    return to_camel_dict(result)


@router.put("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    id: str,
    body: UpdateUserRequest,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.update_user.execute(
        UpdateUserCommand(id=id, display_name=body.display_name, username=body.username),
        context,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{id}/status", status_code=status.HTTP_204_NO_CONTENT)
async def toggle_user_status(
    id: str,
    body: ToggleUserStatusRequest,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.toggle_user_status.execute(
        ToggleUserStatusCommand(id=id, enabled=body.enabled), context
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.delete_user.execute(DeleteUserCommand(id=id), context)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{id}/user-groups/{user_group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_user_to_user_group(
    id: str,
    user_group_id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.add_user_to_user_group.execute(
        AddUserToUserGroupCommand(user_group_id=user_group_id, user_id=id), context
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{id}/user-groups/{user_group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user_from_user_group(
    id: str,
    user_group_id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.remove_user_from_user_group.execute(
        RemoveUserFromUserGroupCommand(user_group_id=user_group_id, user_id=id), context
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
