"""User group administration endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from gatehouse.core.application import AppContext
from gatehouse.core.enums import SortOrder
from gatehouse.modules.auth.application.commands import (
    AddRoleToUserGroupCommand,
    CreateUserGroupCommand,
    DeleteUserGroupCommand,
    RemoveRoleFromUserGroupCommand,
    UpdateUserGroupCommand,
)
from gatehouse.modules.auth.application.queries import (
    FindUserGroupsQuery,
    GetUserGroupQuery,
)
from gatehouse.modules.auth.domain.enums import UserGroupSortField
from gatehouse.presentation.http import (
    get_app_context,
    get_auth_module,
    paginated,
    to_camel_dict,
)

from .schemas import AddRoleRequest, CreateUserGroupRequest, UpdateUserGroupRequest

router = APIRouter(prefix="/user-groups", tags=["user-groups"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user_group(
    body: CreateUserGroupRequest,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.create_user_group.execute(
        CreateUserGroupCommand(name=body.name, description=body.description), context
    )
    return to_camel_dict(result)


@router.get("")
async def find_user_groups(
    search_term: str | None = Query(None, alias="searchTerm"),
    page_index: int | None = Query(None, alias="pageIndex", ge=0),
    items_per_page: int | None = Query(None, alias="itemsPerPage", ge=1),
    sort_field: UserGroupSortField | None = Query(None, alias="sortField"),
    sort_order: SortOrder | None = Query(None, alias="sortOrder"),
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.find_user_groups.execute(
        FindUserGroupsQuery(
            search_term=search_term,
            sort_field=sort_field.value if sort_field else None,
            sort_order=sort_order,
            page_index=page_index,
            items_per_page=items_per_page,
        ),
        context,
    )
    return paginated(result)


@router.get("/{id}")
async def get_user_group(
    id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.get_user_group.execute(GetUserGroupQuery(id=id), context)
    return to_camel_dict(result)


@router.put("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user_group(
    id: str,
    body: UpdateUserGroupRequest,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.update_user_group.execute(
        UpdateUserGroupCommand(id=id, name=body.name, description=body.description),
        context,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_group(
    id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.delete_user_group.execute(DeleteUserGroupCommand(id=id), context)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{id}/roles", status_code=status.HTTP_204_NO_CONTENT)
async def add_role_to_user_group(
    id: str,
    body: AddRoleRequest,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.add_role_to_user_group.execute(
        AddRoleToUserGroupCommand(user_group_id=id, role_id=body.role_id), context
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{id}/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_role_from_user_group(
    id: str,
    role_id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    await module.remove_role_from_user_group.execute(
        RemoveRoleFromUserGroupCommand(user_group_id=id, role_id=role_id), context
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
