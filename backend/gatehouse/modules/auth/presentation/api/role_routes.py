"""Read-only role endpoints."""

from fastapi import APIRouter, Depends, Query

from gatehouse.core.application import AppContext
from gatehouse.core.enums import SortOrder
from gatehouse.modules.auth.application.queries import FindRolesQuery, GetRoleQuery
from gatehouse.modules.auth.domain.enums import RoleSortField
from gatehouse.presentation.http import (
    get_app_context,
    get_auth_module,
    paginated,
    to_camel_dict,
)

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("")
async def find_roles(
    search_term: str | None = Query(None, alias="searchTerm"),
    user_group_id: str | None = Query(None, alias="userGroupId"),
    page_index: int | None = Query(None, alias="pageIndex", ge=0),
    items_per_page: int | None = Query(None, alias="itemsPerPage", ge=1),
    sort_field: RoleSortField | None = Query(None, alias="sortField"),
    sort_order: SortOrder | None = Query(None, alias="sortOrder"),
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.find_roles.execute(
        FindRolesQuery(
            search_term=search_term,
            user_group_id=user_group_id,
            sort_field=sort_field.value if sort_field else None,
            sort_order=sort_order,
            page_index=page_index,
            items_per_page=items_per_page,
        ),
        context,
    )
    return paginated(result)


@router.get("/{id}")
async def get_role(
    id: str,
    context: AppContext = Depends(get_app_context),
    module=Depends(get_auth_module),
):
    result = await module.get_role.execute(GetRoleQuery(id=id), context)
    return to_camel_dict(result)
