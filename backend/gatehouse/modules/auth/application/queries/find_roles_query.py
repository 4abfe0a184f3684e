"""
Find roles query implementation.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import PageRequest, PaginatedResult, Query, QueryHandler
from gatehouse.core.enums import SortOrder
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import optional_uuid
from gatehouse.modules.auth.application.read_models import (
    IRoleReadRepository,
    RoleFilter,
    RoleReadModel,
)
from gatehouse.modules.auth.domain.enums import AuthRole


@dataclass(frozen=True)
class FindRolesQuery(Query):
    search_term: str | None = None
    user_group_id: str | None = None
    sort_field: str | None = None
    sort_order: SortOrder | None = None
    page_index: int | None = None
    items_per_page: int | None = None


class FindRolesQueryHandler(QueryHandler[FindRolesQuery, PaginatedResult[RoleReadModel]]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        role_read_repository: IRoleReadRepository,
        max_items_per_page: int = 50,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.role_read_repository = role_read_repository
        self.max_items_per_page = max_items_per_page

    async def handle(
        self, query: FindRolesQuery, context: AppContext
    ) -> PaginatedResult[RoleReadModel]:
        """
        Raises:
            ValidationError: FIELD_IS_INVALID for a malformed ``user_group_id``
        """
        self.authorization_service.require_one_of_roles(AuthRole.readers(), context)

        role_filter = RoleFilter(
            search_term=query.search_term,
            user_group_id=optional_uuid(query.user_group_id, "userGroupId"),
            sort_field=query.sort_field,
            sort_order=query.sort_order or SortOrder.ASC,
            page=PageRequest.of(
                query.page_index, query.items_per_page, self.max_items_per_page
            ),
        )
        return await self.role_read_repository.find(role_filter)
