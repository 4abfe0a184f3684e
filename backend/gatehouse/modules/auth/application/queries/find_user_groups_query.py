"""
Find user groups query implementation.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import PageRequest, PaginatedResult, Query, QueryHandler
from gatehouse.core.enums import SortOrder
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.read_models import (
    IUserGroupReadRepository,
    UserGroupFilter,
    UserGroupReadModel,
)
from gatehouse.modules.auth.domain.enums import AuthRole


@dataclass(frozen=True)
class FindUserGroupsQuery(Query):
    search_term: str | None = None
    sort_field: str | None = None
    sort_order: SortOrder | None = None
    page_index: int | None = None
    items_per_page: int | None = None


class FindUserGroupsQueryHandler(
    QueryHandler[FindUserGroupsQuery, PaginatedResult[UserGroupReadModel]]
):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_group_read_repository: IUserGroupReadRepository,
        max_items_per_page: int = 50,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_group_read_repository = user_group_read_repository
        self.max_items_per_page = max_items_per_page

    async def handle(
        self, query: FindUserGroupsQuery, context: AppContext
    ) -> PaginatedResult[UserGroupReadModel]:
        self.authorization_service.require_one_of_roles(AuthRole.readers(), context)

        return await self.user_group_read_repository.find(
            UserGroupFilter(
                search_term=query.search_term,
                sort_field=query.sort_field,
                sort_order=query.sort_order or SortOrder.ASC,
                page=PageRequest.of(
                    query.page_index, query.items_per_page, self.max_items_per_page
                ),
            )
        )
