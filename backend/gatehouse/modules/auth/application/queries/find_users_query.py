"""
Find users query implementation.
"""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.cqrs import PageRequest, PaginatedResult, Query, QueryHandler
from gatehouse.core.enums import SortOrder
from gatehouse.core.security import AuthorizationService
from gatehouse.modules.auth.application.common import optional_uuid
from gatehouse.modules.auth.application.read_models import (
    IUserReadRepository,
    UserFilter,
    UserReadModel,
)
from gatehouse.modules.auth.domain.enums import AuthRole


@dataclass(frozen=True)
class FindUsersQuery(Query):
    search_term: str | None = None
    user_group_id: str | None = None
    fields: list[str] | None = None
    sort_field: str | None = None
    sort_order: SortOrder | None = None
    page_index: int | None = None
    items_per_page: int | None = None


class FindUsersQueryHandler(QueryHandler[FindUsersQuery, PaginatedResult[UserReadModel]]):
    def __init__(
        self,
        authorization_service: AuthorizationService,
        user_read_repository: IUserReadRepository,
        max_items_per_page: int = 50,
    ):
        super().__init__()
        self.authorization_service = authorization_service
        self.user_read_repository = user_read_repository
        self.max_items_per_page = max_items_per_page

    async def handle(
        self, query: FindUsersQuery, context: AppContext
    ) -> PaginatedResult[UserReadModel]:
        self.authorization_service.require_one_of_roles(AuthRole.readers(), context)

        user_filter = UserFilter(
            search_term=query.search_term,
            user_group_id=optional_uuid(query.user_group_id, "userGroupId"),
            fields=query.fields,
            sort_field=query.sort_field,
            sort_order=query.sort_order or SortOrder.ASC,
            page=PageRequest.of(
                query.page_index, query.items_per_page, self.max_items_per_page
            ),
        )
        return await self.user_read_repository.find(user_filter)
