"""CQRS (Command Query Responsibility Segregation) implementation."""

from gatehouse.core.cqrs.base import (
    DEFAULT_PAGE_INDEX,
    MAX_ITEMS_PER_PAGE,
    Command,
    CommandHandler,
    PageRequest,
    PaginatedResult,
    Pagination,
    Query,
    QueryHandler,
)

__all__ = [
    "DEFAULT_PAGE_INDEX",
    "MAX_ITEMS_PER_PAGE",
    "Command",
    "CommandHandler",
    "PageRequest",
    "PaginatedResult",
    "Pagination",
    "Query",
    "QueryHandler",
]
