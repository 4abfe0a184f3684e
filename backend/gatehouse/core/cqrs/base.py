"""CQRS base classes.

Commands change state and queries read it. Each has exactly one handler, built
by the composition root with the collaborators it needs and invoked as
``await handler.execute(message, context)``.

Design Principles:
- Commands and queries are frozen dataclasses
- Handlers are stateless apart from execution statistics
- Authorization is the first step of every ``handle`` implementation
- Typed errors propagate to the transport layer untouched

Architecture:
- Command / Query: Message marker base classes
- CommandHandler / QueryHandler: ``execute`` wraps ``handle`` with logging and stats
- Pagination / PaginatedResult: Paged read results
- PageRequest: Normalized page index and page size
"""

import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Generic, TypeVar

from gatehouse.core.application.context import AppContext
from gatehouse.core.errors import GatehouseError
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)

TCommand = TypeVar("TCommand", bound="Command")
TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")
TItem = TypeVar("TItem")

DEFAULT_PAGE_INDEX = 0
MAX_ITEMS_PER_PAGE = 50

SENSITIVE_FIELDS = frozenset({"password", "id_token"})


# =====================================================================================
# MESSAGES
# =====================================================================================


class Command(ABC):  # noqa: B024
    """
    Base class for commands.

    Subclasses are frozen dataclasses describing an intent to change state.

    Usage Example:
        @dataclass(frozen=True)
        class DeleteUserCommand(Command):
            id: str
    """

    def to_log_dict(self) -> dict[str, Any]:
        """Command fields with secrets removed."""
        data = asdict(self) if is_dataclass(self) else {}
        return {k: v for k, v in data.items() if k not in SENSITIVE_FIELDS}


class Query(ABC):  # noqa: B024
    """Base class for queries."""

    def to_log_dict(self) -> dict[str, Any]:
        return asdict(self) if is_dataclass(self) else {}


# =====================================================================================
# PAGINATION
# =====================================================================================


@dataclass(frozen=True)
class PageRequest:
    """Normalized paging parameters."""

    page_index: int = DEFAULT_PAGE_INDEX
    items_per_page: int = MAX_ITEMS_PER_PAGE

    @classmethod
    def of(
        cls,
        page_index: int | None,
        items_per_page: int | None,
        max_items_per_page: int = MAX_ITEMS_PER_PAGE,
    ) -> "PageRequest":
        """Apply defaults and clamp to ``[1, max_items_per_page]``."""
        index = page_index if page_index is not None and page_index >= 0 else DEFAULT_PAGE_INDEX
        size = items_per_page if items_per_page is not None else max_items_per_page
        size = max(1, min(size, max_items_per_page))
        return cls(page_index=index, items_per_page=size)

    @property
    def offset(self) -> int:
        return self.page_index * self.items_per_page


@dataclass(frozen=True)
class Pagination:
    count: int
    page_index: int


@dataclass(frozen=True)
class PaginatedResult(Generic[TItem]):
    """One page of read models plus the total count."""

    data: list[TItem] = field(default_factory=list)
    pagination: Pagination = field(default_factory=lambda: Pagination(0, 0))


# =====================================================================================
# HANDLERS
# =====================================================================================


class _TrackedHandler:
    """Execution statistics shared by command and query handlers."""

    def __init__(self):
        self._execution_count = 0
        self._error_count = 0
        self._total_execution_time = 0.0

    def _record(self, started: float, failed: bool) -> float:
        elapsed = time.perf_counter() - started
        self._execution_count += 1
        self._total_execution_time += elapsed
        if failed:
            self._error_count += 1
        return elapsed

    def get_performance_stats(self) -> dict[str, Any]:
        return {
            "handler": self.__class__.__name__,
            "execution_count": self._execution_count,
            "error_count": self._error_count,
            "avg_execution_time": self._total_execution_time
            / max(self._execution_count, 1),
        }


class CommandHandler(_TrackedHandler, ABC, Generic[TCommand, TResult]):
    """
    Base command handler.

    Implementations follow a fixed order inside ``handle``: authorize, validate
    input, load aggregates through validator services, mutate, persist, and
    dispatch the drained events.

    Usage Example:
        class DeleteUserCommandHandler(CommandHandler[DeleteUserCommand, None]):
            async def handle(self, command, context) -> None:
                self.authorization_service.require_role(AuthRole.AUTH_MANAGER, context)
                ...
    """

    @abstractmethod
    async def handle(self, command: TCommand, context: AppContext) -> TResult:
        """
        Handle the command and return result.

        Raises:
            GatehouseError: If the command is rejected
        """

    async def execute(
        self, command: TCommand, context: AppContext | None = None
    ) -> TResult:
        """Execute the command with logging and execution statistics."""
        context = context or AppContext.anonymous()
        started = time.perf_counter()
        logger.debug(
            "Executing command",
            command_type=command.__class__.__name__,
            handler=self.__class__.__name__,
        )
        try:
            result = await self.handle(command, context)
        except GatehouseError as e:
            elapsed = self._record(started, failed=True)
            logger.info(
                "Command rejected",
                command_type=command.__class__.__name__,
                code=e.code,
                execution_time=elapsed,
            )
            raise
        except Exception:
            elapsed = self._record(started, failed=True)
            logger.exception(
                "Command failed",
                command_type=command.__class__.__name__,
                execution_time=elapsed,
            )
            raise

        elapsed = self._record(started, failed=False)
        logger.debug(
            "Command executed",
            command_type=command.__class__.__name__,
            execution_time=elapsed,
        )
        return result


class QueryHandler(_TrackedHandler, ABC, Generic[TQuery, TResult]):
    """
    Base query handler.

    Implementations authorize, validate id-shaped filters, then read from a read
    repository.
    """

    @abstractmethod
    async def handle(self, query: TQuery, context: AppContext) -> TResult:
        """Handle the query and return the read result."""

    async def execute(self, query: TQuery, context: AppContext | None = None) -> TResult:
        """Execute the query with logging and execution statistics."""
        context = context or AppContext.anonymous()
        started = time.perf_counter()
        try:
            result = await self.handle(query, context)
        except GatehouseError as e:
            self._record(started, failed=True)
            logger.info(
                "Query rejected", query_type=query.__class__.__name__, code=e.code
            )
            raise
        except Exception:
            self._record(started, failed=True)
            logger.exception("Query failed", query_type=query.__class__.__name__)
            raise

        elapsed = self._record(started, failed=False)
        logger.debug(
            "Query executed",
            query_type=query.__class__.__name__,
            execution_time=elapsed,
        )
        return result


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
