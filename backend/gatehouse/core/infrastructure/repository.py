"""SQL repository base classes.

Write repositories persist aggregates with an optimistic version check; read
repositories page through read-model rows.

Design Principles:
- One transaction per ``save``, shared with an optional callback
- A stale version is reported as OUTDATED_VERSION, never silently ignored
- Unique-constraint violations surface as validation errors with a domain code
- Aggregates are marked persisted only after the transaction commits

Architecture:
- UniqueConstraint: Maps a storage column to a domain error code
- SQLAggregateRepository: Versioned insert/update for aggregate roots
- SQLReadRepository: Counting, sorting and paging helpers for read models
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from gatehouse.core.cqrs.base import PageRequest
from gatehouse.core.database import DatabaseManager
from gatehouse.core.domain.base import AggregateRoot
from gatehouse.core.enums import SortOrder
from gatehouse.core.errors import (
    InfrastructureError,
    ValidationError,
    ValidationErrorCode,
)
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)

TAggregate = TypeVar("TAggregate", bound=AggregateRoot)
TModel = TypeVar("TModel", bound=SQLModel)

InTransaction = Callable[[AsyncSession], Awaitable[None]]


class RepositoryError(InfrastructureError):
    """Unexpected storage failure."""

    default_code = "REPOSITORY_ERROR"


@dataclass(frozen=True)
class UniqueConstraint:
    """A unique column and the validation error reported when it is violated."""

    table: str
    column: str
    code: str | Enum
    field: str

    def matches(self, message: str) -> bool:
        # sqlite reports "table.column", postgres the constraint or index name
        return (
            f"{self.table}.{self.column}" in message
            or f"{self.table}_{self.column}" in message
        )


# =====================================================================================
# WRITE SIDE
# =====================================================================================


class SQLAggregateRepository(ABC, Generic[TAggregate, TModel]):
    """
    Base repository for versioned aggregates.

    Subclasses provide the model class, the aggregate/model mapping and the
    unique constraints they want translated.

    Usage Example:
        class SQLUserGroupRepository(SQLAggregateRepository[UserGroup, UserGroupModel]):
            model_class = UserGroupModel
            unique_constraints = (
                UniqueConstraint("user_groups", "name",
                                 AuthErrorCode.USER_GROUP_NAME_ALREADY_TAKEN, "name"),
            )
    """

    model_class: ClassVar[type[SQLModel]]
    unique_constraints: ClassVar[Sequence[UniqueConstraint]] = ()

    def __init__(self, database: DatabaseManager):
        self.database = database

    @abstractmethod
    def to_model(self, aggregate: TAggregate) -> TModel:
        """Build a new row for ``aggregate``."""

    @abstractmethod
    def to_domain(self, model: TModel) -> TAggregate:
        """Rebuild the aggregate from its row."""

    @abstractmethod
    def update_values(self, aggregate: TAggregate) -> dict[str, Any]:
        """Column values written by a versioned update, excluding ``version``."""

    async def _after_write(self, session: AsyncSession, aggregate: TAggregate) -> None:
        """Hook running in the save transaction after the row is written."""

    async def save(
        self, aggregate: TAggregate, in_transaction: InTransaction | None = None
    ) -> None:
        """
        Insert or version-checked update of ``aggregate`` in one transaction.

        Args:
            aggregate: Aggregate to persist
            in_transaction: Optional callback run inside the same transaction

        Raises:
            ValidationError: OUTDATED_VERSION on a concurrent modification, or the
                domain code of a violated unique constraint
        """
        try:
            async with self.database.transaction() as session:
                if aggregate.is_new:
                    session.add(self.to_model(aggregate))
                    await session.flush()
                else:
                    await self._update_versioned(session, aggregate)

                await self._after_write(session, aggregate)
                if in_transaction is not None:
                    await in_transaction(session)
        except IntegrityError as e:
            raise self._translate_integrity_error(e) from e

        aggregate.mark_persisted()
        logger.debug(
            "Aggregate saved",
            aggregate=aggregate.aggregate_name,
            aggregate_id=str(aggregate.id),
            version=aggregate.version,
        )

    async def _update_versioned(self, session: AsyncSession, aggregate: TAggregate) -> None:
        model = self.model_class
        stmt = (
            update(model)
            .where(
                model.id == str(aggregate.id),
                model.version == aggregate.persisted_version,
            )
            .values(**self.update_values(aggregate), version=aggregate.version)
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            raise self._outdated_version(aggregate)

    async def _delete_versioned(self, session: AsyncSession, aggregate: TAggregate) -> None:
        """Delete the aggregate row only while its stored version is unchanged."""
        model = self.model_class
        stmt = delete(model).where(
            model.id == str(aggregate.id),
            model.version == aggregate.persisted_version,
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            raise self._outdated_version(aggregate)

    def _outdated_version(self, aggregate: TAggregate) -> ValidationError:
        logger.info(
            "Outdated aggregate version",
            aggregate=aggregate.aggregate_name,
            aggregate_id=str(aggregate.id),
            expected_version=aggregate.persisted_version,
        )
        return ValidationError(
            ValidationErrorCode.OUTDATED_VERSION,
            {
                "id": str(aggregate.id),
                "version": aggregate.persisted_version,
            },
        )

    def _translate_integrity_error(self, error: IntegrityError) -> Exception:
        message = str(error.orig) if error.orig is not None else str(error)
        for constraint in self.unique_constraints:
            if constraint.matches(message):
                return ValidationError.for_field(constraint.code, constraint.field)
        logger.exception("Unmapped integrity error", error=message)
        return RepositoryError(message="Integrity constraint violated", cause=error)

    async def get_model(self, session: AsyncSession, aggregate_id: str) -> TModel | None:
        return await session.get(self.model_class, aggregate_id)

    async def find_model_by_id(self, aggregate_id: str) -> TModel | None:
        try:
            async with self.database.session() as session:
                return await self.get_model(session, aggregate_id)
        except SQLAlchemyError as e:
            raise RepositoryError(message="Failed to load aggregate", cause=e) from e


# =====================================================================================
# READ SIDE
# =====================================================================================


class SQLReadRepository:
    """
    Shared paging for read repositories.

    ``sort_columns`` maps the public sort field names to model columns; the
    first entry is the default.
    """

    sort_columns: ClassVar[dict[str, Any]] = {}

    def __init__(self, database: DatabaseManager, max_items_per_page: int = 50):
        self.database = database
        self.max_items_per_page = max_items_per_page

    def _sort_column(self, sort_field: str | None) -> Any:
        if sort_field and sort_field in self.sort_columns:
            return self.sort_columns[sort_field]
        return next(iter(self.sort_columns.values()))

    async def _paginate(
        self,
        session: AsyncSession,
        stmt: Any,
        page: PageRequest,
        sort_field: str | None = None,
        sort_order: SortOrder | None = None,
    ) -> tuple[list[Any], int]:
        """Run ``stmt`` for one page and return ``(rows, total_count)``."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        count = (await session.execute(count_stmt)).scalar_one()

        column = self._sort_column(sort_field)
        ordering = column.desc() if sort_order == SortOrder.DESC else column.asc()
        page_stmt = stmt.order_by(ordering).offset(page.offset).limit(page.items_per_page)
        rows = (await session.execute(page_stmt)).scalars().all()
        return list(rows), count


__all__ = [
    "InTransaction",
    "RepositoryError",
    "SQLAggregateRepository",
    "SQLReadRepository",
    "UniqueConstraint",
]
