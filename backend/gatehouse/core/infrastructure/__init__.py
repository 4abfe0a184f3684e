"""Infrastructure building blocks shared by the modules."""

from gatehouse.core.infrastructure.repository import (
    InTransaction,
    RepositoryError,
    SQLAggregateRepository,
    SQLReadRepository,
    UniqueConstraint,
)

__all__ = [
    "InTransaction",
    "RepositoryError",
    "SQLAggregateRepository",
    "SQLReadRepository",
    "UniqueConstraint",
]
