"""Domain primitives following pure Python, framework-agnostic principles.

This module provides the foundational domain modeling primitives for the
Gatehouse backend. Nothing here depends on the web framework or the ORM.

Design Principles:
- Immutable value objects validated on construction
- Aggregates own their invariants, version counter and pending events
- Every recorded state change bumps the version by exactly one
- Events are drained by the caller after a successful save

Architecture:
- ValueObject: Immutable objects representing domain concepts
- ValueObjectResult: Non-raising construction result (value or error)
- DomainEvent: Immutable record of a state change
- Entity: Objects with identity and audit timestamps
- AggregateRoot: Entities that manage domain events and versioning
- DomainService: Stateless domain logic coordinators
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from gatehouse.core.errors import ValidationError

if TYPE_CHECKING:
    from gatehouse.core.domain.value_objects import Uuid

VO = TypeVar("VO", bound="ValueObject")


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from storage."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# =====================================================================================
# VALUE OBJECT BASE CLASS
# =====================================================================================


class ValueObject(ABC):
    """
    Base value object.

    Value objects are immutable and compare equal when their public attributes
    are equal. Subclasses assign their attributes in ``__init__`` and then call
    ``self._freeze()``.

    Usage Example:
        class Code(ValueObject):
            def __init__(self, value: str):
                self.value = value.upper()
                self._freeze()
    """

    _frozen = False

    def _freeze(self) -> None:
        """Mark the object as frozen (immutable)."""
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise AttributeError(f"Cannot modify immutable {self.__class__.__name__}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if self._frozen:
            raise AttributeError(
                f"Cannot delete attribute from immutable {self.__class__.__name__}"
            )
        super().__delattr__(name)

    def _public_attrs(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self._public_attrs() == other._public_attrs()

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, tuple(sorted(self._public_attrs().items()))))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self._public_attrs().items())
        return f"{self.__class__.__name__}({attrs})"


@dataclass(frozen=True)
class ValueObjectResult(Generic[VO]):
    """Outcome of a non-raising value object construction."""

    value: VO | None = None
    error: ValidationError | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None


# =====================================================================================
# DOMAIN EVENT
# =====================================================================================


@dataclass(frozen=True)
class DomainEvent:
    """
    Immutable record of a state change on an aggregate.

    ``data`` is a free-form payload whose keys are chosen by the aggregate
    method that recorded the event.
    """

    id: "Uuid"
    aggregate_id: "Uuid"
    aggregate_name: str
    event_type: str
    data: dict[str, Any] = field(default_factory=dict, hash=False)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "aggregate_id": str(self.aggregate_id),
            "aggregate_name": self.aggregate_name,
            "event_type": self.event_type,
            "data": dict(self.data),
            "created_at": self.created_at.isoformat(),
        }


# =====================================================================================
# ENTITY BASE CLASS
# =====================================================================================


class Entity(ABC):
    """
    Base entity with identity and audit timestamps.

    Entities are equal when they are of the same class and share an id.
    """

    def __init__(
        self,
        id: "Uuid",  # noqa: A002
        created_at: datetime | None = None,
        last_modified_at: datetime | None = None,
    ):
        self.id = id
        self.created_at = created_at or utcnow()
        self.last_modified_at = last_modified_at or self.created_at

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))


# =====================================================================================
# AGGREGATE ROOT BASE CLASS
# =====================================================================================


class AggregateRoot(Entity):
    """
    Aggregate root with domain event management and optimistic versioning.

    ``version`` counts recorded state changes. ``persisted_version`` is the
    version the storage layer last saw; the repository updates a row only when
    the stored version still equals it.

    Usage Example:
        class Order(AggregateRoot):
            aggregate_name = "Order"

            def confirm(self) -> None:
                self.status = OrderStatus.CONFIRMED
                self._record(OrderEventType.CONFIRMED, {})
    """

    aggregate_name: ClassVar[str] = "Aggregate"

    def __init__(
        self,
        id: "Uuid",  # noqa: A002
        version: int = 0,
        created_at: datetime | None = None,
        last_modified_at: datetime | None = None,
        created_by: "Uuid | None" = None,
        last_modified_by: "Uuid | None" = None,
    ):
        super().__init__(id, created_at, last_modified_at)
        if not isinstance(version, int) or version < 0:
            raise ValueError("Aggregate version must be a non-negative integer")
        self.version = version
        self.persisted_version = version
        self.created_by = created_by
        self.last_modified_by = last_modified_by or created_by
        self._events: list[DomainEvent] = []

    def _record(self, event_type: str | Enum, data: dict[str, Any] | None = None) -> DomainEvent:
        """Append one event and advance the version by one."""
        from gatehouse.core.domain.value_objects import Uuid

        event = DomainEvent(
            id=Uuid.generate(),
            aggregate_id=self.id,
            aggregate_name=self.aggregate_name,
            event_type=event_type.value if isinstance(event_type, Enum) else event_type,
            data=dict(data or {}),
        )
        self._events.append(event)
        self.version += 1
        self.last_modified_at = event.created_at
        return event

    def get_events(self) -> list[DomainEvent]:
        """Copy of the pending events."""
        return self._events.copy()

    def take_events(self) -> list[DomainEvent]:
        """Return the pending events and empty the queue."""
        events = self.get_events()
        self._events.clear()
        return events

    def has_events(self) -> bool:
        return len(self._events) > 0

    def prepare_update(self, actor_id: "Uuid | None") -> None:
        """Stamp the actor and time of the pending change."""
        self.last_modified_by = actor_id
        self.last_modified_at = utcnow()

    def mark_persisted(self) -> None:
        self.persisted_version = self.version

    @property
    def is_new(self) -> bool:
        return self.persisted_version == 0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"id={self.id}, "
            f"version={self.version}, "
            f"events={len(self._events)})"
        )


# =====================================================================================
# DOMAIN SERVICE BASE CLASS
# =====================================================================================


class DomainService(ABC):
    """
    Base class for domain services.

    Domain services hold domain logic that needs collaborators such as
    repositories and does not belong to a single aggregate.
    """

    def __str__(self) -> str:
        return self.__class__.__name__


__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "DomainService",
    "Entity",
    "ValueObject",
    "ValueObjectResult",
    "as_utc",
    "utcnow",
]
