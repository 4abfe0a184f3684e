"""Domain layer core classes."""

from gatehouse.core.domain.base import (
    AggregateRoot,
    DomainEvent,
    DomainService,
    Entity,
    ValueObject,
    ValueObjectResult,
)
from gatehouse.core.domain.value_objects import Uuid

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "DomainService",
    "Entity",
    "Uuid",
    "ValueObject",
    "ValueObjectResult",
]
