"""In-process domain event dispatch.

Command handlers drain an aggregate's pending events after a successful save
and hand them to the dispatcher. Delivery is sequential and best-effort: a
handler failure is logged and never reaches the caller, because the state
change it reports is already committed.

Architecture:
- EventHandler: Base handler declaring the event types it accepts
- EventDispatcher: Registry of handlers keyed by event type
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterable
from enum import Enum
from typing import ClassVar

from gatehouse.core.domain.base import DomainEvent
from gatehouse.core.logging import get_logger

logger = get_logger(__name__)


class EventHandler(ABC):
    """
    Base event handler.

    Usage Example:
        class UserRegisteredHandler(EventHandler):
            event_types = [UserEventType.REGISTERED]

            async def handle(self, event: DomainEvent) -> None:
                logger.info("User registered", user_id=str(event.aggregate_id))
    """

    event_types: ClassVar[list[str | Enum]] = []

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Handle one event."""


class EventDispatcher:
    """
    Deliver domain events to registered handlers.

    Handlers run one at a time in registration order; events are delivered in
    the order given.
    """

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def register_handler(self, handler: EventHandler) -> None:
        """Index ``handler`` under each of its event types."""
        if not handler.event_types:
            raise ValueError(
                f"{handler.__class__.__name__} does not declare any event types"
            )
        for event_type in handler.event_types:
            key = event_type.value if isinstance(event_type, Enum) else event_type
            if handler not in self._handlers[key]:
                self._handlers[key].append(handler)

        logger.debug(
            "Event handler registered",
            handler=handler.__class__.__name__,
            event_types=[str(t.value if isinstance(t, Enum) else t) for t in handler.event_types],
        )

    def get_handlers(self, event_type: str | Enum) -> list[EventHandler]:
        key = event_type.value if isinstance(event_type, Enum) else event_type
        return list(self._handlers.get(key, []))

    async def dispatch(self, events: Iterable[DomainEvent]) -> None:
        """Deliver each event to every handler registered for its type."""
        for event in events:
            handlers = self._handlers.get(event.event_type, [])
            if not handlers:
                logger.debug(
                    "No handlers registered for event",
                    event_type=event.event_type,
                    event_id=str(event.id),
                )
                continue

            for handler in handlers:
                try:
                    await handler.handle(event)
                except Exception:
                    logger.exception(
                        "Event handler failed",
                        handler=handler.__class__.__name__,
                        event_type=event.event_type,
                        event_id=str(event.id),
                        aggregate_id=str(event.aggregate_id),
                    )


__all__ = ["EventDispatcher", "EventHandler"]
