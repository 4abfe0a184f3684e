"""Helpers shared by the auth command and query handlers."""

from dataclasses import dataclass

from gatehouse.core.application.context import AppContext
from gatehouse.core.domain.base import AggregateRoot
from gatehouse.core.domain.value_objects import Uuid
from gatehouse.core.events import EventDispatcher


def require_uuid(value: str | None, field: str) -> Uuid:
    """
    Parse an id-shaped input.

    Raises:
        ValidationError: FIELD_IS_REQUIRED or FIELD_IS_INVALID naming ``field``
    """
    result = Uuid.try_create(value, field)
    if result.error:
        raise result.error
    return result.value


def optional_uuid(value: str | None, field: str) -> Uuid | None:
    if value is None:
        return None
    return require_uuid(value, field)


def actor_id(context: AppContext) -> Uuid | None:
    return context.user.user_id if context.user else None


async def dispatch_events(dispatcher: EventDispatcher, *aggregates: AggregateRoot) -> None:
    """Drain the aggregates' pending events and dispatch them in order."""
    events = [
        event
        for aggregate in aggregates
        if aggregate.has_events()
        for event in aggregate.take_events()
    ]
    if events:
        await dispatcher.dispatch(events)


# Command results


@dataclass(frozen=True)
class IdResult:
    id: str


@dataclass(frozen=True)
class SignInResult:
    id: str
    id_token: str
    sign_in_token: str


@dataclass(frozen=True)
class AccessTokenResult:
    token: str
