"""Logs newly registered users."""

from gatehouse.core.domain.base import DomainEvent
from gatehouse.core.events import EventHandler
from gatehouse.core.logging import get_logger
from gatehouse.modules.auth.domain.enums import UserEventType

logger = get_logger(__name__)


class UserRegisteredHandler(EventHandler):
    event_types = [UserEventType.REGISTERED]

    async def handle(self, event: DomainEvent) -> None:
        logger.info(
            "User registered",
            user_id=str(event.aggregate_id),
            email=event.data.get("email"),
            username=event.data.get("username"),
        )
