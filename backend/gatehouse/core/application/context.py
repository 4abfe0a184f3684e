"""Per-request application context.

The transport layer builds an ``AppContext`` for every request from the bearer
token it received. Handlers only read it; an absent ``user`` means the caller
is anonymous.
"""

from dataclasses import dataclass, field

from gatehouse.core.domain.value_objects import Uuid


@dataclass(frozen=True)
class AppUser:
    """Authenticated caller identity."""

    user_id: Uuid
    roles: list[str] = field(default_factory=list)

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass(frozen=True)
class AppContext:
    """Request context carrying the optional authenticated user."""

    user: AppUser | None = None

    @classmethod
    def anonymous(cls) -> "AppContext":
        return cls(user=None)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
