"""Auth Service Interfaces

Ports to the external identity provider and the user id generator.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from gatehouse.core.domain.value_objects import Uuid


class VerifiedCredentials(BaseModel):
    """Provider account id and id token for a correct email/password pair."""

    external_id: str
    id_token: str


class ExternalUser(BaseModel):
    """Identity provider account as seen by the auth module."""

    external_id: str
    email: str | None = None
    display_name: str | None = None
    provider_id: str | None = None
    disabled: bool = False


class ExternalAuthenticationService(ABC):
    """Port to the external identity provider."""

    @abstractmethod
    async def verify_password(
        self, email: str, password: str
    ) -> VerifiedCredentials | None:
        """
        Check an email/password pair.

        Returns:
            VerifiedCredentials, or None if the credentials are wrong

        Raises:
            ExternalAuthenticationError: If the provider fails
        """

    @abstractmethod
    async def create_sign_in_token(
        self, external_id: str, claims: dict[str, Any] | None = None
    ) -> str:
        """Create a custom token the client exchanges for a provider session."""

    @abstractmethod
    async def create_user(self, email: str, password: str) -> str:
        """Create a provider account and return its external id."""

    @abstractmethod
    async def enable_user(self, external_id: str) -> None: ...

    @abstractmethod
    async def disable_user(self, external_id: str) -> None: ...

    @abstractmethod
    async def verify_token(self, id_token: str) -> str:
        """
        Verify a provider id token.

        Returns:
            str: The external id of the token's subject

        Raises:
            ValidationError: INVALID_TOKEN
        """

    @abstractmethod
    async def find_user_by_id(self, external_id: str) -> ExternalUser | None: ...

    @abstractmethod
    async def find_user_by_email(self, email: str) -> ExternalUser | None: ...


class IUserIdGenerator(ABC):
    @abstractmethod
    def generate_user_id(self, email: str) -> Uuid:
        """Deterministic user id for ``email``."""
