"""Auth infrastructure services."""

from .firebase_authentication_service import FirebaseAuthenticationService
from .user_id_generator import UserIdGenerator

__all__ = ["FirebaseAuthenticationService", "UserIdGenerator"]
