"""Auth domain event handlers."""

from .user_registered_handler import UserRegisteredHandler

__all__ = ["UserRegisteredHandler"]
