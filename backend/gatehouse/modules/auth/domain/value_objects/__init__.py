"""Auth value objects."""

from .email import Email
from .password import Password
from .username import Username

__all__ = ["Email", "Password", "Username"]
