"""Application layer core classes."""

from gatehouse.core.application.context import AppContext, AppUser

__all__ = ["AppContext", "AppUser"]
