"""Auth GraphQL schema."""

from .schema import AuthMutations, AuthQueries

__all__ = ["AuthMutations", "AuthQueries"]
