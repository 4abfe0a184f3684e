"""Auth domain services."""

from .user_group_validator_service import UserGroupValidatorService
from .user_validator_service import UserValidatorService

__all__ = ["UserGroupValidatorService", "UserValidatorService"]
