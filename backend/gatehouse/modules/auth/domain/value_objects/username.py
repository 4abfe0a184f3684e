"""
Username Value Object
"""

import re
from typing import ClassVar

from gatehouse.core.domain.base import ValueObject, ValueObjectResult
from gatehouse.core.errors import ValidationError, ValidationErrorCode


class Username(ValueObject):
    """
    Username of 8 to 20 letters, digits or underscores.

    Case is preserved; uniqueness is enforced by the repository.
    """

    FIELD: ClassVar[str] = "username"
    MIN_LENGTH: ClassVar[int] = 8
    MAX_LENGTH: ClassVar[int] = 20
    USERNAME_REGEX: ClassVar[re.Pattern] = re.compile(r"^[A-Za-z0-9_]+$")

    def __init__(self, value: str):
        self.value = self._validate(value)
        self._freeze()

    @classmethod
    def _validate(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, cls.FIELD)

        candidate = str(value).strip()
        if len(candidate) < cls.MIN_LENGTH:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_SHORT, cls.FIELD, min_length=cls.MIN_LENGTH
            )
        if len(candidate) > cls.MAX_LENGTH:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_LONG, cls.FIELD, max_length=cls.MAX_LENGTH
            )
        if not cls.USERNAME_REGEX.match(candidate):
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_INVALID, cls.FIELD)
        return candidate

    @classmethod
    def create(cls, value: str) -> "Username":
        return cls(value)

    @classmethod
    def try_create(cls, value: str | None) -> ValueObjectResult["Username"]:
        try:
            return ValueObjectResult(value=cls(value))
        except ValidationError as e:
            return ValueObjectResult(error=e)

    def __str__(self) -> str:
        return self.value
