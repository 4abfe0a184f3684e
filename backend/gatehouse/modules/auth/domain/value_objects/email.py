"""
Email Value Object

Represents a validated, normalized email address.
"""

import re
from typing import ClassVar

from gatehouse.core.domain.base import ValueObject, ValueObjectResult
from gatehouse.core.errors import ValidationError, ValidationErrorCode


class Email(ValueObject):
    """Email value object, trimmed and lower-cased."""

    FIELD: ClassVar[str] = "email"
    MAX_LENGTH: ClassVar[int] = 254
    EMAIL_REGEX: ClassVar[re.Pattern] = re.compile(
        r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}$"
    )

    def __init__(self, value: str):
        self.value = self._normalize(value)
        self._freeze()

    @classmethod
    def _normalize(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, cls.FIELD)

        normalized = str(value).strip().lower()
        if len(normalized) > cls.MAX_LENGTH or not cls.EMAIL_REGEX.match(normalized):
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_INVALID, cls.FIELD)
        if ".." in normalized:
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_INVALID, cls.FIELD)
        return normalized

    @classmethod
    def create(cls, value: str) -> "Email":
        return cls(value)

    @classmethod
    def try_create(cls, value: str | None) -> ValueObjectResult["Email"]:
        try:
            return ValueObjectResult(value=cls(value))
        except ValidationError as e:
            return ValueObjectResult(error=e)

    @property
    def domain(self) -> str:
        return self.value.split("@")[1]

    def __str__(self) -> str:
        return self.value
