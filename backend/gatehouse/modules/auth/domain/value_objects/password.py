"""
Password Value Object

Plain-text password checked against the registration policy before it is
handed to the identity provider. It is never stored or logged.
"""

import re
from typing import ClassVar

from gatehouse.core.domain.base import ValueObject, ValueObjectResult
from gatehouse.core.errors import ValidationError, ValidationErrorCode


class Password(ValueObject):
    """Password with length and character class requirements."""

    FIELD: ClassVar[str] = "password"
    MIN_LENGTH: ClassVar[int] = 8
    MAX_LENGTH: ClassVar[int] = 20
    REQUIRED_PATTERNS: ClassVar[tuple[re.Pattern, ...]] = (
        re.compile(r"[a-z]"),
        re.compile(r"[A-Z]"),
        re.compile(r"\d"),
        re.compile(r"[^A-Za-z0-9]"),
    )

    def __init__(self, value: str):
        self.value = self._validate(value)
        self._freeze()

    @classmethod
    def _validate(cls, value: str | None) -> str:
        if value is None or value == "":
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, cls.FIELD)
        if len(value) < cls.MIN_LENGTH:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_SHORT, cls.FIELD, min_length=cls.MIN_LENGTH
            )
        if len(value) > cls.MAX_LENGTH:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_TOO_LONG, cls.FIELD, max_length=cls.MAX_LENGTH
            )
        if not all(pattern.search(value) for pattern in cls.REQUIRED_PATTERNS):
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_INVALID, cls.FIELD)
        return value

    @classmethod
    def create(cls, value: str) -> "Password":
        return cls(value)

    @classmethod
    def try_create(cls, value: str | None) -> ValueObjectResult["Password"]:
        try:
            return ValueObjectResult(value=cls(value))
        except ValidationError as e:
            return ValueObjectResult(error=e)

    def __repr__(self) -> str:
        return "Password(***)"

    def __str__(self) -> str:
        return "***"
