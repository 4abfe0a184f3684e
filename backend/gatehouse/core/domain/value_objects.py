"""Shared value objects."""

import uuid

from gatehouse.core.domain.base import ValueObject, ValueObjectResult
from gatehouse.core.errors import ValidationError, ValidationErrorCode

UUID_NAMESPACE_DNS = uuid.NAMESPACE_DNS


class Uuid(ValueObject):
    """
    RFC-4122 identifier stored as its canonical lower-case string.

    Usage Example:
        user_id = Uuid.create("550e8400-e29b-41d4-a716-446655440000")
        result = Uuid.try_create(raw_value, "userGroupId")
        if result.error:
            raise result.error
    """

    def __init__(self, value: str):
        self.value = self._normalize(value, "id")
        self._freeze()

    @staticmethod
    def _normalize(value: str | None, field: str) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_REQUIRED, field)
        if not isinstance(value, str):
            raise ValidationError.for_field(ValidationErrorCode.FIELD_IS_INVALID, field)
        candidate = value.strip()
        try:
            parsed = uuid.UUID(candidate)
        except ValueError as e:
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_INVALID, field, value=value
            ) from e
        # uuid.UUID also accepts braces, urn prefixes and bare hex.
        if str(parsed) != candidate.lower():
            raise ValidationError.for_field(
                ValidationErrorCode.FIELD_IS_INVALID, field, value=value
            )
        return str(parsed)

    @classmethod
    def create(cls, value: str) -> "Uuid":
        """Create a Uuid, raising ValidationError for malformed input."""
        return cls(value)

    @classmethod
    def try_create(cls, value: str | None, field: str = "id") -> ValueObjectResult["Uuid"]:
        """Create a Uuid without raising; the error names ``field``."""
        try:
            normalized = cls._normalize(value, field)
        except ValidationError as e:
            return ValueObjectResult(error=e)
        return ValueObjectResult(value=cls(normalized))

    @classmethod
    def generate(cls) -> "Uuid":
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_name(cls, namespace: "Uuid | uuid.UUID", name: str) -> "Uuid":
        """Deterministic version-5 identifier of ``name`` within ``namespace``."""
        ns = uuid.UUID(namespace.value) if isinstance(namespace, Uuid) else namespace
        return cls(str(uuid.uuid5(ns, name)))

    def __str__(self) -> str:
        return self.value
