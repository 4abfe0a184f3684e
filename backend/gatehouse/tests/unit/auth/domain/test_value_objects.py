"""Tests for the Email, Username and Password value objects."""

import pytest

from gatehouse.core.errors import ValidationError
from gatehouse.modules.auth.domain.enums import SignInType
from gatehouse.modules.auth.domain.value_objects import Email, Password, Username


class TestEmail:
    """Test email normalization and validation."""

    def test_trims_and_lower_cases(self):
        email = Email.create("  Jane.Doe@Example.COM ")

        assert email.value == "jane.doe@example.com"
        assert email.domain == "example.com"
        assert str(email) == "jane.doe@example.com"

    def test_equal_after_normalization(self):
        assert Email.create("JANE@example.com") == Email.create("jane@example.com")

    @pytest.mark.parametrize(
        "value",
        ["plainaddress", "jane@", "@example.com", "jane..doe@example.com", "jane@example"],
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError, match="FIELD_IS_INVALID"):
            Email.create(value)

    def test_too_long(self):
        value = f"{'a' * 250}@example.com"

        with pytest.raises(ValidationError, match="FIELD_IS_INVALID"):
            Email.create(value)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required(self, value):
        result = Email.try_create(value)

        assert not result.is_success
        assert result.error.code == "FIELD_IS_REQUIRED"
        assert result.error.data == {"field": "email"}


class TestUsername:
    """Test username rules."""

    def test_valid_username_is_stripped(self):
        assert Username.create("  jane_doe1 ").value == "jane_doe1"

    def test_case_is_preserved(self):
        assert Username.create("Jane_Doe1").value == "Jane_Doe1"

    def test_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            Username.create("jane")

        assert exc_info.value.code == "FIELD_IS_TOO_SHORT"
        assert exc_info.value.data == {"field": "username", "min_length": 8}

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            Username.create("j" * 21)

        assert exc_info.value.code == "FIELD_IS_TOO_LONG"
        assert exc_info.value.data["max_length"] == 20

    @pytest.mark.parametrize("value", ["jane doe1", "jane-doe1", "jane.doe1", "jané_doe1"])
    def test_invalid_characters(self, value):
        with pytest.raises(ValidationError, match="FIELD_IS_INVALID"):
            Username.create(value)

    def test_email_is_not_a_username(self):
        assert not Username.try_create("jane@example.com").is_success


class TestPassword:
    """Test the password policy."""

    def test_valid(self):
        assert Password.create("S3cret!pw").value == "S3cret!pw"

    @pytest.mark.parametrize(
        "value",
        ["s3cret!pw", "S3CRET!PW", "Secret!pw", "S3cretpw1"],
        ids=["no-upper", "no-lower", "no-digit", "no-special"],
    )
    def test_missing_character_class(self, value):
        with pytest.raises(ValidationError, match="FIELD_IS_INVALID"):
            Password.create(value)

    def test_length_bounds(self):
        assert Password.try_create("S3c!").error.code == "FIELD_IS_TOO_SHORT"
        assert Password.try_create("S3c!" * 6).error.code == "FIELD_IS_TOO_LONG"

    def test_never_reveals_value(self):
        password = Password.create("S3cret!pw")

        assert repr(password) == "Password(***)"
        assert str(password) == "***"


class TestSignInType:
    """Test provider id mapping."""

    @pytest.mark.parametrize(
        ("provider_id", "expected"),
        [
            (None, SignInType.EMAIL),
            ("", SignInType.EMAIL),
            ("password", SignInType.EMAIL),
            ("google.com", SignInType.GOOGLE),
            ("apple.com", SignInType.APPLE),
            ("github.com", None),
        ],
    )
    def test_from_provider_id(self, provider_id, expected):
        assert SignInType.from_provider_id(provider_id) is expected
