"""Tests for environment loading and settings validation."""

import os

import pytest

from gatehouse.core.config import (
    EnvironmentLoader,
    SecurityConfig,
    Settings,
    parse_env_line,
)
from gatehouse.core.enums import Environment, JWTAlgorithm
from gatehouse.core.errors import ConfigurationError


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("KEY=value\n", ("KEY", "value")),
        ("export KEY = 'quoted value'", ("KEY", "quoted value")),
        ('KEY="a=b"', ("KEY", "a=b")),
        ('KEY="', ("KEY", '"')),
        ("  # KEY=value", None),
        ("", None),
        ("no separator", None),
    ],
)
def test_parse_env_line(line, expected):
    assert parse_env_line(line) == expected


class TestEnvironmentLoader:
    """Test typed environment lookups."""

    @pytest.fixture
    def loader(self, tmp_path, monkeypatch) -> EnvironmentLoader:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "GH_TEST_NAME=\"from file\"\n"
            "GH_TEST_OVERRIDDEN=file\n"
            "not a pair\n",
            encoding="utf-8",
        )
        monkeypatch.delenv("GH_TEST_NAME", raising=False)
        monkeypatch.setenv("GH_TEST_OVERRIDDEN", "process")
        loader = EnvironmentLoader(str(env_file))
        yield loader
        os.environ.pop("GH_TEST_NAME", None)

    def test_file_values_are_loaded_and_unquoted(self, loader):
        assert loader.get_string("GH_TEST_NAME") == "from file"

    def test_process_environment_wins(self, loader):
        assert loader.get_string("GH_TEST_OVERRIDDEN") == "process"

    def test_required_string(self, loader):
        with pytest.raises(ConfigurationError, match="GH_TEST_MISSING is required"):
            loader.get_string("GH_TEST_MISSING", required=True)

    def test_integer_bounds(self, loader, monkeypatch):
        monkeypatch.setenv("GH_TEST_INT", "5")
        assert loader.get_integer("GH_TEST_INT", 1, min_value=1) == 5

        with pytest.raises(ConfigurationError, match=">= 10"):
            loader.get_integer("GH_TEST_INT", min_value=10)

        monkeypatch.setenv("GH_TEST_INT", "five")
        with pytest.raises(ConfigurationError, match="must be an integer"):
            loader.get_integer("GH_TEST_INT")

    @pytest.mark.parametrize(
        ("raw", "expected"), [("true", True), ("On", True), ("0", False), ("no", False)]
    )
    def test_boolean(self, loader, monkeypatch, raw, expected):
        monkeypatch.setenv("GH_TEST_BOOL", raw)

        assert loader.get_boolean("GH_TEST_BOOL") is expected

    def test_enum_by_value_or_name(self, loader, monkeypatch):
        monkeypatch.setenv("GH_TEST_ENV", "prod")
        assert loader.get_enum("GH_TEST_ENV", Environment) is Environment.PRODUCTION

        monkeypatch.setenv("GH_TEST_ENV", "staging")
        assert loader.get_enum("GH_TEST_ENV", Environment) is Environment.STAGING

        monkeypatch.setenv("GH_TEST_ENV", "moon")
        with pytest.raises(ConfigurationError):
            loader.get_enum("GH_TEST_ENV", Environment)

    def test_list(self, loader, monkeypatch):
        monkeypatch.setenv("GH_TEST_LIST", "http://a.test, http://b.test,,")

        assert loader.get_list("GH_TEST_LIST") == ["http://a.test", "http://b.test"]


class TestSettings:
    """Test settings assembly."""

    def test_defaults(self, settings):
        assert settings.environment is Environment.DEVELOPMENT
        assert settings.app.app_code == "GATEHOUSE_TEST"
        assert settings.database.is_sqlite
        assert settings.pagination.max_items_per_page == 50
        assert not settings.firebase.is_configured

    def test_production_rejects_default_secret(self, tmp_path, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "prod")

        with pytest.raises(ConfigurationError, match="production"):
            Settings(env_file=str(tmp_path / "missing.env"))

    def test_short_secret_rejected_in_production(self):
        config = SecurityConfig(access_token_secret="short")

        with pytest.raises(ConfigurationError, match="at least 32"):
            config.validate(Environment.PRODUCTION)

    def test_hs512_is_accepted(self):
        SecurityConfig(jwt_algorithm=JWTAlgorithm.HS512).validate(Environment.DEVELOPMENT)

    def test_database_url_needs_async_driver(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/gatehouse")

        with pytest.raises(ConfigurationError, match="async driver"):
            Settings(env_file=str(tmp_path / "missing.env"))
