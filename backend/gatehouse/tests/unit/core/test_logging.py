"""Test cases for the structlog setup."""

import json

import pytest
from structlog.testing import capture_logs

from gatehouse.core.enums import Environment, LogFormat, LogLevel
from gatehouse.core.logging import (
    LogConfig,
    configure_logging,
    get_logger,
    redact_sensitive_fields,
)


class TestLogConfig:
    """Test environment defaults."""

    @pytest.mark.parametrize(
        ("environment", "log_format", "caller_info"),
        [
            (Environment.DEVELOPMENT, LogFormat.CONSOLE, True),
            (Environment.TESTING, LogFormat.PLAIN, False),
            (Environment.PRODUCTION, LogFormat.JSON, False),
        ],
    )
    def test_defaults(self, environment, log_format, caller_info):
        config = LogConfig(environment=environment)

        assert config.format is log_format
        assert config.enable_caller_info is caller_info

    def test_explicit_format_wins(self):
        config = LogConfig(format=LogFormat.JSON, environment=Environment.DEVELOPMENT)

        assert config.format is LogFormat.JSON
        assert config.to_dict()["format"] == "json"

    def test_level_mapping(self):
        assert LogLevel.WARNING.to_logging_level() == 30


class TestRedaction:
    """Test masking of sensitive fields."""

    def test_masks_nested_secrets(self):
        event = {
            "event": "password changed",
            "user_id": "u-1",
            "id_token": "abc",
            "payload": {"password": "S3cret!pw", "email": "jane@example.com"},
            "api_key": None,
        }

        result = redact_sensitive_fields(None, "info", event)

        assert result == {
            "event": "password changed",
            "user_id": "u-1",
            "id_token": "***",
            "payload": {"password": "***", "email": "jane@example.com"},
            "api_key": None,
        }


class TestStructuredLogger:
    """Test that loggers follow the current configuration."""

    def test_module_logger_uses_latest_configuration(self):
        logger = get_logger("gatehouse.tests")
        configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))

        with capture_logs() as logs:
            logger.info("User registered", user_id="u-1")

        assert logs == [{"event": "User registered", "user_id": "u-1", "log_level": "info"}]

    def test_fields_named_like_logger_parameters(self):
        logger = get_logger("gatehouse.tests")
        configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))

        with capture_logs() as logs:
            logger.info("Request completed", method="GET", message="payload")
            logger.error("Request failed", method="POST")

        assert logs[0]["method"] == "GET"
        assert logs[0]["message"] == "payload"
        assert logs[1] == {"event": "Request failed", "method": "POST", "log_level": "error"}

    def test_caller_info_points_at_call_site(self, capsys):
        # Arrange
        logger = get_logger("gatehouse.tests")
        configure_logging(
            LogConfig(
                level=LogLevel.DEBUG,
                format=LogFormat.JSON,
                environment=Environment.DEVELOPMENT,
            )
        )

        # Act
        def register_user():
            logger.info("User registered", user_id="u-1")

        register_user()

        # Assert
        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["func_name"] == "register_user"
        assert record["filename"] == "test_logging.py"
        configure_logging(LogConfig(environment=Environment.TESTING))
