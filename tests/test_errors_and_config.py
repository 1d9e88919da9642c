"""Tests for typed errors, settings and logging setup."""

import io
import json
import logging

import pytest

from erpbridge.config import Settings
from erpbridge.errors import (
    AuthenticationError,
    BridgeError,
    NotFoundError,
    RuleValidationError,
    SourceConnectionError,
    TransportTimeout,
    UnknownOperation,
    ValidationError,
    redact,
)
from erpbridge.logging_config import configure_logging


class TestErrors:
    """Test error hierarchy and serialization."""

    def test_to_dict_carries_code_and_message(self):
        error = NotFoundError("No plan yet", {"resource": "plan"})
        data = error.to_dict()

        assert data["error"] == "NotFoundError"
        assert data["code"] == "NOT_FOUND"
        assert data["message"] == "No plan yet"
        assert data["details"] == {"resource": "plan"}
        assert "timestamp" in data

    def test_details_are_redacted(self):
        error = BridgeError("boom", {"password": "hunter2", "nested": {"client_secret": "abc", "user": "bob"}})
        details = error.to_dict()["details"]

        assert details["password"] == "***"
        assert details["nested"]["client_secret"] == "***"
        assert details["nested"]["user"] == "bob"

    def test_redact_walks_lists(self):
        assert redact([{"token": "t"}, {"name": "n"}]) == [{"token": "***"}, {"name": "n"}]

    def test_rule_validation_error_is_validation_error(self):
        error = RuleValidationError("bad", ["field x missing"])

        assert isinstance(error, ValidationError)
        assert error.errors == ["field x missing"]
        assert error.to_dict()["details"]["errors"] == ["field x missing"]

    def test_timeout_message(self):
        error = TransportTimeout("SAP.readTable", 500)

        assert error.message == "SAP.readTable timed out after 500ms"
        assert error.details["timeoutMs"] == 500

    def test_specific_errors_share_base(self):
        for error in (
            SourceConnectionError("down", profile="dev"),
            AuthenticationError("denied", profile="dev"),
            UnknownOperation("nuke.everything"),
        ):
            assert isinstance(error, BridgeError)

    def test_custom_code_override(self):
        assert BridgeError("x", code="CLI_ERROR").code == "CLI_ERROR"


class TestSettings:
    """Test settings resolution."""

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.log_level == "INFO"
        assert settings.connection_env_prefix == "SAP_CONN"
        assert settings.extraction_concurrency == 4
        assert "http://localhost:5173" in settings.cors_origins

    def test_env_overrides(self):
        settings = Settings.from_env({
            "ERPBRIDGE_LOG_LEVEL": "DEBUG",
            "ERPBRIDGE_EXTRACTION_CONCURRENCY": "8",
            "ERPBRIDGE_CORS_ORIGINS": "https://a.example, https://b.example",
            "UNRELATED": "ignored",
        })

        assert settings.log_level == "DEBUG"
        assert settings.extraction_concurrency == 8
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    def test_from_dict_ignores_unknown_keys(self):
        settings = Settings.from_dict({"mode": "live", "bogus": 1})

        assert settings.mode == "live"
        assert settings.to_dict()["mode"] == "live"

    def test_runtime_fields_from_env(self):
        settings = Settings.from_env({
            "ERPBRIDGE_CHECKPOINT_DIR": "/var/erpbridge",
            "ERPBRIDGE_EVENT_HISTORY_CAPACITY": "50",
            "ERPBRIDGE_DEFAULT_TIMEOUT_MS": "5000",
            "ERPBRIDGE_MODE": "LIVE",
        })

        assert settings.checkpoint_dir == "/var/erpbridge"
        assert settings.event_history_capacity == 50
        assert settings.default_timeout_ms == 5000
        assert settings.mode == "live"

    @pytest.mark.parametrize("environ", [
        {"ERPBRIDGE_MODE": "staging"},
        {"ERPBRIDGE_LOG_FORMAT": "xml"},
        {"ERPBRIDGE_EXTRACTION_CONCURRENCY": "0"},
        {"ERPBRIDGE_DEFAULT_TIMEOUT_MS": "thirty"},
    ])
    def test_invalid_values_rejected(self, environ):
        with pytest.raises(RuleValidationError):
            Settings.from_env(environ)


class TestLogging:
    """Test logging configuration."""

    def test_text_format(self):
        stream = io.StringIO()
        configure_logging("INFO", "text", stream)
        logging.getLogger("erpbridge.test").info("hello")

        assert " - erpbridge.test - INFO - hello" in stream.getvalue()

    def test_json_format_with_extras(self):
        stream = io.StringIO()
        configure_logging("INFO", "json", stream)
        logging.getLogger("erpbridge.test").info("run done", extra={"runId": "r1"})

        payload = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert payload["message"] == "run done"
        assert payload["level"] == "INFO"
        assert payload["runId"] == "r1"

    def test_secrets_masked_in_messages(self):
        stream = io.StringIO()
        configure_logging("INFO", "text", stream)
        logging.getLogger("erpbridge.test").info("connecting with password=s3cret to dev")

        output = stream.getvalue()
        assert "s3cret" not in output
        assert "password=***" in output

    def test_reconfigure_replaces_handler(self):
        first = io.StringIO()
        second = io.StringIO()
        configure_logging("INFO", "text", first)
        logger = configure_logging("INFO", "text", second)
        logging.getLogger("erpbridge.test").info("only once")

        assert "only once" not in first.getvalue()
        assert "only once" in second.getvalue()
        assert sum(1 for h in logger.handlers if getattr(h, "_erpbridge", False)) == 1

    def test_level_applied(self):
        stream = io.StringIO()
        configure_logging("WARNING", "text", stream)
        logging.getLogger("erpbridge.test").info("hidden")

        assert "hidden" not in stream.getvalue()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging("INFO", "text")
