"""Tests for plugin settings and logging configuration."""

from __future__ import annotations

import sys

import pytest
from loguru import logger

from lambda_attach.domain.errors import ConfigurationError
from lambda_attach.infrastructure.logging import configure_logging
from lambda_attach.infrastructure.settings import LambdaSettings

from conftest import CALLBACK_URL


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LAMBDA_CALLBACK_URL", "LAMBDA_REGION", "LAMBDA_RETRY_LIMIT"):
        monkeypatch.delenv(name, raising=False)


class TestFromOptions:
    def test_known_options_are_set(self):
        settings = LambdaSettings.from_options(
            callback_url=CALLBACK_URL,
            region="eu-west-1",
            secret_access_key="s3cr3t",
            retry_limit=3,
        )
        assert settings.callback_url == CALLBACK_URL
        assert settings.region == "eu-west-1"
        assert settings.retry_limit == 3
        assert settings.secret_access_key.get_secret_value() == "s3cr3t"
        assert "s3cr3t" not in repr(settings)

    def test_defaults(self):
        settings = LambdaSettings.from_options(callback_url=CALLBACK_URL)
        assert settings.validate_params is True
        assert settings.log_level == "INFO"
        assert settings.access_key_id is None

    def test_unknown_option_is_rejected(self):
        with pytest.raises(ConfigurationError, match="The :unknown_key option is not supported by the Lambda plugin"):
            LambdaSettings.from_options(callback_url=CALLBACK_URL, unknown_key="some value")

    def test_unknown_option_is_logged(self, log_messages):
        with pytest.raises(ConfigurationError):
            LambdaSettings.from_options(callback_url=CALLBACK_URL, unknown_key="some value")
        assert "The :unknown_key option is not supported by the Lambda plugin" in log_messages

    def test_missing_callback_url(self):
        with pytest.raises(ConfigurationError, match="The :callback_url option is required for Lambda plugin"):
            LambdaSettings.from_options(access_key_id="some value")

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError, match="Invalid Lambda plugin settings"):
            LambdaSettings.from_options(callback_url=CALLBACK_URL, retry_limit="many")


class TestEnvironment:
    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("LAMBDA_CALLBACK_URL", CALLBACK_URL)
        monkeypatch.setenv("LAMBDA_RETRY_LIMIT", "5")
        settings = LambdaSettings()
        assert settings.callback_url == CALLBACK_URL
        assert settings.retry_limit == 5

    def test_options_override_environment(self, monkeypatch):
        monkeypatch.setenv("LAMBDA_CALLBACK_URL", "https://other.example.com/cb")
        settings = LambdaSettings.from_options(callback_url=CALLBACK_URL)
        assert settings.callback_url == CALLBACK_URL


class TestConfigureLogging:
    def test_installs_handler_at_configured_level(self):
        settings = LambdaSettings.from_options(callback_url=CALLBACK_URL, log_level="warning", log_format="{message}")
        handler_id = configure_logging(settings)
        try:
            assert isinstance(handler_id, int)
        finally:
            logger.remove(handler_id)
            logger.add(sys.stderr)
