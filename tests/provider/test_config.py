# ruff: noqa: S105
import logging
from unittest.mock import patch

import pytest

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import AuthenticationError, ConfigurationError
from buildkite_provider.provider.config import ProviderConfig, configure_logging


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that unset values are read from the environment."""
    monkeypatch.setenv("BUILDKITE_ORGANIZATION", "acme")
    monkeypatch.setenv("BUILDKITE_API_TOKEN", "abc123")

    config = ProviderConfig.from_env()

    if config.organization != "acme" or config.api_token != "abc123":
        pytest.fail(f"Unexpected config: {config}")


def test_explicit_values_win(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that explicit values take precedence over the environment."""
    monkeypatch.setenv("BUILDKITE_ORGANIZATION", "acme")
    monkeypatch.setenv("BUILDKITE_API_TOKEN", "abc123")

    config = ProviderConfig.from_env(organization="globex", api_token="xyz")

    if config.organization != "globex" or config.api_token != "xyz":
        pytest.fail(f"Unexpected config: {config}")


def test_missing_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the errors for a missing token and a missing organization."""
    monkeypatch.delenv("BUILDKITE_ORGANIZATION", raising=False)
    monkeypatch.delenv("BUILDKITE_API_TOKEN", raising=False)

    with pytest.raises(AuthenticationError):
        ProviderConfig.from_env(organization="acme")
    with pytest.raises(ConfigurationError):
        ProviderConfig.from_env(api_token="abc123")


def test_token_is_not_in_repr() -> None:
    """Test that the token never appears in the configuration's repr."""
    config = ProviderConfig("acme", "abc123")
    if "abc123" in repr(config):
        pytest.fail(f"Expected the token to be masked, got {config!r}")


def test_create_client() -> None:
    """Test that the configured client uses the configuration."""
    config = ProviderConfig("acme", "abc123", timeout=(3, 4))

    client = config.create_client()

    if not isinstance(client, BuildkiteClient) or client.organization != "acme":
        pytest.fail("Expected a client for 'acme'")
    if client.transport.timeout != (3, 4):
        pytest.fail(f"Unexpected timeout: {client.transport.timeout}")


def test_configure_logging_defaults_to_critical(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the default log level and the quietened urllib3 logger."""
    monkeypatch.delenv("BUILDKITE_PROVIDER_LOG_LEVEL", raising=False)

    with patch("logging.basicConfig") as mock_config:
        configure_logging()

    mock_config.assert_called_once_with(level=logging.CRITICAL, format="%(levelname)s: %(message)s")
    if logging.getLogger("urllib3").level != logging.ERROR:
        pytest.fail("Expected urllib3 to be quietened")


def test_configure_logging_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the log level from the environment, and an explicit override."""
    monkeypatch.setenv("BUILDKITE_PROVIDER_LOG_LEVEL", "debug")

    with patch("logging.basicConfig") as mock_config:
        configure_logging()
        configure_logging("warning")

    levels = [call.kwargs["level"] for call in mock_config.call_args_list]
    if levels != [logging.DEBUG, logging.WARNING]:
        pytest.fail(f"Unexpected levels: {levels}")
