# ruff: noqa: S105
from unittest.mock import patch

import pytest

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import AuthenticationError, ConfigurationError
from buildkite_provider.core.pipelines import PipelineReconciler


def test_initialization() -> None:
    """Test that the client wires every layer for its organization."""
    client = BuildkiteClient("acme", "abc123")

    if client.organization != "acme" or client.rest.organization != "acme":
        pytest.fail("Expected organization to be 'acme'")
    if client.rest.transport is not client.transport or client.graphql.transport is not client.transport:
        pytest.fail("Expected REST and GraphQL to share one transport")
    if not isinstance(client.pipelines, PipelineReconciler) or client.pipelines.client is not client:
        pytest.fail("Expected reconcilers bound to the client")
    if client.graphql.endpoint != "https://graphql.buildkite.com/v1":
        pytest.fail(f"Unexpected GraphQL endpoint: {client.graphql.endpoint}")


def test_custom_endpoints_and_timeout() -> None:
    """Test that endpoints and timeouts can be overridden."""
    client = BuildkiteClient(
        "acme",
        "abc123",
        base_url="http://localhost:8080/",
        graphql_url="http://localhost:8080/graphql",
        timeout=(1, 2),
    )

    if client.rest.url_for("/v2/x") != "http://localhost:8080/v2/x":
        pytest.fail(f"Unexpected URL: {client.rest.url_for('/v2/x')}")
    if client.transport.timeout != (1, 2):
        pytest.fail(f"Unexpected timeout: {client.transport.timeout}")


def test_missing_token() -> None:
    """Test that a client cannot be built without a token."""
    with pytest.raises(AuthenticationError):
        BuildkiteClient("acme", "")


def test_missing_organization() -> None:
    """Test that a client cannot be built without an organization."""
    with pytest.raises(ConfigurationError):
        BuildkiteClient("", "abc123")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test building a client from environment variables."""
    monkeypatch.setenv("BUILDKITE_ORGANIZATION", "acme")
    monkeypatch.setenv("BUILDKITE_API_TOKEN", "abc123")

    client = BuildkiteClient.from_env()

    if client.organization != "acme":
        pytest.fail("Expected organization from the environment")
    if client.transport.headers["Authorization"] != "Bearer abc123":
        pytest.fail("Expected token from the environment")


def test_from_env_without_token(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a missing token in the environment is an AuthenticationError."""
    monkeypatch.setenv("BUILDKITE_ORGANIZATION", "acme")
    monkeypatch.delenv("BUILDKITE_API_TOKEN", raising=False)

    with pytest.raises(AuthenticationError):
        BuildkiteClient.from_env()


def test_context_manager_closes_transport() -> None:
    """Test that leaving the context closes the sessions."""
    with patch("buildkite_provider.core.client.AuthenticatedTransport.close") as mock_close:
        with BuildkiteClient("acme", "abc123") as client:
            if not isinstance(client, BuildkiteClient):
                pytest.fail("Expected the client from __enter__")
        mock_close.assert_called_once()


def test_clients_do_not_share_organization_ids() -> None:
    """Test that each client has its own organization id cache."""
    first = BuildkiteClient("acme", "abc123")
    second = BuildkiteClient("acme", "abc123")

    if first.organization_ids is second.organization_ids:
        pytest.fail("Expected isolated caches")
