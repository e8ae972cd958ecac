# ruff: noqa: PLR2004
import json
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import DecodeError, ErrorKind, NotFoundError
from buildkite_provider.core.rest import RestClient


def test_organization_path(client: BuildkiteClient) -> None:
    """Test that paths are scoped to the organization."""
    path = client.rest.organization_path("pipelines", "web")
    if path != "/v2/organizations/acme/pipelines/web":
        pytest.fail(f"Unexpected path: {path}")
    if client.rest.url_for(path) != "https://api.buildkite.com/v2/organizations/acme/pipelines/web":
        pytest.fail(f"Unexpected URL: {client.rest.url_for(path)}")


def test_organization_path_quotes_segments(client: BuildkiteClient) -> None:
    """Test that segments cannot escape their position in the path."""
    path = client.rest.organization_path("pipelines", "a/b c")
    if path != "/v2/organizations/acme/pipelines/a%2Fb%20c":
        pytest.fail(f"Unexpected path: {path}")


def test_get_sends_scenario_request(
    client: BuildkiteClient,
    mock_request: MagicMock,
    make_response: Callable[..., MagicMock],
) -> None:
    """Test the exact request sent for a pipeline lookup."""
    mock_request.return_value = make_response(payload={"slug": "web"})

    result = client.rest.get(client.rest.organization_path("pipelines", "web"), lambda data: data["slug"])

    if result != "web":
        pytest.fail(f"Expected decoded slug 'web', got {result!r}")
    args, kwargs = mock_request.call_args
    if args != ("GET", "https://api.buildkite.com/v2/organizations/acme/pipelines/web"):
        pytest.fail(f"Unexpected request: {args}")
    if kwargs["headers"]["Authorization"] != "Bearer abc123":
        pytest.fail("Expected the bearer token")
    if kwargs["data"] is not None:
        pytest.fail("Expected no body for GET")


def test_get_404_raises_not_found(
    client: BuildkiteClient,
    mock_request: MagicMock,
    make_response: Callable[..., MagicMock],
) -> None:
    """Test that a missing pipeline surfaces as NotFoundError."""
    mock_request.return_value = make_response(404, reason="Not Found")

    with pytest.raises(NotFoundError) as exc_info:
        client.rest.get(client.rest.organization_path("pipelines", "web"), dict)

    if exc_info.value.kind is not ErrorKind.NOT_FOUND:
        pytest.fail("Expected NOT_FOUND kind")


def test_post_encodes_json_body(
    client: BuildkiteClient,
    mock_request: MagicMock,
    make_response: Callable[..., MagicMock],
) -> None:
    """Test that bodies are JSON encoded with a JSON content type."""
    mock_request.return_value = make_response(201, payload={"slug": "web"})

    client.rest.post("/v2/organizations/acme/pipelines", {"name": "web"}, dict)

    kwargs = mock_request.call_args.kwargs
    if json.loads(kwargs["data"]) != {"name": "web"}:
        pytest.fail(f"Unexpected body: {kwargs['data']!r}")
    if kwargs["headers"]["Content-Type"] != "application/json":
        pytest.fail("Expected JSON content type")


def test_delete_discards_body(
    client: BuildkiteClient,
    mock_request: MagicMock,
    make_response: Callable[..., MagicMock],
) -> None:
    """Test that DELETE with no decoder ignores the (empty) response."""
    mock_request.return_value = make_response(204, reason="No Content", content=b"")

    result = client.rest.delete("/v2/organizations/acme/pipelines/web")

    if result is not None:
        pytest.fail(f"Expected None, got {result!r}")
    if mock_request.call_args.args[0] != "DELETE":
        pytest.fail("Expected a DELETE request")


def test_decode_invalid_json() -> None:
    """Test that malformed JSON raises DecodeError with a bounded snippet."""
    raw = b"<html>" + b"x" * 1000
    with pytest.raises(DecodeError) as exc_info:
        RestClient.decode(raw, dict)

    error = exc_info.value
    if error.kind is not ErrorKind.DECODE:
        pytest.fail("Expected DECODE kind")
    if error.length != len(raw):
        pytest.fail(f"Expected length {len(raw)}, got {error.length}")
    if "x" * 501 in str(error):
        pytest.fail("Expected the snippet to be truncated")


def test_decode_unexpected_shape() -> None:
    """Test that a missing required key raises DecodeError."""
    with pytest.raises(DecodeError) as exc_info:
        RestClient.decode(b'{"name": "web"}', lambda data: data["slug"])

    if "KeyError" not in str(exc_info.value):
        pytest.fail(f"Expected the KeyError to be described, got {exc_info.value}")
