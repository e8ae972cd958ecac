# ruff: noqa: S105
import json
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests

from buildkite_provider.core.client import BuildkiteClient

ResponseFactory = Callable[..., MagicMock]


def build_response(
    status_code: int = 200,
    payload: Any = None,
    reason: str = "OK",
    content: bytes | None = None,
) -> MagicMock:
    """Fake requests.Response carrying a JSON payload or raw content."""
    raw = content if content is not None else json.dumps(payload if payload is not None else {}).encode("utf-8")
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.content = raw
    response.text = raw.decode("utf-8", errors="replace")
    return response


@pytest.fixture
def make_response() -> ResponseFactory:
    """Factory for fake HTTP responses."""
    return build_response


@pytest.fixture
def graphql_data() -> ResponseFactory:
    """Factory for successful GraphQL responses wrapping `data`."""

    def factory(data: dict[str, Any]) -> MagicMock:
        return build_response(payload={"data": data})

    return factory


@pytest.fixture
def request_body() -> Callable[[Any], Any]:
    """Decode the JSON body sent with a recorded Session.request call."""

    def decode(call: Any) -> Any:
        return json.loads(call.kwargs["data"])

    return decode


@pytest.fixture
def mock_request() -> Iterator[MagicMock]:
    """Patch every requests session so no request leaves the process."""
    with patch.object(requests.Session, "request") as mock:
        yield mock


@pytest.fixture
def client() -> Iterator[BuildkiteClient]:
    """Client for the 'acme' organization."""
    client = BuildkiteClient("acme", "abc123")
    yield client
    client.close()


@pytest.fixture
def org_id_cached(client: BuildkiteClient) -> BuildkiteClient:
    """Client whose organization ID is already resolved."""
    client.organization_ids._ids["acme"] = "T3JnYW5pemF0aW9uLS0tYWNtZQ=="  # noqa: SLF001
    return client
