# ruff: noqa: PLR2004
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import NotFoundError, TransportError
from buildkite_provider.core.organization import OrganizationIdCache


def test_concurrent_resolutions_fetch_once() -> None:
    """Test that 100 concurrent resolutions issue a single fetch."""
    calls = []
    calls_lock = threading.Lock()

    def fetch(slug: str) -> str:
        with calls_lock:
            calls.append(slug)
        time.sleep(0.05)
        return f"id-of-{slug}"

    cache = OrganizationIdCache(fetch)
    with ThreadPoolExecutor(max_workers=100) as executor:
        results = list(executor.map(lambda _: cache.resolve("acme"), range(100)))

    if calls != ["acme"]:
        pytest.fail(f"Expected exactly one fetch, got {len(calls)}")
    if set(results) != {"id-of-acme"}:
        pytest.fail(f"Expected every caller to get the same id, got {set(results)}")


def test_failed_fetch_is_not_cached() -> None:
    """Test that a failed lookup is retried on the next resolution."""
    fetch = MagicMock(side_effect=[TransportError("timeout"), "org-id"])
    cache = OrganizationIdCache(fetch)

    with pytest.raises(TransportError):
        cache.resolve("acme")
    if "acme" in cache:
        pytest.fail("Expected the failure not to be cached")

    if cache.resolve("acme") != "org-id":
        pytest.fail("Expected the second resolution to succeed")
    if fetch.call_count != 2:
        pytest.fail(f"Expected two fetches, got {fetch.call_count}")


def test_caches_are_isolated() -> None:
    """Test that two caches never share entries."""
    first = OrganizationIdCache(lambda slug: "first")
    second = OrganizationIdCache(lambda slug: "second")

    if first.resolve("acme") != "first" or second.resolve("acme") != "second":
        pytest.fail("Expected each cache to use its own fetch")


def test_client_resolves_organization_id_once(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
    request_body: Callable,
) -> None:
    """Test that the client memoizes its organization id."""
    mock_request.return_value = graphql_data({"organization": {"id": "T3JnYW5pemF0aW9uLS0tYWNtZQ=="}})

    first = client.organization_id()
    second = client.organization_id()

    if first != second or first != "T3JnYW5pemF0aW9uLS0tYWNtZQ==":
        pytest.fail(f"Unexpected ids: {first}, {second}")
    if mock_request.call_count != 1:
        pytest.fail(f"Expected one GraphQL request, got {mock_request.call_count}")
    if request_body(mock_request.call_args)["variables"] != {"orgSlug": "acme"}:
        pytest.fail("Expected the lookup to use the organization slug")


def test_unknown_organization_is_not_found(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
) -> None:
    """Test that a null organization is promoted to NotFoundError."""
    mock_request.return_value = graphql_data({"organization": None})

    with pytest.raises(NotFoundError):
        client.organization_id()
