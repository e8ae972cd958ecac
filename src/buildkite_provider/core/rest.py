"""REST request/response codec for the Buildkite v2 API.

Builds requests from a method, a relative path and an optional body, and
decodes JSON responses into the shape the caller asks for. The caller passes
an `into` callable (for example `Pipeline.from_get_response`); `into=None`
means the body is discarded.
"""

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote, urljoin

from .exceptions import DecodeError
from .transport import AuthenticatedTransport

T = TypeVar("T")

APPLICATION_JSON = "application/json"


class RestClient:
    """JSON codec over the authenticated transport, scoped to one organization."""

    DEFAULT_BASE_URL = "https://api.buildkite.com/"

    def __init__(
        self,
        transport: AuthenticatedTransport,
        organization: str,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.transport = transport
        self.organization = organization
        self.base_url = base_url

    def url_for(self, path: str) -> str:
        """Resolve a relative path against the base URL."""
        return urljoin(self.base_url, path)

    def organization_path(self, *segments: str) -> str:
        """Path under the organization, e.g. /v2/organizations/acme/pipelines/web."""
        parts = ["v2", "organizations", self.organization, *segments]
        return "/" + "/".join(quote(part, safe="") for part in parts)

    ### Verb methods
    def get(self, path: str, into: Callable[[Any], T] | None) -> T | None:
        """GET a resource."""
        return self.request("GET", path, None, into)

    def post(self, path: str, body: Any, into: Callable[[Any], T] | None) -> T | None:
        """POST a JSON body."""
        return self.request("POST", path, body, into)

    def patch(self, path: str, body: Any, into: Callable[[Any], T] | None) -> T | None:
        """PATCH a JSON body."""
        return self.request("PATCH", path, body, into)

    def delete(self, path: str, into: Callable[[Any], T] | None = None) -> T | None:
        """DELETE a resource."""
        return self.request("DELETE", path, None, into)

    def request(
        self,
        method: str,
        path: str,
        body: Any,
        into: Callable[[Any], T] | None,
    ) -> T | None:
        """Send a request and decode the response with `into`."""
        encoded = None
        content_type = None
        if body is not None:
            encoded = json.dumps(body).encode("utf-8")
            content_type = APPLICATION_JSON

        response = self.transport.request(method, self.url_for(path), encoded, content_type)
        if into is None:
            return None
        return self.decode(response.content, into)

    @staticmethod
    def decode(raw: bytes, into: Callable[[Any], T]) -> T:
        """Decode a JSON body and convert it with `into`."""
        logging.debug("client: response body %s", raw[:DecodeError.MAX_SNIPPET])
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise DecodeError(str(e), raw) from e

        try:
            return into(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"unexpected response shape: {type(e).__name__}: {e}", raw) from e
