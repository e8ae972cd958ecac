"""GraphQL dispatcher for the Buildkite GraphQL API.

Documents are hand-written per operation and passed in literally along with
their variables; the dispatcher has no schema awareness. The `data` envelope
is validated with a pydantic model, one per operation (see schemas.py).

GraphQL reports domain errors in an `errors` array with HTTP 200, and a
missing entity as a null field in `data`, so no 404 classification is applied
here. Reconcilers check for null entities themselves.
"""

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import DecodeError, GraphQLError
from .rest import APPLICATION_JSON
from .transport import AuthenticatedTransport

M = TypeVar("M", bound=BaseModel)

_OPERATION_NAME = re.compile(r"\b(query|mutation)\s+(\w+)")


def operation_name(document: str) -> str:
    """Name of the first operation in a document, for logging."""
    match = _OPERATION_NAME.search(document)
    return match.group(2) if match else "anonymous"


class GraphQLClient:
    """Executes GraphQL documents against a single endpoint."""

    DEFAULT_ENDPOINT = "https://graphql.buildkite.com/v1"

    def __init__(self, transport: AuthenticatedTransport, endpoint: str = DEFAULT_ENDPOINT) -> None:
        self.transport = transport
        self.endpoint = endpoint

    def execute(self, document: str, variables: dict[str, Any], into: type[M]) -> M:
        """
        Run a query or mutation and validate its data envelope.

        Args:
            document: GraphQL query or mutation
            variables: Values for the document's variables
            into: Pydantic model describing the expected `data` payload

        Returns:
            The validated `data` payload

        Raises:
            GraphQLError: When the response carries errors
            DecodeError: When the response is not JSON or does not match `into`
            HTTPStatusError, TransportError: From the transport
        """
        name = operation_name(document)
        logging.debug("client: GraphQL %s", name)

        payload = json.dumps({"query": document, "variables": variables}).encode("utf-8")
        response = self.transport.request(
            "POST",
            self.endpoint,
            payload,
            APPLICATION_JSON,
            classify_not_found=False,
        )

        raw = response.content
        try:
            envelope = json.loads(raw)
        except ValueError as e:
            raise DecodeError(str(e), raw) from e
        if not isinstance(envelope, dict):
            raise DecodeError(f"expected a JSON object, got {type(envelope).__name__}", raw)

        errors = envelope.get("errors")
        if errors:
            logging.error("client: GraphQL %s returned %d error(s)", name, len(errors))
            raise GraphQLError(errors)

        data = envelope.get("data")
        if data is None:
            raise DecodeError("GraphQL response did not contain data", raw)

        try:
            return into.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"response did not match {into.__name__}: {e}", raw) from e
