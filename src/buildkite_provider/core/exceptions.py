"""Custom exceptions for the Buildkite provider.

This module defines the exception hierarchy used throughout the provider. Every
failure coming back from the Buildkite APIs is classified exactly once, at the
transport or decoding boundary, into one of a closed set of error kinds. The
reconcilers only ever add context to an error; they never replace it, so the
adapter layer can always tell "the resource is gone" apart from "the call
failed".

Exception Categories:
    Configuration: Errors in provider settings or resource arguments
    API: Errors raised while talking to the REST or GraphQL APIs

Exception Hierarchy:
    BuildkiteProviderError
    ├── ConfigurationError
    │   ├── AuthenticationError
    │   ├── InvalidValueError
    │   └── InvalidPipelineConfigurationError
    └── APIError
        ├── NotFoundError              (ErrorKind.NOT_FOUND)
        ├── TransportError             (ErrorKind.TRANSPORT)
        ├── HTTPStatusError            (ErrorKind.HTTP_STATUS)
        ├── DecodeError                (ErrorKind.DECODE)
        ├── GraphQLError               (ErrorKind.GRAPHQL)
        └── BackendInvariantError      (ErrorKind.BACKEND_INVARIANT)

Usage:
    ```python
    from buildkite_provider.core.exceptions import APIError, ErrorKind

    try:
        team = client.teams.get("platform")
    except APIError as e:
        if e.kind is ErrorKind.NOT_FOUND:
            # Drop the resource from state
            ...
        raise
    ```

Note:
    All exceptions inherit from BuildkiteProviderError to allow catching
    all package-specific exceptions with a single except clause.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorKind(Enum):
    """Discriminator for every API failure the client can report."""

    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    GRAPHQL = "graphql"
    BACKEND_INVARIANT = "backend_invariant"

    def __str__(self) -> str:
        """Return the string value of the enum."""
        return self.value


class BuildkiteProviderError(Exception):
    """Base exception for the Buildkite provider."""


class ConfigurationError(BuildkiteProviderError):
    """Raised when provider or resource configuration is invalid."""

    def __init__(self, message: str = "Invalid provider configuration") -> None:
        super().__init__(message)


class AuthenticationError(ConfigurationError):
    """Raised when no API token is available."""

    def __init__(self, message: str = "A Buildkite API token is required") -> None:
        super().__init__(message)


class InvalidValueError(ConfigurationError):
    """Raised when a resource argument is outside its allowed values."""

    def __init__(self, field: str, value: Any, allowed: list[str]) -> None:
        super().__init__(f"Invalid {field}: {value!r}. Must be one of: {', '.join(allowed)}")
        self.field = field
        self.value = value


class InvalidPipelineConfigurationError(ConfigurationError):
    """Raised when a pipeline YAML configuration cannot be used."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid pipeline configuration: {reason}")


class APIError(BuildkiteProviderError):
    """
    Base class for failures reported by the Buildkite APIs.

    Attributes:
        kind: Fixed classification of the failure
        message: Description of the underlying failure
        context: Resource-identifying messages added by callers, outermost first
        phase: Name of the multi-step operation phase that failed, if any
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.context: list[str] = []
        self.phase: str | None = None

    def add_context(self, message: str, phase: str | None = None) -> "APIError":
        """Prepend resource context in place, keeping the class and kind of the error."""
        self.context.insert(0, message)
        if phase is not None and self.phase is None:
            self.phase = phase
        return self

    def __str__(self) -> str:
        """Return the context chain followed by the underlying message."""
        return ": ".join([*self.context, self.message])


class NotFoundError(APIError):
    """Raised when the requested resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "404 Not Found") -> None:
        super().__init__(message)


class TransportError(APIError):
    """Raised when the request never produced an HTTP response."""

    kind = ErrorKind.TRANSPORT


class HTTPStatusError(APIError):
    """Raised on non-2xx responses other than 404."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        message = f"{status_code} {reason}".strip()
        if body:
            message = f"{message}\nResponse body:\n\n{body}"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class DecodeError(APIError):
    """Raised when a response body cannot be decoded into the expected shape."""

    kind = ErrorKind.DECODE

    MAX_SNIPPET = 500

    def __init__(self, reason: str, raw: bytes = b"") -> None:
        snippet = raw[: self.MAX_SNIPPET].decode("utf-8", errors="replace")
        super().__init__(f"could not decode response body ({len(raw)} bytes): {reason}: {snippet!r}")
        self.reason = reason
        self.raw = raw

    @property
    def length(self) -> int:
        """Length of the raw response body in bytes."""
        return len(self.raw)


class GraphQLError(APIError):
    """Raised when a GraphQL response carries a non-empty errors array."""

    kind = ErrorKind.GRAPHQL

    def __init__(self, errors: list[Any]) -> None:
        messages = [str(error.get("message", error)) if isinstance(error, dict) else str(error) for error in errors]
        super().__init__("GraphQL error: " + "; ".join(messages))
        self.errors = errors
        self.messages = messages


class BackendInvariantError(APIError):
    """Raised for operations Buildkite unconditionally rejects."""

    kind = ErrorKind.BACKEND_INVARIANT


def is_not_found(error: BaseException) -> bool:
    """Return True if the error means the resource no longer exists."""
    return isinstance(error, APIError) and error.kind is ErrorKind.NOT_FOUND
