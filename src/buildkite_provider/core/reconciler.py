"""Shared base for the per-resource reconcilers."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from .exceptions import APIError
from .graphql import GraphQLClient
from .ids import org_scoped_slug
from .rest import RestClient

if TYPE_CHECKING:
    from .client import BuildkiteClient


class Reconciler:
    """Translates desired resource state into backend calls for one resource kind."""

    def __init__(self, client: "BuildkiteClient") -> None:
        self.client = client

    @property
    def rest(self) -> RestClient:
        """The client's REST codec."""
        return self.client.rest

    @property
    def graphql(self) -> GraphQLClient:
        """The client's GraphQL dispatcher."""
        return self.client.graphql

    def scoped_slug(self, *parts: str) -> str:
        """Organization-scoped slug for GraphQL lookups."""
        return org_scoped_slug(self.client.organization, *parts)

    @staticmethod
    @contextmanager
    def error_context(message: str, phase: str | None = None) -> Iterator[None]:
        """Annotate API errors raised in the block with resource context."""
        try:
            yield
        except APIError as e:
            e.add_context(message, phase)
            raise
