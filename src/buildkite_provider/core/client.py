"""Buildkite API client facade.

This module wires the layers of the client together for one organization: a
single authenticated transport, the REST codec and GraphQL dispatcher on top
of it, the organization identity cache, and one reconciler per resource kind.

Key Components:
    BuildkiteClient: Entry point handed to the provider adapters.

Features:
    - Bearer token authentication on every request
    - Thread-safe: one client may serve concurrent resource operations
    - Organization global ID resolved once per client and memoized
    - No retries; every failure surfaces as a classified APIError

Dependencies:
    - transport.py: Authenticated requests sessions
    - rest.py, graphql.py: Wire codecs for both APIs
    - organization.py: Organization identity cache
    - pipelines.py, teams.py, ...: Per-resource reconcilers

Example:
    ```python
    from buildkite_provider.core.client import BuildkiteClient

    with BuildkiteClient(organization="acme", token="abc123") as client:
        pipeline = client.pipelines.get("web")
        team = client.teams.get("platform")
    ```

Raises:
    AuthenticationError: When no API token is given
    ConfigurationError: When no organization is given
"""

import logging
import os
from functools import partial

from .exceptions import AuthenticationError, ConfigurationError
from .graphql import GraphQLClient
from .organization import OrganizationIdCache, fetch_organization_id
from .organization_members import OrganizationMemberReconciler
from .pipeline_schedules import PipelineScheduleReconciler
from .pipelines import PipelineReconciler
from .rest import RestClient
from .team_members import TeamMemberReconciler
from .team_pipelines import TeamPipelineReconciler
from .teams import TeamReconciler
from .transport import AuthenticatedTransport

ORGANIZATION_ENV = "BUILDKITE_ORGANIZATION"
API_TOKEN_ENV = "BUILDKITE_API_TOKEN"


class BuildkiteClient:
    """Handles API interactions with Buildkite for a single organization."""

    REST_BASE_URL = RestClient.DEFAULT_BASE_URL
    GRAPHQL_URL = GraphQLClient.DEFAULT_ENDPOINT

    def __init__(
        self,
        organization: str,
        token: str | None,
        *,
        base_url: str = REST_BASE_URL,
        graphql_url: str = GRAPHQL_URL,
        timeout: tuple[float, float] = (
            AuthenticatedTransport.CONNECT_TIMEOUT,
            AuthenticatedTransport.READ_TIMEOUT,
        ),
    ) -> None:
        if not token:
            raise AuthenticationError
        if not organization:
            raise ConfigurationError("A Buildkite organization slug is required")

        # Base configuration
        self.organization = organization

        # Wire layers
        self.transport = AuthenticatedTransport(token, timeout=timeout)
        self.rest = RestClient(self.transport, organization, base_url)
        self.graphql = GraphQLClient(self.transport, graphql_url)
        self.organization_ids = OrganizationIdCache(partial(fetch_organization_id, self.graphql))

        # Reconcilers
        self.pipelines = PipelineReconciler(self)
        self.pipeline_schedules = PipelineScheduleReconciler(self)
        self.teams = TeamReconciler(self)
        self.team_members = TeamMemberReconciler(self)
        self.team_pipelines = TeamPipelineReconciler(self)
        self.organization_members = OrganizationMemberReconciler(self)

        logging.debug("client: initialized for organization '%s'", organization)

    @classmethod
    def from_env(cls, **kwargs) -> "BuildkiteClient":  # noqa: ANN003
        """Build a client from BUILDKITE_ORGANIZATION and BUILDKITE_API_TOKEN."""
        return cls(os.getenv(ORGANIZATION_ENV, ""), os.getenv(API_TOKEN_ENV), **kwargs)

    def organization_id(self) -> str:
        """GraphQL global ID of the client's organization."""
        return self.organization_ids.resolve(self.organization)

    ### Context manager methods
    def __enter__(self) -> "BuildkiteClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Context manager exit, closing every open session."""
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP sessions."""
        self.transport.close()
