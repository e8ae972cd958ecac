"""Core subpackage for the Buildkite provider.

This subpackage provides the client layer that every provider resource goes
through. It handles authentication, the REST and GraphQL wire formats, error
classification, and the per-resource reconciliation logic.

Modules:
    client: BuildkiteClient facade wiring everything together
    transport: Authenticated HTTP transport with status classification
    rest: REST request/response codec
    graphql: GraphQL dispatcher
    schemas: Pydantic models for GraphQL responses
    organization: Organization identity cache
    ids: Slug, UUID and global ID translation
    models: Resource entities and enumerations
    exceptions: Error types and the ErrorKind taxonomy

Components:
    API Client:
        BuildkiteClient: Entry point holding one reconciler per resource kind

    Reconcilers:
        PipelineReconciler: REST plus GraphQL for YAML steps and owning teams
        PipelineScheduleReconciler: Cron schedules of a pipeline
        TeamReconciler, TeamMemberReconciler, TeamPipelineReconciler: Teams
        OrganizationMemberReconciler: Organization membership

    Resource Models:
        Pipeline, Step, PipelineSchedule, Team, TeamMember, TeamPipeline,
        OrganizationMember

Example:
    >>> from buildkite_provider.core import BuildkiteClient, is_not_found
    >>>
    >>> with BuildkiteClient.from_env() as client:
    ...     try:
    ...         pipeline = client.pipelines.get("web")
    ...     except Exception as e:
    ...         if not is_not_found(e):
    ...             raise
"""

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import (
    APIError,
    AuthenticationError,
    BackendInvariantError,
    BuildkiteProviderError,
    ConfigurationError,
    DecodeError,
    ErrorKind,
    GraphQLError,
    HTTPStatusError,
    InvalidPipelineConfigurationError,
    InvalidValueError,
    NotFoundError,
    TransportError,
    is_not_found,
)
from buildkite_provider.core.models import (
    Node,
    OrganizationMember,
    OrganizationMemberRole,
    Pipeline,
    PipelineSchedule,
    RepositoryProvider,
    Step,
    Team,
    TeamMember,
    TeamMemberRole,
    TeamPipeline,
    TeamPipelineAccessLevel,
    TeamPrivacy,
    User,
)
from buildkite_provider.core.pipelines import PipelineCreatePhase

__all__ = [  # noqa: RUF022
    # Main components
    "BuildkiteClient",
    "PipelineCreatePhase",
    # Resource models
    "Node",
    "OrganizationMember",
    "Pipeline",
    "PipelineSchedule",
    "RepositoryProvider",
    "Step",
    "Team",
    "TeamMember",
    "TeamPipeline",
    "User",
    # Enumerations
    "OrganizationMemberRole",
    "TeamMemberRole",
    "TeamPipelineAccessLevel",
    "TeamPrivacy",
    # Exceptions
    "APIError",
    "AuthenticationError",
    "BackendInvariantError",
    "BuildkiteProviderError",
    "ConfigurationError",
    "DecodeError",
    "ErrorKind",
    "GraphQLError",
    "HTTPStatusError",
    "InvalidPipelineConfigurationError",
    "InvalidValueError",
    "NotFoundError",
    "TransportError",
    "is_not_found",
]
