"""Buildkite provider client layer.

Manages Buildkite pipelines, pipeline schedules, teams, team memberships, team
pipeline access and organization members on behalf of an infrastructure
provisioning host. Operations go through the Buildkite REST API
(https://api.buildkite.com/v2) and GraphQL API (https://graphql.buildkite.com/v1).

Package Structure:
    core: API client and per-resource reconciliation
        - client: BuildkiteClient facade
        - transport: Authenticated HTTP transport and status classification
        - rest, graphql: Wire codecs for both APIs
        - pipelines, pipeline_schedules, teams, team_members,
          team_pipelines, organization_members: Reconcilers
        - models: Resource entities and enumerations
        - exceptions: Error types and the ErrorKind taxonomy

    provider: Host-facing resource adapters
        - config: Provider configuration and logging setup
        - state: Host-managed resource state
        - pipeline, schedule, team, organization: Resource types

Components:
    Core API:
        BuildkiteClient: Entry point for every resource operation

    Resource Models:
        Pipeline: Pipeline with legacy steps or a YAML configuration
        PipelineSchedule: Cron schedule of a pipeline
        Team, TeamMember, TeamPipeline: Teams and what they can access
        OrganizationMember: Organization membership

Examples:
    Programmatic Usage:
        ```python
        import os
        from buildkite_provider import BuildkiteClient, Pipeline, is_not_found

        with BuildkiteClient(
            organization=os.getenv("BUILDKITE_ORGANIZATION"),
            token=os.getenv("BUILDKITE_API_TOKEN"),
        ) as client:
            pipeline = client.pipelines.create(
                Pipeline(
                    name="web",
                    repository="git@github.com:acme/web.git",
                    configuration="steps:\\n  - command: make test\\n",
                    team_uuids=["6f1b1d3c-...."],
                )
            )

            try:
                client.pipelines.get("legacy")
            except Exception as e:
                if not is_not_found(e):
                    raise
        ```

    Provider Usage:
        ```python
        from buildkite_provider.provider import RESOURCES, ProviderConfig, configure_logging

        configure_logging()
        client = ProviderConfig.from_env().create_client()

        resource = RESOURCES["buildkite_pipeline_schedule"]
        data = resource.new_state({"pipeline_slug": "web", "cron_schedule": "0 * * * *"})
        resource.create(data, client)
        ```
"""

from buildkite_provider.core import (
    APIError,
    BuildkiteClient,
    ErrorKind,
    NotFoundError,
    OrganizationMember,
    Pipeline,
    PipelineSchedule,
    Step,
    Team,
    TeamMember,
    TeamPipeline,
    is_not_found,
)
from buildkite_provider.version import __version__

__all__ = [
    "APIError",
    "BuildkiteClient",
    "ErrorKind",
    "NotFoundError",
    "OrganizationMember",
    "Pipeline",
    "PipelineSchedule",
    "Step",
    "Team",
    "TeamMember",
    "TeamPipeline",
    "__version__",
    "is_not_found",
]
