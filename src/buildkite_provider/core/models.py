"""Core data models for Buildkite resources.

This module defines the entities the reconcilers exchange with the provider
adapters. Every model is a detached snapshot of a Buildkite resource: it is
built from an API response or from host-managed state, handed across the API
boundary by value, and never shared between operations.

Classes:
    Enumerations:
        TeamPrivacy: Team visibility (VISIBLE/SECRET)
        TeamMemberRole: Role of a user inside a team (MEMBER/MAINTAINER)
        TeamPipelineAccessLevel: Access a team has on a pipeline
        OrganizationMemberRole: Role of a user inside the organization (MEMBER/ADMIN)

    References:
        Node: Identity-only reference to another resource
        User: Buildkite user as embedded in organization members

    Resources:
        Pipeline: Pipeline with either legacy steps or a YAML configuration
        Step: Legacy pipeline step
        RepositoryProvider: Source control integration of a pipeline
        Team, TeamMember, TeamPipeline, OrganizationMember, PipelineSchedule

Functions:
    env_to_list: Converts an environment map to KEY=VALUE strings
    env_from_list: Converts KEY=VALUE strings back into a map

Example:
    ```python
    from buildkite_provider.core.models import Pipeline, Step

    pipeline = Pipeline(
        name="web",
        repository="git@github.com:acme/web.git",
        steps=[Step(type="script", name="test", command="make test")],
    )
    body = pipeline.to_request(include_teams=True)
    ```

Raises:
    InvalidValueError: When an enum value is not one Buildkite accepts
    InvalidPipelineConfigurationError: When a YAML configuration cannot be parsed
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import yaml

from .exceptions import InvalidPipelineConfigurationError, InvalidValueError


class _ValueEnum(Enum):
    """Enum whose values are the strings Buildkite uses on the wire."""

    @classmethod
    def from_string(cls, value: str, attribute: str | None = None) -> "_ValueEnum":
        """Convert a string to an enum member, naming `attribute` in the error."""
        try:
            return cls(value.upper())
        except (ValueError, AttributeError) as e:
            raise InvalidValueError(attribute or cls.__name__, value, [m.value for m in cls]) from e

    def __str__(self) -> str:
        """Return the string value of the enum."""
        return self.value


class TeamPrivacy(_ValueEnum):
    """Visibility of a team inside the organization."""

    VISIBLE = "VISIBLE"
    SECRET = "SECRET"


class TeamMemberRole(_ValueEnum):
    """Role of a user inside a team. Team members are always created as MEMBER."""

    MEMBER = "MEMBER"
    MAINTAINER = "MAINTAINER"


class TeamPipelineAccessLevel(_ValueEnum):
    """Access a team has on a pipeline. Team pipelines are always created as READ_ONLY."""

    READ_ONLY = "READ_ONLY"
    BUILD_AND_READ = "BUILD_AND_READ"
    MANAGE_BUILD_AND_READ = "MANAGE_BUILD_AND_READ"


class OrganizationMemberRole(_ValueEnum):
    """Role of a user inside the organization."""

    MEMBER = "MEMBER"
    ADMIN = "ADMIN"


def env_to_list(environment: dict[str, str]) -> list[str]:
    """Convert an environment map to the KEY=VALUE list GraphQL uses."""
    return [f"{key}={value}" for key, value in environment.items()]


def env_from_list(entries: list[str] | None) -> dict[str, str]:
    """Convert KEY=VALUE strings to a map. Values may themselves contain '='."""
    result = {}
    for entry in entries or []:
        key, _, value = entry.partition("=")
        result[key] = value
    return result


@dataclass
class Node:
    """Identity-only reference to another Buildkite resource."""

    id: str = ""
    slug: str = ""


@dataclass
class User:
    """A Buildkite user."""

    id: str = ""
    name: str = ""
    email: str = ""


@dataclass
class Step:
    """
    A legacy pipeline step, owned by a Pipeline.

    Attributes:
        type: Step type tag (e.g. 'script', 'waiter', 'manual')
        name: Label shown in the Buildkite UI
        command: Command to run
        environment: Step-level environment variables
        timeout_in_minutes: Step timeout, 0 meaning no timeout
        agent_query_rules: Ordered agent targeting rules
        branch_configuration: Branch filter expression for this step
        artifact_paths: Artifact upload glob
        concurrency: Concurrency limit, 0 meaning unlimited
        parallelism: Number of parallel jobs, 0 meaning one
    """

    type: str
    name: str = ""
    command: str = ""
    environment: dict[str, str] = field(default_factory=dict)
    timeout_in_minutes: int = 0
    agent_query_rules: list[str] = field(default_factory=list)
    branch_configuration: str = ""
    artifact_paths: str = ""
    concurrency: int = 0
    parallelism: int = 0

    @classmethod
    def from_get_response(cls, data: dict[str, Any]) -> "Step":
        """Creates a Step instance from a REST pipeline response entry."""
        return cls(
            type=data["type"],
            name=data.get("name") or "",
            command=data.get("command") or "",
            environment=data.get("env") or {},
            timeout_in_minutes=data.get("timeout_in_minutes") or 0,
            agent_query_rules=data.get("agent_query_rules") or [],
            branch_configuration=data.get("branch_configuration") or "",
            artifact_paths=data.get("artifact_paths") or "",
            concurrency=data.get("concurrency") or 0,
            parallelism=data.get("parallelism") or 0,
        )

    def to_request(self) -> dict[str, Any]:
        """Builds the REST representation, leaving out unset numeric fields."""
        body: dict[str, Any] = {
            "type": self.type,
            "env": self.environment,
            "agent_query_rules": self.agent_query_rules,
            "branch_configuration": self.branch_configuration,
            "artifact_paths": self.artifact_paths,
        }
        optional = {
            "name": self.name,
            "command": self.command,
            "timeout_in_minutes": self.timeout_in_minutes,
            "concurrency": self.concurrency,
            "parallelism": self.parallelism,
        }
        body.update({key: value for key, value in optional.items() if value})
        return body


@dataclass
class RepositoryProvider:
    """Source control integration reported for a pipeline."""

    id: str = ""
    settings: dict[str, Any] = field(default_factory=dict)
    webhook_url: str = ""

    @classmethod
    def from_get_response(cls, data: dict[str, Any] | None) -> "RepositoryProvider":
        """Creates a RepositoryProvider instance from the REST 'provider' object."""
        data = data or {}
        return cls(
            id=data.get("id") or "",
            settings=data.get("settings") or {},
            webhook_url=data.get("webhook_url") or "",
        )


@dataclass
class Pipeline:
    """
    Represents a Buildkite pipeline.

    A pipeline is configured either with legacy `steps` (and `environment`) or
    with a YAML `configuration`; the two are mutually exclusive. `team_uuids`
    only takes effect when the pipeline is created. Later changes to team
    access go through TeamPipeline resources.

    Attributes:
        id: REST identifier
        slug: URL-safe identifier, used in REST paths
        name: Pipeline name
        repository: Repository URL
        description: Free-form description
        default_branch: Branch used by default for new builds
        branch_configuration: Branch filter expression
        environment: Pipeline-level environment variables
        steps: Legacy step list
        configuration: YAML step configuration
        provider: Source control integration as reported by Buildkite
        provider_settings: Desired provider settings to send on write
        team_uuids: Teams that own the pipeline on creation
        web_url, builds_url, url, badge_url, created_at: Read-only attributes
    """

    name: str = ""
    repository: str = ""
    id: str = ""
    slug: str = ""
    description: str = ""
    default_branch: str = ""
    branch_configuration: str = ""
    environment: dict[str, str] = field(default_factory=dict)
    steps: list[Step] = field(default_factory=list)
    configuration: str = ""
    provider: RepositoryProvider = field(default_factory=RepositoryProvider)
    provider_settings: dict[str, Any] = field(default_factory=dict)
    team_uuids: list[str] = field(default_factory=list)
    web_url: str = ""
    builds_url: str = ""
    url: str = ""
    badge_url: str = ""
    created_at: str = ""

    @classmethod
    def from_get_response(cls, data: dict[str, Any]) -> "Pipeline":
        """Creates a Pipeline instance from a REST API response."""
        return cls(
            id=data.get("id") or "",
            slug=data["slug"],
            name=data.get("name") or "",
            repository=data.get("repository") or "",
            description=data.get("description") or "",
            default_branch=data.get("default_branch") or "",
            branch_configuration=data.get("branch_configuration") or "",
            environment=data.get("env") or {},
            steps=[Step.from_get_response(step) for step in data.get("steps") or []],
            configuration=data.get("configuration") or "",
            provider=RepositoryProvider.from_get_response(data.get("provider")),
            web_url=data.get("web_url") or "",
            builds_url=data.get("builds_url") or "",
            url=data.get("url") or "",
            badge_url=data.get("badge_url") or "",
            created_at=data.get("created_at") or "",
        )

    @property
    def uses_configuration(self) -> bool:
        """Whether the pipeline is driven by a YAML configuration."""
        return bool(self.configuration)

    def discard_legacy_fields(self) -> None:
        """Drop steps and environment, which Buildkite still reports for YAML pipelines."""
        self.steps = []
        self.environment = {}

    def to_request(self, include_teams: bool = False) -> dict[str, Any]:
        """
        Builds the REST request body.

        The YAML configuration is never part of the REST body, it is set via
        GraphQL. Team UUIDs are only sent on creation.
        """
        body: dict[str, Any] = {
            "name": self.name,
            "repository": self.repository,
            "description": self.description,
            "branch_configuration": self.branch_configuration,
        }
        if self.default_branch:
            body["default_branch"] = self.default_branch
        if not self.uses_configuration:
            body["env"] = self.environment
            body["steps"] = [step.to_request() for step in self.steps]
        if self.provider_settings:
            body["provider_settings"] = self.provider_settings
        if include_teams and self.team_uuids:
            body["team_uuids"] = self.team_uuids
        return body

    def validate_configuration(self) -> None:
        """Check that the YAML configuration parses. Its shape is left to Buildkite."""
        try:
            yaml.safe_load(self.configuration)
        except yaml.YAMLError as e:
            raise InvalidPipelineConfigurationError(f"YAML parsing error: {e!s}") from e
        logging.debug("model: pipeline configuration for '%s' parses", self.name)


@dataclass
class Team:
    """A Buildkite team. Entirely managed through GraphQL."""

    name: str = ""
    id: str = ""
    uuid: str = ""
    slug: str = ""
    description: str = ""
    privacy: TeamPrivacy = TeamPrivacy.VISIBLE
    default_member_role: TeamMemberRole = TeamMemberRole.MEMBER
    is_default_team: bool = False
    members_can_create_pipelines: bool = False
    created_at: str = ""


@dataclass
class TeamMember:
    """Membership of a user in a team."""

    team: Node = field(default_factory=Node)
    user: Node = field(default_factory=Node)
    role: TeamMemberRole = TeamMemberRole.MEMBER
    id: str = ""
    uuid: str = ""
    created_at: str = ""


@dataclass
class TeamPipeline:
    """Access of a team to a pipeline."""

    team: Node = field(default_factory=Node)
    pipeline: Node = field(default_factory=Node)
    access_level: TeamPipelineAccessLevel = TeamPipelineAccessLevel.READ_ONLY
    id: str = ""
    uuid: str = ""
    created_at: str = ""


@dataclass
class OrganizationMember:
    """Membership of a user in the organization. Cannot be created through the API."""

    id: str = ""
    uuid: str = ""
    role: OrganizationMemberRole = OrganizationMemberRole.MEMBER
    user: User = field(default_factory=User)
    created_at: str = ""


@dataclass
class PipelineSchedule:
    """
    A cron schedule that triggers builds of a pipeline.

    Attributes:
        pipeline: Pipeline reference; the slug is needed to create a schedule
        label: Schedule description
        cron_schedule: Cron expression (GraphQL 'cronline')
        message, commit, branch: Build defaults
        environment: Build environment, a map here and a KEY=VALUE list on the wire
        enabled: Whether the schedule triggers builds
    """

    pipeline: Node = field(default_factory=Node)
    label: str = ""
    cron_schedule: str = ""
    message: str = ""
    commit: str = ""
    branch: str = ""
    environment: dict[str, str] = field(default_factory=dict)
    enabled: bool = True
    id: str = ""
    uuid: str = ""
    created_at: str = ""

    @property
    def key(self) -> str:
        """Composite key used to read the schedule back: pipelineSlug/uuid."""
        return f"{self.pipeline.slug}/{self.uuid}"
