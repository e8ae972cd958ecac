"""Pydantic models for the `data` payload of each GraphQL operation.

There is one response model per query or mutation, mirroring the selection set
of its document. Identity fields and enum values are required and validated,
so a response that does not match the document fails loudly with a
DecodeError instead of producing a half-empty entity. Entities that may be
missing (lookups by slug or by node ID) are typed as optional; reconcilers turn
a missing entity into NotFoundError.

Node models convert to the entities in models.py through their `to_*` methods.
"""

from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import (
    Node,
    OrganizationMember,
    OrganizationMemberRole,
    PipelineSchedule,
    Team,
    TeamMember,
    TeamMemberRole,
    TeamPipeline,
    TeamPipelineAccessLevel,
    TeamPrivacy,
    User,
    env_from_list,
)

NodeT = TypeVar("NodeT")


def empty_as_none(value: Any) -> Any:
    """`node(id:)` returns {} when the ID belongs to another type; treat it as missing."""
    return None if value == {} else value


class GraphQLModel(BaseModel):
    """Base model: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Edge(GraphQLModel, Generic[NodeT]):
    node: NodeT


class Connection(GraphQLModel, Generic[NodeT]):
    edges: list[Edge[NodeT]] = Field(default_factory=list)


### Shared references
class NodeRef(GraphQLModel):
    id: str

    def to_node(self) -> Node:
        """Convert to a Node reference."""
        return Node(id=self.id)


class SluggedNodeRef(NodeRef):
    slug: str

    def to_node(self) -> Node:
        """Convert to a Node reference, keeping the slug."""
        return Node(id=self.id, slug=self.slug)


class UserNode(GraphQLModel):
    id: str
    name: str | None = None
    email: str | None = None


### Organization
class OrganizationIdResponse(GraphQLModel):
    organization: NodeRef | None = None


### Pipelines
class PipelineIdResponse(GraphQLModel):
    pipeline: NodeRef | None = None


class TeamUUIDRef(GraphQLModel):
    uuid: str


class PipelineTeamAssociation(GraphQLModel):
    team: TeamUUIDRef


class PipelineTeams(GraphQLModel):
    teams: Connection[PipelineTeamAssociation]


class PipelineTeamsResponse(GraphQLModel):
    pipeline: PipelineTeams | None = None


class PipelineCreatePayload(GraphQLModel):
    pipeline: SluggedNodeRef


class PipelineCreateResponse(GraphQLModel):
    pipeline_create: PipelineCreatePayload


class PipelineYamlSteps(GraphQLModel):
    yaml: str | None = None


class PipelineStepsRef(GraphQLModel):
    steps: PipelineYamlSteps | None = None


class PipelineUpdatePayload(GraphQLModel):
    pipeline: PipelineStepsRef


class PipelineUpdateResponse(GraphQLModel):
    pipeline_update: PipelineUpdatePayload


### Teams
class TeamNode(GraphQLModel):
    id: str
    uuid: str
    slug: str
    name: str
    description: str | None = None
    created_at: str | None = None
    privacy: TeamPrivacy
    is_default_team: bool = False
    default_member_role: TeamMemberRole
    members_can_create_pipelines: bool = False

    def to_team(self) -> Team:
        """Convert to a Team entity."""
        return Team(
            id=self.id,
            uuid=self.uuid,
            slug=self.slug,
            name=self.name,
            description=self.description or "",
            created_at=self.created_at or "",
            privacy=self.privacy,
            is_default_team=self.is_default_team,
            default_member_role=self.default_member_role,
            members_can_create_pipelines=self.members_can_create_pipelines,
        )


class TeamResponse(GraphQLModel):
    team: TeamNode | None = None


class TeamCreatePayload(GraphQLModel):
    team_edge: Edge[TeamNode]


class TeamCreateResponse(GraphQLModel):
    team_create: TeamCreatePayload


class TeamUpdatePayload(GraphQLModel):
    team: TeamNode


class TeamUpdateResponse(GraphQLModel):
    team_update: TeamUpdatePayload


class TeamDeletePayload(GraphQLModel):
    deleted_team_id: str = Field(alias="deletedTeamID")


class TeamDeleteResponse(GraphQLModel):
    team_delete: TeamDeletePayload


### Team members
class TeamMemberNode(GraphQLModel):
    id: str
    uuid: str
    role: TeamMemberRole
    created_at: str | None = None
    team: NodeRef
    user: NodeRef

    def to_team_member(self) -> TeamMember:
        """Convert to a TeamMember entity."""
        return TeamMember(
            id=self.id,
            uuid=self.uuid,
            role=self.role,
            created_at=self.created_at or "",
            team=self.team.to_node(),
            user=self.user.to_node(),
        )


class TeamMemberResponse(GraphQLModel):
    team_member: Annotated[TeamMemberNode | None, BeforeValidator(empty_as_none)] = None


class TeamMemberCreatePayload(GraphQLModel):
    team_member_edge: Edge[TeamMemberNode]


class TeamMemberCreateResponse(GraphQLModel):
    team_member_create: TeamMemberCreatePayload


class TeamMemberUpdatePayload(GraphQLModel):
    team_member: TeamMemberNode


class TeamMemberUpdateResponse(GraphQLModel):
    team_member_update: TeamMemberUpdatePayload


class TeamMemberDeletePayload(GraphQLModel):
    deleted_team_member_id: str = Field(alias="deletedTeamMemberID")


class TeamMemberDeleteResponse(GraphQLModel):
    team_member_delete: TeamMemberDeletePayload


### Team pipelines
class TeamPipelineNode(GraphQLModel):
    id: str
    uuid: str
    access_level: TeamPipelineAccessLevel
    created_at: str | None = None
    team: NodeRef
    pipeline: SluggedNodeRef

    def to_team_pipeline(self) -> TeamPipeline:
        """Convert to a TeamPipeline entity."""
        return TeamPipeline(
            id=self.id,
            uuid=self.uuid,
            access_level=self.access_level,
            created_at=self.created_at or "",
            team=self.team.to_node(),
            pipeline=self.pipeline.to_node(),
        )


class TeamPipelineResponse(GraphQLModel):
    team_pipeline: Annotated[TeamPipelineNode | None, BeforeValidator(empty_as_none)] = None


class TeamPipelineCreatePayload(GraphQLModel):
    team_pipeline_edge: Edge[TeamPipelineNode]


class TeamPipelineCreateResponse(GraphQLModel):
    team_pipeline_create: TeamPipelineCreatePayload


class TeamPipelineUpdatePayload(GraphQLModel):
    team_pipeline: TeamPipelineNode


class TeamPipelineUpdateResponse(GraphQLModel):
    team_pipeline_update: TeamPipelineUpdatePayload


class TeamPipelineDeletePayload(GraphQLModel):
    deleted_team_pipeline_id: str = Field(alias="deletedTeamPipelineID")


class TeamPipelineDeleteResponse(GraphQLModel):
    team_pipeline_delete: TeamPipelineDeletePayload


### Organization members
class OrganizationMemberNode(GraphQLModel):
    id: str
    uuid: str
    role: OrganizationMemberRole
    created_at: str | None = None
    user: UserNode

    def to_organization_member(self) -> OrganizationMember:
        """Convert to an OrganizationMember entity."""
        return OrganizationMember(
            id=self.id,
            uuid=self.uuid,
            role=self.role,
            created_at=self.created_at or "",
            user=User(id=self.user.id, name=self.user.name or "", email=self.user.email or ""),
        )


class OrganizationMemberResponse(GraphQLModel):
    organization_member: OrganizationMemberNode | None = None


class OrganizationMemberUpdatePayload(GraphQLModel):
    organization_member: OrganizationMemberNode


class OrganizationMemberUpdateResponse(GraphQLModel):
    organization_member_update: OrganizationMemberUpdatePayload


class OrganizationMemberDeletePayload(GraphQLModel):
    deleted_organization_member_id: str = Field(alias="deletedOrganizationMemberID")


class OrganizationMemberDeleteResponse(GraphQLModel):
    organization_member_delete: OrganizationMemberDeletePayload


### Pipeline schedules
class PipelineScheduleNode(GraphQLModel):
    id: str
    uuid: str
    label: str | None = None
    cronline: str
    message: str | None = None
    commit: str | None = None
    branch: str | None = None
    env: list[str] | None = None
    enabled: bool
    created_at: str | None = None
    pipeline: SluggedNodeRef

    def to_pipeline_schedule(self) -> PipelineSchedule:
        """Convert to a PipelineSchedule entity, turning the env list into a map."""
        return PipelineSchedule(
            id=self.id,
            uuid=self.uuid,
            label=self.label or "",
            cron_schedule=self.cronline,
            message=self.message or "",
            commit=self.commit or "",
            branch=self.branch or "",
            environment=env_from_list(self.env),
            enabled=self.enabled,
            created_at=self.created_at or "",
            pipeline=self.pipeline.to_node(),
        )


class PipelineScheduleResponse(GraphQLModel):
    pipeline_schedule: PipelineScheduleNode | None = None


class PipelineScheduleCreatePayload(GraphQLModel):
    pipeline_schedule_edge: Edge[PipelineScheduleNode]


class PipelineScheduleCreateResponse(GraphQLModel):
    pipeline_schedule_create: PipelineScheduleCreatePayload


class PipelineScheduleUpdatePayload(GraphQLModel):
    pipeline_schedule: PipelineScheduleNode


class PipelineScheduleUpdateResponse(GraphQLModel):
    pipeline_schedule_update: PipelineScheduleUpdatePayload


class PipelineScheduleDeletePayload(GraphQLModel):
    deleted_pipeline_schedule_id: str = Field(alias="deletedPipelineScheduleID")


class PipelineScheduleDeleteResponse(GraphQLModel):
    pipeline_schedule_delete: PipelineScheduleDeletePayload
