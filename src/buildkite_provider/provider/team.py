"""Team resources: buildkite_team, buildkite_team_member and buildkite_team_pipeline.

Teams are identified by slug. Team members and team pipelines are identified
by their GraphQL global ID.
"""

import logging

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.models import (
    Node,
    Team,
    TeamMember,
    TeamMemberRole,
    TeamPipeline,
    TeamPipelineAccessLevel,
    TeamPrivacy,
)

from .resource import Resource, read_or_forget
from .state import ResourceData

TEAM_DEFAULTS = {
    "description": "",
    "privacy": TeamPrivacy.VISIBLE.value,
    "default_member_role": TeamMemberRole.MEMBER.value,
    "is_default_team": False,
    "members_can_create_pipelines": False,
}
TEAM_MEMBER_DEFAULTS = {"role": TeamMemberRole.MEMBER.value}
TEAM_PIPELINE_DEFAULTS = {"access_level": TeamPipelineAccessLevel.READ_ONLY.value}


### buildkite_team
def team_from_state(data: ResourceData) -> Team:
    """Build the desired Team from resource state."""
    return Team(
        id=data.get("team_id") or "",
        uuid=data.get("uuid") or "",
        slug=data.get("slug") or data.id,
        name=data.get("name", ""),
        description=data.get("description", ""),
        privacy=TeamPrivacy.from_string(data.get("privacy"), "privacy"),
        default_member_role=TeamMemberRole.from_string(data.get("default_member_role"), "default_member_role"),
        is_default_team=data.get("is_default_team", False),
        members_can_create_pipelines=data.get("members_can_create_pipelines", False),
    )


def update_team_state(data: ResourceData, team: Team) -> None:
    """Record an observed Team in resource state."""
    data.set_id(team.slug)
    logging.info("team: ID '%s'", data.id)

    data.set("team_id", team.id)
    data.set("uuid", team.uuid)
    data.set("slug", team.slug)
    data.set("name", team.name)
    data.set("description", team.description)
    data.set("created_at", team.created_at)
    data.set("privacy", team.privacy.value)
    data.set("is_default_team", team.is_default_team)
    data.set("default_member_role", team.default_member_role.value)
    data.set("members_can_create_pipelines", team.members_can_create_pipelines)


def create_team(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: create")
    update_team_state(data, client.teams.create(team_from_state(data)))


def read_team(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: read")
    team = read_or_forget(data, client.teams.get)
    if team is not None:
        update_team_state(data, team)


def update_team(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: update")
    update_team_state(data, client.teams.update(team_from_state(data)))


def delete_team(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: delete")
    client.teams.delete(data.get("team_id"))


### buildkite_team_member
def team_member_from_state(data: ResourceData) -> TeamMember:
    """Build the desired TeamMember from resource state."""
    return TeamMember(
        id=data.id,
        uuid=data.get("uuid") or "",
        role=TeamMemberRole.from_string(data.get("role"), "role"),
        team=Node(id=data.get("team_id", "")),
        user=Node(id=data.get("user_id", "")),
    )


def update_team_member_state(data: ResourceData, member: TeamMember) -> None:
    """Record an observed TeamMember in resource state."""
    data.set_id(member.id)
    logging.info("team: member ID '%s'", data.id)

    data.set("uuid", member.uuid)
    data.set("role", member.role.value)
    data.set("created_at", member.created_at)
    data.set("team_id", member.team.id)
    data.set("user_id", member.user.id)


def create_team_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: create member")
    update_team_member_state(data, client.team_members.create(team_member_from_state(data)))


def read_team_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: read member")
    member = read_or_forget(data, client.team_members.get)
    if member is not None:
        update_team_member_state(data, member)


def update_team_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: update member")
    update_team_member_state(data, client.team_members.update(team_member_from_state(data)))


def delete_team_member(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: delete member")
    client.team_members.delete(data.id)


### buildkite_team_pipeline
def team_pipeline_from_state(data: ResourceData) -> TeamPipeline:
    """Build the desired TeamPipeline from resource state."""
    return TeamPipeline(
        id=data.id,
        uuid=data.get("uuid") or "",
        access_level=TeamPipelineAccessLevel.from_string(data.get("access_level"), "access_level"),
        team=Node(id=data.get("team_id", "")),
        pipeline=Node(id=data.get("pipeline_id") or "", slug=data.get("pipeline_slug") or ""),
    )


def update_team_pipeline_state(data: ResourceData, team_pipeline: TeamPipeline) -> None:
    """Record an observed TeamPipeline in resource state."""
    data.set_id(team_pipeline.id)
    logging.info("team: pipeline ID '%s'", data.id)

    data.set("uuid", team_pipeline.uuid)
    data.set("access_level", team_pipeline.access_level.value)
    data.set("created_at", team_pipeline.created_at)
    data.set("team_id", team_pipeline.team.id)
    data.set("pipeline_id", team_pipeline.pipeline.id)
    data.set("pipeline_slug", team_pipeline.pipeline.slug)


def create_team_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: create pipeline access")
    update_team_pipeline_state(data, client.team_pipelines.create(team_pipeline_from_state(data)))


def read_team_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: read pipeline access")
    team_pipeline = read_or_forget(data, client.team_pipelines.get)
    if team_pipeline is not None:
        update_team_pipeline_state(data, team_pipeline)


def update_team_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: update pipeline access")
    update_team_pipeline_state(data, client.team_pipelines.update(team_pipeline_from_state(data)))


def delete_team_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("team: delete pipeline access")
    client.team_pipelines.delete(data.id)


TEAM = Resource(
    name="buildkite_team",
    create=create_team,
    read=read_team,
    update=update_team,
    delete=delete_team,
    defaults=TEAM_DEFAULTS,
)

TEAM_MEMBER = Resource(
    name="buildkite_team_member",
    create=create_team_member,
    read=read_team_member,
    update=update_team_member,
    delete=delete_team_member,
    defaults=TEAM_MEMBER_DEFAULTS,
)

TEAM_PIPELINE = Resource(
    name="buildkite_team_pipeline",
    create=create_team_pipeline,
    read=read_team_pipeline,
    update=update_team_pipeline,
    delete=delete_team_pipeline,
    defaults=TEAM_PIPELINE_DEFAULTS,
)
