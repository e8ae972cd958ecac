"""Team pipeline reconciler.

Same shape as team members: the association is always created READ_ONLY and a
higher access level takes a second call.
"""

import logging

from .exceptions import NotFoundError
from .models import TeamPipeline, TeamPipelineAccessLevel
from .reconciler import Reconciler
from .schemas import (
    TeamPipelineCreateResponse,
    TeamPipelineDeleteResponse,
    TeamPipelineResponse,
    TeamPipelineUpdateResponse,
)

TEAM_PIPELINE_FIELDS = """
      id
      uuid
      accessLevel
      createdAt
      team {
        id
      }
      pipeline {
        id
        slug
      }"""

TEAM_PIPELINE_QUERY = f"""
query GetTeamPipeline($teamPipelineId: ID!) {{
  teamPipeline: node(id: $teamPipelineId) {{
    ... on TeamPipeline {{{TEAM_PIPELINE_FIELDS}
    }}
  }}
}}"""

TEAM_PIPELINE_CREATE_MUTATION = f"""
mutation TeamPipelineCreate($input: TeamPipelineCreateInput!) {{
  teamPipelineCreate(input: $input) {{
    teamPipelineEdge {{
      node {{{TEAM_PIPELINE_FIELDS}
      }}
    }}
  }}
}}"""

TEAM_PIPELINE_UPDATE_MUTATION = f"""
mutation TeamPipelineUpdate($input: TeamPipelineUpdateInput!) {{
  teamPipelineUpdate(input: $input) {{
    teamPipeline {{{TEAM_PIPELINE_FIELDS}
    }}
  }}
}}"""

TEAM_PIPELINE_DELETE_MUTATION = """
mutation TeamPipelineDelete($input: TeamPipelineDeleteInput!) {
  teamPipelineDelete(input: $input) {
    deletedTeamPipelineID
  }
}"""


class TeamPipelineReconciler(Reconciler):
    """Get/create/update/delete team access to pipelines."""

    DEFAULT_ACCESS_LEVEL = TeamPipelineAccessLevel.READ_ONLY

    def get(self, team_pipeline_id: str) -> TeamPipeline:
        """Read a team pipeline by global ID."""
        with self.error_context(f"failed to get team pipeline {team_pipeline_id}"):
            response = self.graphql.execute(
                TEAM_PIPELINE_QUERY,
                {"teamPipelineId": team_pipeline_id},
                TeamPipelineResponse,
            )
            if response.team_pipeline is None:
                raise NotFoundError(f"team pipeline {team_pipeline_id} not found")
        return response.team_pipeline.to_team_pipeline()

    def create(self, team_pipeline: TeamPipeline) -> TeamPipeline:
        """
        Give a team access to a pipeline.

        The pipeline may be referenced by slug only; its global ID is then
        looked up first.
        """
        pipeline = team_pipeline.pipeline
        message = f"failed to create team pipeline for pipeline {pipeline.slug or pipeline.id}"
        logging.info("team: granting team '%s' access to pipeline '%s'", team_pipeline.team.id, pipeline.slug)
        with self.error_context(message):
            pipeline_id = pipeline.id or self.client.pipelines.node_id(pipeline.slug)
            response = self.graphql.execute(
                TEAM_PIPELINE_CREATE_MUTATION,
                {"input": {"teamID": team_pipeline.team.id, "pipelineID": pipeline_id}},
                TeamPipelineCreateResponse,
            )
        created = response.team_pipeline_create.team_pipeline_edge.node.to_team_pipeline()

        if team_pipeline.access_level is self.DEFAULT_ACCESS_LEVEL:
            return created

        created.access_level = team_pipeline.access_level
        with self.error_context(message, phase="update"):
            return self._update_access_level(created)

    def update(self, team_pipeline: TeamPipeline) -> TeamPipeline:
        """Change the access level of a team on a pipeline."""
        with self.error_context(f"failed to update team pipeline {team_pipeline.id}"):
            return self._update_access_level(team_pipeline)

    def _update_access_level(self, team_pipeline: TeamPipeline) -> TeamPipeline:
        logging.debug("team: setting access level of '%s' to %s", team_pipeline.id, team_pipeline.access_level)
        response = self.graphql.execute(
            TEAM_PIPELINE_UPDATE_MUTATION,
            {"input": {"id": team_pipeline.id, "accessLevel": team_pipeline.access_level.value}},
            TeamPipelineUpdateResponse,
        )
        return response.team_pipeline_update.team_pipeline.to_team_pipeline()

    def delete(self, team_pipeline_id: str) -> None:
        """Revoke a team's access to a pipeline."""
        logging.info("team: deleting team pipeline '%s'", team_pipeline_id)
        with self.error_context(f"failed to delete team pipeline {team_pipeline_id}"):
            self.graphql.execute(
                TEAM_PIPELINE_DELETE_MUTATION,
                {"input": {"id": team_pipeline_id}},
                TeamPipelineDeleteResponse,
            )
