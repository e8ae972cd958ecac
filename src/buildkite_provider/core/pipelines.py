"""Pipeline reconciler.

Pipelines span both APIs. REST reads and writes almost every field, but it
cannot set a YAML step configuration and does not report which teams own a
pipeline. GraphQL covers those two gaps.

Creation follows one of two paths, chosen by whether a YAML configuration is
present:

    NoConfig:    REST POST with the full body, legacy steps included.
    YamlConfig:  CREATE    GraphQL pipelineCreate with name, repository, YAML
                           and owning teams
                 UPDATE    REST PATCH with the remaining fields
                 SET_YAML  GraphQL pipelineUpdate with the YAML steps

The YamlConfig path is not atomic and nothing is rolled back. If UPDATE or
SET_YAML fails, the pipeline already exists in Buildkite and has to be cleaned
up by the operator; the raised error names the failed phase.

Owning teams are only sent on creation. Each initial owner gets
MANAGE_BUILD_AND_READ; later changes go through team pipeline resources.
"""

import logging
from dataclasses import replace
from enum import Enum

from .exceptions import APIError, NotFoundError
from .ids import team_global_id
from .models import Pipeline, TeamPipelineAccessLevel
from .reconciler import Reconciler
from .schemas import (
    PipelineCreateResponse,
    PipelineIdResponse,
    PipelineTeamsResponse,
    PipelineUpdateResponse,
)

PIPELINE_ID_QUERY = """
query GetPipelineId($pipelineSlug: ID!) {
  pipeline(slug: $pipelineSlug) {
    id
  }
}"""

PIPELINE_TEAMS_QUERY = """
query PipelineTeams($slug: ID!, $first: Int!) {
  pipeline(slug: $slug) {
    teams(first: $first) {
      edges {
        node {
          team {
            uuid
          }
        }
      }
    }
  }
}"""

PIPELINE_CREATE_MUTATION = """
mutation PipelineCreateRequest($pipelineCreateInput: PipelineCreateInput!) {
  pipelineCreate(input: $pipelineCreateInput) {
    pipeline {
      id
      slug
    }
  }
}"""

PIPELINE_UPDATE_MUTATION = """
mutation PipelineUpdateMutation($pipelineUpdateInput: PipelineUpdateInput!) {
  pipelineUpdate(input: $pipelineUpdateInput) {
    pipeline {
      steps {
        yaml
      }
    }
  }
}"""


class PipelineCreatePhase(Enum):
    """Phases of creating a pipeline with a YAML configuration."""

    CREATE = "create"
    UPDATE = "update"
    SET_YAML = "set_yaml"

    def __str__(self) -> str:
        """Return the string value of the enum."""
        return self.value


class PipelineReconciler(Reconciler):
    """Get/create/update/delete pipelines."""

    TEAMS_PAGE_SIZE = 100  # Teams returned by a single team lookup

    def path(self, slug: str | None = None) -> str:
        """REST path of the pipeline collection, or of one pipeline."""
        if slug is None:
            return self.rest.organization_path("pipelines")
        return self.rest.organization_path("pipelines", slug)

    ### Read
    def get(self, slug: str) -> Pipeline:
        """
        Read a pipeline and the teams that own it.

        When the pipeline uses a YAML configuration, Buildkite still reports
        steps and an environment; both are discarded.
        """
        logging.debug("pipeline: reading '%s'", slug)
        with self.error_context(f"failed to get pipeline {slug}"):
            pipeline = self.rest.get(self.path(slug), Pipeline.from_get_response)
            if pipeline.uses_configuration:
                pipeline.discard_legacy_fields()
            pipeline.team_uuids = self.team_uuids(slug)
        return pipeline

    def team_uuids(self, slug: str) -> list[str]:
        """UUIDs of the teams with access to a pipeline."""
        response = self.graphql.execute(
            PIPELINE_TEAMS_QUERY,
            {"slug": self.scoped_slug(slug), "first": self.TEAMS_PAGE_SIZE},
            PipelineTeamsResponse,
        )
        if response.pipeline is None:
            raise NotFoundError(f"pipeline {slug} not found")

        team_uuids = [edge.node.team.uuid for edge in response.pipeline.teams.edges]
        logging.debug("pipeline: '%s' team uuids: %s", slug, team_uuids)
        return team_uuids

    def node_id(self, slug: str) -> str:
        """GraphQL global ID of a pipeline."""
        response = self.graphql.execute(
            PIPELINE_ID_QUERY,
            {"pipelineSlug": self.scoped_slug(slug)},
            PipelineIdResponse,
        )
        if response.pipeline is None or not response.pipeline.id:
            raise NotFoundError(f"pipeline {slug} not found")
        return response.pipeline.id

    ### Create
    def create(self, pipeline: Pipeline) -> Pipeline:
        """Create a pipeline through whichever path its configuration requires."""
        if pipeline.uses_configuration:
            pipeline.validate_configuration()
            return self._create_with_configuration(pipeline)

        logging.info("pipeline: creating '%s' with legacy steps", pipeline.name)
        with self.error_context(f"failed to create pipeline {pipeline.name}"):
            result = self.rest.post(
                self.path(),
                pipeline.to_request(include_teams=True),
                Pipeline.from_get_response,
            )
        return self._reconcile_result(result, pipeline)

    def _create_with_configuration(self, pipeline: Pipeline) -> Pipeline:
        """Run the CREATE, UPDATE and SET_YAML phases in order."""
        desired = replace(pipeline)
        phase = PipelineCreatePhase.CREATE
        logging.info("pipeline: creating '%s' with a YAML configuration", pipeline.name)
        try:
            desired.slug = self._create_graphql(desired)
            phase = PipelineCreatePhase.UPDATE
            result = self._patch(desired)
            phase = PipelineCreatePhase.SET_YAML
            self._save_yaml(desired)
        except APIError as e:
            if phase is not PipelineCreatePhase.CREATE:
                logging.error(
                    "pipeline: '%s' was created but the %s phase failed; it must be cleaned up manually",
                    desired.slug,
                    phase,
                )
            e.add_context(f"failed to create pipeline {pipeline.name} in {phase} phase", phase=phase.value)
            raise
        return self._reconcile_result(result, desired)

    def _create_graphql(self, pipeline: Pipeline) -> str:
        """Create the pipeline with its YAML and owners, returning the new slug."""
        create_input = {
            "organizationId": self.client.organization_id(),
            "name": pipeline.name,
            "repository": {"url": pipeline.repository},
            "steps": {"yaml": pipeline.configuration},
        }
        if pipeline.team_uuids:
            create_input["teams"] = [
                {
                    "id": team_global_id(team_uuid),
                    "accessLevel": TeamPipelineAccessLevel.MANAGE_BUILD_AND_READ.value,
                }
                for team_uuid in pipeline.team_uuids
            ]

        response = self.graphql.execute(
            PIPELINE_CREATE_MUTATION,
            {"pipelineCreateInput": create_input},
            PipelineCreateResponse,
        )
        return response.pipeline_create.pipeline.slug

    ### Update
    def update(self, pipeline: Pipeline) -> Pipeline:
        """Update a pipeline. Owning teams are never changed here."""
        if pipeline.uses_configuration:
            pipeline.validate_configuration()

        message = f"failed to update pipeline {pipeline.slug}"
        with self.error_context(message, phase=PipelineCreatePhase.UPDATE.value):
            result = self._patch(pipeline)
        if pipeline.uses_configuration:
            with self.error_context(message, phase=PipelineCreatePhase.SET_YAML.value):
                self._save_yaml(pipeline)
        return self._reconcile_result(result, pipeline)

    def _patch(self, pipeline: Pipeline) -> Pipeline:
        return self.rest.patch(self.path(pipeline.slug), pipeline.to_request(), Pipeline.from_get_response)

    def _save_yaml(self, pipeline: Pipeline) -> None:
        """Set the YAML steps, which only GraphQL can do."""
        with self.error_context(f"failed to get GraphQL node id for {pipeline.slug}"):
            node_id = self.node_id(pipeline.slug)

        self.graphql.execute(
            PIPELINE_UPDATE_MUTATION,
            {"pipelineUpdateInput": {"id": node_id, "steps": {"yaml": pipeline.configuration}}},
            PipelineUpdateResponse,
        )

    @staticmethod
    def _reconcile_result(result: Pipeline, desired: Pipeline) -> Pipeline:
        """
        Carry over what the REST response cannot report.

        REST does not return owning teams, and a PATCH response predates the
        YAML set afterwards.
        """
        result.team_uuids = list(desired.team_uuids)
        if desired.uses_configuration:
            result.configuration = desired.configuration
            result.discard_legacy_fields()
        return result

    ### Delete
    def delete(self, slug: str) -> None:
        """Delete a pipeline."""
        logging.info("pipeline: deleting '%s'", slug)
        with self.error_context(f"failed to delete pipeline {slug}"):
            self.rest.delete(self.path(slug))
