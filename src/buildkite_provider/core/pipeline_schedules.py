"""Pipeline schedule reconciler.

Schedules are keyed by "pipelineSlug/scheduleUUID", which is what
`pipelineSchedule(slug:)` needs once prefixed with the organization. The
environment is a map on the entity. GraphQL reads it back as a list of
KEY=VALUE strings, and the mutations take the same entries joined by
newlines.
"""

import logging
from typing import Any

from .exceptions import NotFoundError
from .ids import split_schedule_key
from .models import PipelineSchedule, env_to_list
from .reconciler import Reconciler
from .schemas import (
    PipelineScheduleCreateResponse,
    PipelineScheduleDeleteResponse,
    PipelineScheduleResponse,
    PipelineScheduleUpdateResponse,
)

PIPELINE_SCHEDULE_FIELDS = """
      id
      uuid
      label
      cronline
      message
      commit
      branch
      env
      enabled
      createdAt
      pipeline {
        id
        slug
      }"""

PIPELINE_SCHEDULE_QUERY = f"""
query GetPipelineSchedule($slug: ID!) {{
  pipelineSchedule(slug: $slug) {{{PIPELINE_SCHEDULE_FIELDS}
  }}
}}"""

PIPELINE_SCHEDULE_CREATE_MUTATION = f"""
mutation PipelineScheduleCreate($input: PipelineScheduleCreateInput!) {{
  pipelineScheduleCreate(input: $input) {{
    pipelineScheduleEdge {{
      node {{{PIPELINE_SCHEDULE_FIELDS}
      }}
    }}
  }}
}}"""

PIPELINE_SCHEDULE_UPDATE_MUTATION = f"""
mutation PipelineScheduleUpdate($input: PipelineScheduleUpdateInput!) {{
  pipelineScheduleUpdate(input: $input) {{
    pipelineSchedule {{{PIPELINE_SCHEDULE_FIELDS}
    }}
  }}
}}"""

PIPELINE_SCHEDULE_DELETE_MUTATION = """
mutation PipelineScheduleDelete($input: PipelineScheduleDeleteInput!) {
  pipelineScheduleDelete(input: $input) {
    deletedPipelineScheduleID
  }
}"""


def schedule_input(schedule: PipelineSchedule) -> dict[str, Any]:
    """Mutation input fields shared by create and update."""
    return {
        "label": schedule.label,
        "cronline": schedule.cron_schedule,
        "message": schedule.message,
        "commit": schedule.commit,
        "branch": schedule.branch,
        "env": "\n".join(env_to_list(schedule.environment)),
        "enabled": schedule.enabled,
    }


class PipelineScheduleReconciler(Reconciler):
    """Get/create/update/delete pipeline schedules."""

    def get(self, key: str) -> PipelineSchedule:
        """Read a schedule by its pipelineSlug/uuid key."""
        pipeline_slug, schedule_uuid = split_schedule_key(key)
        logging.debug("schedule: reading '%s'", key)
        with self.error_context(f"failed to get pipeline schedule {key}"):
            response = self.graphql.execute(
                PIPELINE_SCHEDULE_QUERY,
                {"slug": self.scoped_slug(pipeline_slug, schedule_uuid)},
                PipelineScheduleResponse,
            )
            if response.pipeline_schedule is None:
                raise NotFoundError(f"pipeline schedule {key} not found")
        return response.pipeline_schedule.to_pipeline_schedule()

    def create(self, schedule: PipelineSchedule) -> PipelineSchedule:
        """Create a schedule on the pipeline referenced by slug."""
        pipeline_slug = schedule.pipeline.slug
        logging.info("schedule: creating '%s' on pipeline '%s'", schedule.label, pipeline_slug)
        with self.error_context(f"failed to create pipeline schedule on {pipeline_slug}"):
            pipeline_id = schedule.pipeline.id or self.client.pipelines.node_id(pipeline_slug)
            create_input = {"pipelineID": pipeline_id, **schedule_input(schedule)}
            response = self.graphql.execute(
                PIPELINE_SCHEDULE_CREATE_MUTATION,
                {"input": create_input},
                PipelineScheduleCreateResponse,
            )
        return response.pipeline_schedule_create.pipeline_schedule_edge.node.to_pipeline_schedule()

    def update(self, schedule: PipelineSchedule) -> PipelineSchedule:
        """Update a schedule by global ID."""
        logging.info("schedule: updating '%s'", schedule.id)
        with self.error_context(f"failed to update pipeline schedule {schedule.id}"):
            update_input = {"id": schedule.id, **schedule_input(schedule)}
            response = self.graphql.execute(
                PIPELINE_SCHEDULE_UPDATE_MUTATION,
                {"input": update_input},
                PipelineScheduleUpdateResponse,
            )
        return response.pipeline_schedule_update.pipeline_schedule.to_pipeline_schedule()

    def delete(self, schedule_id: str) -> None:
        """Delete a schedule by global ID."""
        logging.info("schedule: deleting '%s'", schedule_id)
        with self.error_context(f"failed to delete pipeline schedule {schedule_id}"):
            self.graphql.execute(
                PIPELINE_SCHEDULE_DELETE_MUTATION,
                {"input": {"id": schedule_id}},
                PipelineScheduleDeleteResponse,
            )
