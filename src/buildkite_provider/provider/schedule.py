"""buildkite_pipeline_schedule resource. The ID is "pipelineSlug/scheduleUUID"."""

import logging

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.models import Node, PipelineSchedule

from .resource import Resource, read_or_forget
from .state import ResourceData

DEFAULTS = {
    "label": "",
    "message": "Scheduled build",
    "commit": "HEAD",
    "branch": "master",
    "env": {},
    "enabled": True,
}


def schedule_from_state(data: ResourceData) -> PipelineSchedule:
    """Build the desired PipelineSchedule from resource state."""
    return PipelineSchedule(
        id=data.get("schedule_id") or "",
        uuid=data.get("uuid") or "",
        pipeline=Node(id=data.get("pipeline_id") or "", slug=data.get("pipeline_slug") or ""),
        label=data.get("label", ""),
        cron_schedule=data.get("cron_schedule", ""),
        message=data.get("message", ""),
        commit=data.get("commit", ""),
        branch=data.get("branch", ""),
        environment=dict(data.get("env") or {}),
        enabled=data.get("enabled", True),
    )


def update_state(data: ResourceData, schedule: PipelineSchedule) -> None:
    """Record an observed PipelineSchedule in resource state."""
    data.set_id(schedule.key)
    logging.info("schedule: ID '%s'", data.id)

    data.set("schedule_id", schedule.id)
    data.set("uuid", schedule.uuid)
    data.set("created_at", schedule.created_at)
    data.set("pipeline_id", schedule.pipeline.id)
    data.set("pipeline_slug", schedule.pipeline.slug)
    data.set("label", schedule.label)
    data.set("message", schedule.message)
    data.set("cron_schedule", schedule.cron_schedule)
    data.set("commit", schedule.commit)
    data.set("branch", schedule.branch)
    data.set("env", schedule.environment)
    data.set("enabled", schedule.enabled)


### Operations
def create_schedule(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("schedule: create")
    update_state(data, client.pipeline_schedules.create(schedule_from_state(data)))


def read_schedule(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("schedule: read")
    schedule = read_or_forget(data, client.pipeline_schedules.get)
    if schedule is not None:
        update_state(data, schedule)


def update_schedule(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("schedule: update")
    update_state(data, client.pipeline_schedules.update(schedule_from_state(data)))


def delete_schedule(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("schedule: delete")
    client.pipeline_schedules.delete(data.get("schedule_id"))


PIPELINE_SCHEDULE = Resource(
    name="buildkite_pipeline_schedule",
    create=create_schedule,
    read=read_schedule,
    update=update_schedule,
    delete=delete_schedule,
    defaults=DEFAULTS,
)
