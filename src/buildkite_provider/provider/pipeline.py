"""buildkite_pipeline resource.

Maps the pipeline attributes kept in host state to Pipeline entities and back.
The resource ID is the pipeline slug.

Repository provider settings are exposed as a single-element list under either
`github_settings` or `bitbucket_settings`, depending on the provider Buildkite
reports. Only keys the block knows are kept on read, and `repository` and
`account` are never kept. On write, settings are only sent when one of the two
blocks changed, and then only the keys set to non-zero values.
"""

import logging
from typing import Any

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.models import Pipeline, Step

from .resource import Resource, read_or_forget
from .state import ResourceData, is_set

GITHUB_SETTINGS = "github_settings"
BITBUCKET_SETTINGS = "bitbucket_settings"

GITHUB_SETTINGS_KEYS = (
    "trigger_mode",
    "build_pull_requests",
    "pull_request_branch_filter_enabled",
    "pull_request_branch_filter_configuration",
    "skip_pull_request_builds_for_existing_commits",
    "build_pull_request_forks",
    "prefix_pull_request_fork_branch_names",
    "build_tags",
    "publish_commit_status",
    "publish_commit_status_per_step",
    "publish_blocked_as_pending",
    "separate_pull_request_statuses",
    "filter_enabled",
)

BITBUCKET_SETTINGS_KEYS = (
    "trigger_mode",
    "build_pull_requests",
    "pull_request_branch_filter_enabled",
    "pull_request_branch_filter_configuration",
    "skip_pull_request_builds_for_existing_commits",
    "prefix_pull_request_fork_branch_names",
    "build_tags",
    "publish_commit_status",
    "publish_commit_status_per_step",
)

SETTINGS_KEYS = {GITHUB_SETTINGS: GITHUB_SETTINGS_KEYS, BITBUCKET_SETTINGS: BITBUCKET_SETTINGS_KEYS}
PROVIDER_SETTINGS_BLOCKS = {"github": GITHUB_SETTINGS, "bitbucket": BITBUCKET_SETTINGS}
EXCLUDED_SETTINGS = ("repository", "account")

DEFAULTS = {
    "default_branch": "master",
    "description": "",
    "branch_configuration": "",
    "env": {},
    "configuration": "",
    "team_uuids": [],
    "step": [],
}


def filter_provider_settings(block: str, settings: dict[str, Any]) -> list[dict[str, Any]]:
    """Keep only the settings `block` knows about, as a single-element list."""
    allowed = SETTINGS_KEYS[block]
    result = {}
    for key, value in settings.items():
        if key in EXCLUDED_SETTINGS:
            continue
        if key not in allowed:
            logging.debug("pipeline: '%s.0.%s' is not a known setting", block, key)
            continue
        result[key] = value
    return [result]


def provider_settings_from_state(data: ResourceData) -> dict[str, Any]:
    """Provider settings to send, or an empty dict when neither block changed."""
    if not (data.has_change(GITHUB_SETTINGS) or data.has_change(BITBUCKET_SETTINGS)):
        return {}

    logging.info("pipeline: repository provider settings have changed")
    for block in (GITHUB_SETTINGS, BITBUCKET_SETTINGS):
        entries = data.get(block) or []
        if entries:
            return {key: value for key, value in entries[0].items() if is_set(value) and key not in EXCLUDED_SETTINGS}
    return {}


def step_from_state(values: dict[str, Any]) -> Step:
    return Step(
        type=values["type"],
        name=values.get("name") or "",
        command=values.get("command") or "",
        environment=dict(values.get("env") or {}),
        timeout_in_minutes=values.get("timeout_in_minutes") or 0,
        agent_query_rules=list(values.get("agent_query_rules") or []),
        branch_configuration=values.get("branch_configuration") or "",
        artifact_paths=values.get("artifact_paths") or "",
        concurrency=values.get("concurrency") or 0,
        parallelism=values.get("parallelism") or 0,
    )


def step_to_state(step: Step) -> dict[str, Any]:
    return {
        "type": step.type,
        "name": step.name,
        "command": step.command,
        "env": step.environment,
        "timeout_in_minutes": step.timeout_in_minutes,
        "agent_query_rules": step.agent_query_rules,
        "branch_configuration": step.branch_configuration,
        "artifact_paths": step.artifact_paths,
        "concurrency": step.concurrency,
        "parallelism": step.parallelism,
    }


def pipeline_from_state(data: ResourceData) -> Pipeline:
    """Build the desired Pipeline from resource state."""
    pipeline = Pipeline(
        name=data.get("name", ""),
        repository=data.get("repository", ""),
        slug=data.get("slug") or data.id,
        description=data.get("description", ""),
        default_branch=data.get("default_branch", ""),
        branch_configuration=data.get("branch_configuration", ""),
        environment=dict(data.get("env") or {}),
        team_uuids=list(data.get("team_uuids") or []),
        provider_settings=provider_settings_from_state(data),
    )
    configuration, ok = data.get_ok("configuration")
    if ok:
        pipeline.configuration = configuration
    else:
        pipeline.steps = [step_from_state(step) for step in data.get("step") or []]
    return pipeline


def update_state(data: ResourceData, pipeline: Pipeline) -> None:
    """Record an observed Pipeline in resource state."""
    data.set_id(pipeline.slug)
    logging.info("pipeline: ID '%s'", data.id)

    data.set("env", pipeline.environment)
    data.set("name", pipeline.name)
    data.set("description", pipeline.description)
    data.set("repository", pipeline.repository)
    data.set("web_url", pipeline.web_url)
    data.set("slug", pipeline.slug)
    data.set("builds_url", pipeline.builds_url)
    data.set("url", pipeline.url)
    data.set("badge_url", pipeline.badge_url)
    data.set("created_at", pipeline.created_at)
    data.set("branch_configuration", pipeline.branch_configuration)
    data.set("default_branch", pipeline.default_branch)
    data.set("configuration", pipeline.configuration)
    data.set("team_uuids", pipeline.team_uuids)
    data.set("step", [step_to_state(step) for step in pipeline.steps])
    data.set("webhook_url", pipeline.provider.webhook_url)

    data.set(GITHUB_SETTINGS, [])
    data.set(BITBUCKET_SETTINGS, [])
    block = PROVIDER_SETTINGS_BLOCKS.get(pipeline.provider.id)
    if block is not None:
        logging.debug("pipeline: provider settings for %s: %s", pipeline.provider.id, pipeline.provider.settings)
        data.set(block, filter_provider_settings(block, pipeline.provider.settings))


### Operations
def create_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("pipeline: create")
    update_state(data, client.pipelines.create(pipeline_from_state(data)))


def read_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("pipeline: read")
    pipeline = read_or_forget(data, client.pipelines.get)
    if pipeline is not None:
        update_state(data, pipeline)


def update_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("pipeline: update")
    update_state(data, client.pipelines.update(pipeline_from_state(data)))


def delete_pipeline(data: ResourceData, client: BuildkiteClient) -> None:
    logging.debug("pipeline: delete")
    client.pipelines.delete(data.id)


PIPELINE = Resource(
    name="buildkite_pipeline",
    create=create_pipeline,
    read=read_pipeline,
    update=update_pipeline,
    delete=delete_pipeline,
    defaults=DEFAULTS,
)
