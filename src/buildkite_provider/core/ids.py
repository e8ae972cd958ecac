"""Translation between Buildkite's identifier spaces.

REST paths address resources by slug within an organization, GraphQL lookups
take an organization-scoped slug ("org/slug") and mutations take opaque global
IDs. Teams are the odd one out: neither API looks a team up by UUID, but the
global ID Buildkite assigns a team is base64("Team---" + uuid), so it can be
derived locally.
"""

import base64

from .exceptions import InvalidValueError

TEAM_ID_PREFIX = "Team---"


def org_scoped_slug(organization: str, *parts: str) -> str:
    """Build the slug GraphQL lookups expect, e.g. 'acme/web' or 'acme/web/<uuid>'."""
    return "/".join([organization, *parts])


def team_global_id(team_uuid: str) -> str:
    """Derive a team's GraphQL global ID from its UUID."""
    return base64.b64encode(f"{TEAM_ID_PREFIX}{team_uuid}".encode()).decode()


def split_schedule_key(key: str) -> tuple[str, str]:
    """Split a 'pipelineSlug/scheduleUUID' key into its two parts."""
    pipeline_slug, _, schedule_uuid = key.partition("/")
    if not pipeline_slug or not schedule_uuid or "/" in schedule_uuid:
        raise InvalidValueError("pipeline schedule id", key, ["<pipeline slug>/<schedule uuid>"])
    return pipeline_slug, schedule_uuid
