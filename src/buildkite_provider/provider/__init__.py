"""Provider adapter subpackage.

Adapts host-managed resource state to the core client. Each resource type is
a Resource bundling create/read/update/delete operations with the defaults of
its optional attributes. Every operation takes the ResourceData of one
instance and the BuildkiteClient built from ProviderConfig.

Modules:
    config: ProviderConfig and logging setup
    state: ResourceData, the host state source and sink
    resource: Resource descriptor and not-found handling on read
    pipeline, schedule, team, organization: The resource types

Example:
    >>> from buildkite_provider.provider import RESOURCES, ProviderConfig
    >>>
    >>> client = ProviderConfig.from_env().create_client()
    >>> resource = RESOURCES["buildkite_team"]
    >>> data = resource.new_state({"name": "Platform"})
    >>> resource.create(data, client)
    >>> data.id
    'platform'
"""

from buildkite_provider.provider.config import ProviderConfig, configure_logging
from buildkite_provider.provider.organization import ORG_MEMBER
from buildkite_provider.provider.pipeline import PIPELINE
from buildkite_provider.provider.resource import Resource
from buildkite_provider.provider.schedule import PIPELINE_SCHEDULE
from buildkite_provider.provider.state import ResourceData
from buildkite_provider.provider.team import TEAM, TEAM_MEMBER, TEAM_PIPELINE

RESOURCES: dict[str, Resource] = {
    resource.name: resource
    for resource in (ORG_MEMBER, PIPELINE, PIPELINE_SCHEDULE, TEAM, TEAM_MEMBER, TEAM_PIPELINE)
}

__all__ = [
    "RESOURCES",
    "ProviderConfig",
    "Resource",
    "ResourceData",
    "configure_logging",
]
