"""Resource descriptor tying a resource type to its operations."""

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import NotFoundError

from .state import ResourceData

Operation = Callable[[ResourceData, BuildkiteClient], None]


@dataclass(frozen=True)
class Resource:
    """
    One resource type exposed to the host.

    Attributes:
        name: Resource type name, e.g. 'buildkite_pipeline'
        create, read, update, delete: Operations, each taking the state and the client
        defaults: Values applied to unset optional attributes
    """

    name: str
    create: Operation
    read: Operation
    update: Operation
    delete: Operation
    defaults: dict[str, Any] = field(default_factory=dict)

    def new_state(
        self,
        values: dict[str, Any] | None = None,
        prior: dict[str, Any] | None = None,
        id: str = "",  # noqa: A002
    ) -> ResourceData:
        """Build resource state from configuration, filling in schema defaults."""
        merged = copy.deepcopy(self.defaults)
        merged.update({key: value for key, value in (values or {}).items() if value is not None})
        return ResourceData(merged, prior=prior, id=id)


def read_or_forget(data: ResourceData, read: Callable[[str], Any]) -> Any | None:
    """
    Read the resource behind `data.id`.

    A NotFoundError means the resource was deleted outside of the host: the ID
    is cleared and None returned. Every other error propagates.
    """
    try:
        return read(data.id)
    except NotFoundError:
        logging.warning("provider: resource '%s' no longer exists, removing it from state", data.id)
        data.set_id("")
        return None
