"""Host-managed resource state.

ResourceData is what the host hands to a resource operation: the desired
values from configuration, the snapshot recorded after the previous apply,
and the resource ID. Operations read desired values from it and write the
observed values back into it. Clearing the ID tells the host the resource is
gone.
"""

import copy
from typing import Any


def is_set(value: Any) -> bool:
    """Whether a value is present and non-zero. None, "", 0, False and empty containers are not."""
    return bool(value)


class ResourceData:
    """Desired and observed state of a single resource instance."""

    def __init__(self, values: dict[str, Any] | None = None, prior: dict[str, Any] | None = None, id: str = "") -> None:  # noqa: A002
        self._values: dict[str, Any] = dict(values or {})
        self._prior: dict[str, Any] = copy.deepcopy(prior) if prior is not None else {}
        self._id = id

    @property
    def id(self) -> str:
        """Resource ID, empty when the resource does not exist."""
        return self._id

    def set_id(self, value: str) -> None:
        """Set the resource ID. An empty ID removes the resource from state."""
        self._id = value

    def get(self, key: str, default: Any = None) -> Any:
        """Current value of an attribute."""
        return self._values.get(key, default)

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Current value of an attribute, and whether it is set to a non-zero value."""
        value = self._values.get(key)
        return value, is_set(value)

    def set(self, key: str, value: Any) -> None:
        """Record an observed value."""
        self._values[key] = value

    def has_change(self, key: str) -> bool:
        """Whether an attribute differs from the previous snapshot."""
        return self._prior.get(key) != self._values.get(key)

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, values={self._values!r})"
