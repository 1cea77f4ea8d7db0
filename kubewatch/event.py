"""Lifecycle events built from watched Kubernetes objects."""

from dataclasses import dataclass
from typing import Any, Mapping

# Status reported for each lifecycle action
STATUS_BY_ACTION = {
    "created": "Normal",
    "deleted": "Danger",
    "updated": "Warning",
}


def _get(obj: Any, *path: str, default: Any = "") -> Any:
    """Walk ``path`` through mappings or attribute objects."""
    current = obj
    for key in path:
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return default if current is None else current


@dataclass
class Event:
    """A created/deleted/updated notification for one resource."""

    namespace: str
    kind: str
    name: str
    reason: str
    status: str
    component: str = ""
    host: str = ""

    @classmethod
    def new(cls, obj: Any, action: str) -> "Event":
        """
        Build an event from a Kubernetes object.

        ``obj`` may be a mapping (raw watch JSON, ``to_dict()`` output) or a
        client model with attributes. Objects of kind ``Event`` describe the
        involved object and carry their own reason and type.

        Args:
            obj: Kubernetes object
            action: One of created, deleted, updated

        Returns:
            Event instance
        """
        kind = _get(obj, "kind")
        namespace = _get(obj, "metadata", "namespace")
        name = _get(obj, "metadata", "name")
        status = STATUS_BY_ACTION.get(action, "Normal")

        if kind == "Event":
            involved = _get(obj, "involvedObject", default=None) or _get(
                obj, "involved_object", default=None
            )
            return cls(
                namespace=_get(involved, "namespace") or namespace,
                kind=_get(involved, "kind"),
                name=_get(involved, "name"),
                reason=_get(obj, "reason") or action,
                status=_get(obj, "type") or status,
                component=_get(obj, "source", "component"),
                host=_get(obj, "source", "host"),
            )

        return cls(
            namespace=namespace,
            kind=kind.lower() if kind else "",
            name=name,
            reason=action,
            status=status,
        )

    def message(self) -> str:
        """Markdown description of what happened."""
        if self.namespace:
            return (
                f"A `{self.kind}` in namespace `{self.namespace}` "
                f"has been `{self.reason}`:\n`{self.name}`"
            )
        return f"A `{self.kind}` has been `{self.reason}`:\n`{self.name}`"
