"""
kubewatch DingTalk notifications.

Forwards Kubernetes resource lifecycle events (created, deleted, updated) to a
DingTalk group robot as markdown messages.

Main components:
- Config: Persisted handler configuration
- Event: Lifecycle event built from a Kubernetes object
- handlers.DingTalk: Handler that formats and delivers events
- cli: ``kubewatch`` command line

Example:
    from kubewatch import Config
    from kubewatch.handlers import DingTalk

    handler = DingTalk()
    handler.init(Config.load())
    handler.object_created({"kind": "Pod", "metadata": {"name": "web", "namespace": "default"}})
"""

from .config import Config
from .event import Event

__version__ = "1.0.0"
__all__ = ["Config", "Event"]
