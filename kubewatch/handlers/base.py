"""Base class for kubewatch notification handlers."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from kubewatch.config import Config


class ConfigurationError(Exception):
    """A handler is missing settings it needs to send anything."""


class Handler(ABC):
    """Receives lifecycle events for watched resources."""

    name: str = ""

    def __init__(self) -> None:
        self.stats = {
            "sent": 0,
            "failed": 0,
        }

    def get_stats(self) -> Dict[str, int]:
        """
        Get delivery statistics.

        Returns:
            Dictionary with sent and failed counts
        """
        return self.stats.copy()

    def reset_stats(self) -> None:
        """Reset delivery statistics."""
        self.stats = {
            "sent": 0,
            "failed": 0,
        }

    @abstractmethod
    def init(self, config: Config) -> None:
        """
        Prepare the handler from configuration.

        Raises:
            ConfigurationError: If required settings are missing
        """

    @abstractmethod
    def object_created(self, obj: Any) -> None:
        """Handle a created resource."""

    @abstractmethod
    def object_deleted(self, obj: Any) -> None:
        """Handle a deleted resource."""

    @abstractmethod
    def object_updated(self, old_obj: Any, new_obj: Any) -> None:
        """Handle an updated resource."""

    @abstractmethod
    def test_handler(self) -> None:
        """Send a test message to verify the configuration."""
