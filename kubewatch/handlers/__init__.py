"""Notification handlers and the registry used to look them up by name."""

from typing import Dict, Type

from .base import ConfigurationError, Handler
from .dingtalk import DingTalk

HANDLERS: Dict[str, Type[Handler]] = {
    DingTalk.name: DingTalk,
}


def get_handler(name: str) -> Handler:
    """
    Create a handler by name.

    Raises:
        KeyError: If no handler is registered under ``name``
    """
    if name not in HANDLERS:
        raise KeyError(f"Unknown handler: {name}")
    return HANDLERS[name]()


__all__ = ["ConfigurationError", "DingTalk", "Handler", "HANDLERS", "get_handler"]
