"""
DingTalk robot webhook client.

Signs and posts text, link, markdown, action card and feed card messages to a
DingTalk group robot.

Main components:
- WebHook: Webhook client with HMAC-SHA256 request signing
- messages: Immutable payload variants, one per message kind
- DingTalkSettings: Environment-driven configuration
- errors: Validation and send-path error types

Example:
    from dingbot import WebHook

    webhook = WebHook("access-token", "SEC...")
    webhook.send_markdown("kubewatch", "# Deployment updated", False, "13800000000")
"""

from .client import WebHook, sign_webhook
from .config import DingTalkSettings
from .errors import (
    ApplicationError,
    DecodeError,
    DingTalkError,
    HTTPStatusError,
    SendError,
    TransportError,
    ValidationError,
)
from .messages import FeedLink

__version__ = "1.0.0"
__all__ = [
    "WebHook",
    "sign_webhook",
    "DingTalkSettings",
    "FeedLink",
    "DingTalkError",
    "ValidationError",
    "SendError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "ApplicationError",
]
