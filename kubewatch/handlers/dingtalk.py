"""
DingTalk notification handler.

Turns lifecycle events into markdown messages for a DingTalk group robot.
Delivery is best effort: every send goes through ``_deliver``, which logs
failures and reports them as ``False`` instead of raising, so one failed
notification never stops the watch loop.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Optional

import httpx

from dingbot import DingTalkError, DingTalkSettings, WebHook
from dingbot.config import get_settings
from kubewatch.config import Config
from kubewatch.event import Event
from kubewatch.handlers.base import ConfigurationError, Handler

logger = logging.getLogger(__name__)

# Title colour per event status
DING_COLORS = MappingProxyType(
    {
        "Normal": "#67C23A",
        "Warning": "#E6A23C",
        "Danger": "#F56C6C",
    }
)

# Localized action shown in the message title
CN_ACTION = MappingProxyType(
    {
        "created": "新建",
        "deleted": "删除",
        "updated": "更新",
    }
)

DING_ERR_MSG = """
%s

You need to set both dingtalk token and sign(Optional) for dingtalk notify,
using "--token/-t" and "--sign/-s", or using environment variables:

export KW_DINGTALK_TOKEN=dingtalk_token
export KW_DINGTALK_SIGN=dingtalk_sign

Command line flags will override environment variables

"""

MESSAGE_TITLE = "kubewatch"
TEST_MESSAGE = "Testing Handler Configuration. This is a Test message."


@dataclass(frozen=True)
class DingContent:
    """Fields rendered into a DingTalk markdown message."""

    title: str
    message: str
    action: str
    kind: str

    def render(self, color: str) -> str:
        """Two-line markdown body: coloured title, then the event message."""
        action = CN_ACTION.get(self.action, self.action)
        title = f"<font color={color}>{self.kind}-{action}</font>"
        return f"# {title} \n{self.message} \n"


class DingTalk(Handler):
    """DingTalk robot handler."""

    name = "dingtalk"

    def __init__(
        self,
        settings: Optional[DingTalkSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the handler.

        Args:
            settings: Optional settings. If not provided, read from the
                environment when ``init`` runs.
            transport: Optional httpx transport passed to every client
        """
        super().__init__()
        self.token = ""
        self.sign = ""
        self.settings = settings
        self._transport = transport

    def init(self, config: Optional[Config] = None) -> None:
        """
        Resolve credentials.

        Values from the config file win; empty values fall back to the
        ``KW_DINGTALK_TOKEN`` and ``KW_DINGTALK_SIGN`` environment variables.

        Raises:
            ConfigurationError: If no token is configured
        """
        config = config or Config()
        if self.settings is None:
            self.settings = get_settings()

        self.token = config.handler.dingtalk.token or self.settings.token
        self.sign = config.handler.dingtalk.sign or self.settings.sign

        if not self.token:
            raise ConfigurationError(DING_ERR_MSG % "Missing dingtalk token")

        logger.debug(f"DingTalk handler initialized (signed: {bool(self.sign)})")

    def object_created(self, obj: Any) -> None:
        self._notify(obj, "created")

    def object_deleted(self, obj: Any) -> None:
        self._notify(obj, "deleted")

    def object_updated(self, old_obj: Any, new_obj: Any) -> None:
        self._notify(new_obj, "updated")

    def test_handler(self) -> None:
        """Send a test message through the regular delivery path."""
        content = DingContent(
            title=MESSAGE_TITLE,
            message=TEST_MESSAGE,
            action="created",
            kind="test",
        )
        self._deliver(content, DING_COLORS["Normal"])

    def _notify(self, obj: Any, action: str) -> None:
        event = Event.new(obj, action)
        content = DingContent(
            title=MESSAGE_TITLE,
            message=event.message(),
            action=event.reason,
            kind=event.kind,
        )
        color = DING_COLORS.get(event.status, DING_COLORS["Normal"])
        self._deliver(content, color)

    def _deliver(self, content: DingContent, color: str) -> bool:
        """
        Send one markdown message, logging instead of raising on failure.

        A new client is built per message so the request signature is
        always fresh.

        Returns:
            True if DingTalk accepted the message
        """
        webhook = WebHook.from_settings(
            self.token, self.sign, self.settings or get_settings(), transport=self._transport
        )

        try:
            webhook.send_markdown(content.title, content.render(color), False)
        except DingTalkError as e:
            logger.error(f"DingTalk notification failed: {e}")
            self.stats["failed"] += 1
            return False
        except Exception as e:
            logger.error(f"Unexpected error sending DingTalk notification: {e}")
            self.stats["failed"] += 1
            return False

        self.stats["sent"] += 1
        sent_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        logger.info(f"Message successfully sent to dingtalk at {sent_at}")
        return True
