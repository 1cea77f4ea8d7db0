"""
DingTalk robot webhook client.

Signs requests with the robot's sign secret and posts one of the supported
message kinds. Every send is a single blocking request with a bounded
timeout; failures are raised as ``SendError`` subclasses and never retried.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Iterable, Optional, Sequence
from urllib.parse import quote

import httpx

from dingbot.config import DEFAULT_API_URL, DingTalkSettings
from dingbot.errors import ApplicationError, DecodeError, HTTPStatusError, TransportError
from dingbot.messages import (
    ActionCardMessage,
    At,
    FeedCardMessage,
    FeedLink,
    LinkMessage,
    MarkdownMessage,
    Message,
    TextMessage,
)

logger = logging.getLogger(__name__)


def current_timestamp() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def sign_webhook(timestamp: int, secret: str) -> str:
    """
    Compute the DingTalk request signature.

    Args:
        timestamp: Milliseconds since the epoch
        secret: Robot sign secret

    Returns:
        base64(HMAC-SHA256(secret, "{timestamp}\\n{secret}"))
    """
    string_to_sign = f"{timestamp}\n{secret}"
    digest = hmac.new(
        secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


class WebHook:
    """DingTalk robot webhook client."""

    def __init__(
        self,
        access_token: str,
        secret: str = "",
        *,
        timeout: float = 5.0,
        api_url: str = DEFAULT_API_URL,
        sign_per_request: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the webhook client.

        The timestamp and signature are computed once here. With
        ``sign_per_request`` they are refreshed before every send; without it
        every send reuses this pair, which the server rejects once it falls
        outside its freshness window.

        Args:
            access_token: Robot access token
            secret: Robot sign secret, empty for unsigned robots
            timeout: Request timeout in seconds
            api_url: Base URL the access token is appended to
            sign_per_request: Refresh timestamp and signature for each send
            transport: Optional httpx transport (used by tests)
        """
        self.access_token = access_token
        self.api_url = api_url
        self.timeout = timeout
        self.sign_per_request = sign_per_request
        self._secret = secret
        self._transport = transport
        self.timestamp = current_timestamp()
        self.sign = sign_webhook(self.timestamp, secret) if secret else ""

    @classmethod
    def from_settings(
        cls,
        access_token: str,
        secret: str,
        settings: DingTalkSettings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "WebHook":
        """Build a client using transport options from ``DingTalkSettings``."""
        return cls(
            access_token,
            secret,
            timeout=settings.timeout,
            api_url=settings.api_url,
            sign_per_request=settings.sign_per_request,
            transport=transport,
        )

    def _refresh_signature(self) -> None:
        self.timestamp = current_timestamp()
        if self._secret:
            self.sign = sign_webhook(self.timestamp, self._secret)

    def request_url(self) -> str:
        """URL the next payload is posted to."""
        return (
            f"{self.api_url}{self.access_token}"
            f"&timestamp={self.timestamp}&sign={quote(self.sign, safe='')}"
        )

    def _masked_url(self) -> str:
        return f"{self.api_url}***&timestamp={self.timestamp}"

    def send(self, message: Message) -> None:
        """
        Post a message to the webhook.

        Args:
            message: Any payload variant from ``dingbot.messages``

        Raises:
            TransportError: The request could not be completed
            HTTPStatusError: The response status was not 200
            DecodeError: The response body was not a DingTalk response
            ApplicationError: The response carried a non-zero errcode
        """
        if self.sign_per_request:
            self._refresh_signature()

        payload = json.dumps(message.to_dict(), ensure_ascii=False).encode("utf-8")
        logger.debug(f"Posting {message.msgtype} message to {self._masked_url()}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    self.request_url(),
                    content=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            raise TransportError(e) from e

        if response.status_code != 200:
            raise HTTPStatusError(response.status_code)

        try:
            result = response.json()
        except ValueError as e:
            raise DecodeError(str(e), body=response.text) from e

        if not isinstance(result, dict) or not isinstance(result.get("errcode", 0), int):
            raise DecodeError(f"unexpected body {response.text[:200]!r}", body=response.text)

        error_code = result.get("errcode", 0)
        if error_code != 0:
            raise ApplicationError(error_code, str(result.get("errmsg", "")))

        logger.debug(f"DingTalk {message.msgtype} message accepted")

    def send_text(self, content: str, at_all: bool = False, *mobiles: str) -> None:
        """Send a text message, optionally mentioning members by mobile."""
        self.send(TextMessage(content=content, at=At(mobiles=mobiles, is_at_all=at_all)))

    def send_link(self, title: str, content: str, pic_url: str, msg_url: str) -> None:
        """Send a link message."""
        self.send(LinkMessage(title=title, text=content, pic_url=pic_url, message_url=msg_url))

    def send_markdown(self, title: str, content: str, at_all: bool = False, *mobiles: str) -> None:
        """Send a markdown message; valid mobiles are tagged in the text."""
        self.send(MarkdownMessage.with_mentions(title, content, at_all, mobiles))

    def send_action_card(
        self,
        title: str,
        content: str,
        link_titles: Sequence[str],
        link_urls: Sequence[str],
        hide_avatar: bool = False,
        btn_orientation: bool = False,
    ) -> None:
        """
        Send an action card with one button per title/URL pair.

        Raises:
            ValidationError: If the lists are empty or of different length.
                No request is made in that case.
        """
        message = ActionCardMessage.from_links(
            title, content, link_titles, link_urls, hide_avatar, btn_orientation
        )
        self.send(message)

    def send_feed_card(self, links: Iterable[FeedLink]) -> None:
        """Send a feed card."""
        self.send(FeedCardMessage(links=tuple(links)))
