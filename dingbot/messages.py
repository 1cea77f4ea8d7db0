"""
Payload variants accepted by the DingTalk robot webhook.

Each message kind is its own frozen dataclass. ``to_dict()`` produces the
wire shape: the ``msgtype`` tag, the section named after it and, for text and
markdown, the ``at`` block. A payload can never carry fields of another kind.
"""

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, Sequence, Tuple

from dingbot.errors import ValidationError

# 11-digit mainland mobile numbers that DingTalk can resolve to a member.
# ASCII digits only; callers use fullmatch so a trailing newline is rejected.
MOBILE_PATTERN = re.compile(r"1([38][0-9]|14[57]|5[^4])\d{8}", re.ASCII)


def _flag(value: bool) -> str:
    return "1" if value else "0"


@dataclass(frozen=True)
class At:
    """Mention block shared by text and markdown messages."""

    mobiles: Tuple[str, ...] = ()
    is_at_all: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"atMobiles": list(self.mobiles), "isAtAll": self.is_at_all}


@dataclass(frozen=True)
class Message:
    """Base class for webhook payloads."""

    msgtype: ClassVar[str] = ""

    def body(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """Convert the message to a dictionary for JSON serialization."""
        data: Dict[str, Any] = {"msgtype": self.msgtype}
        data.update(self.body())
        return data


@dataclass(frozen=True)
class TextMessage(Message):
    """Plain text message."""

    msgtype: ClassVar[str] = "text"

    content: str
    at: At = field(default_factory=At)

    def body(self) -> Dict[str, Any]:
        return {"text": {"content": self.content}, "at": self.at.to_dict()}


@dataclass(frozen=True)
class LinkMessage(Message):
    """Single link with optional picture."""

    msgtype: ClassVar[str] = "link"

    title: str
    text: str
    pic_url: str = ""
    message_url: str = ""

    def body(self) -> Dict[str, Any]:
        return {
            "link": {
                "title": self.title,
                "text": self.text,
                "picUrl": self.pic_url,
                "messageUrl": self.message_url,
            }
        }


@dataclass(frozen=True)
class MarkdownMessage(Message):
    """Markdown message with optional mentions."""

    msgtype: ClassVar[str] = "markdown"

    title: str
    text: str
    at: At = field(default_factory=At)

    @classmethod
    def with_mentions(
        cls, title: str, content: str, at_all: bool = False, mobiles: Iterable[str] = ()
    ) -> "MarkdownMessage":
        """
        Build a markdown message that tags valid mobile numbers in its text.

        A single ``#####`` heading marker is inserted before the first valid
        mobile, then every valid mobile is appended as `` @<mobile>``. Numbers
        that do not look like a mobile are still passed in the ``at`` block
        but are not written into the text.

        Args:
            title: Message title shown in the conversation list
            content: Markdown body
            at_all: Mention everyone in the group
            mobiles: Mobile numbers to mention

        Returns:
            MarkdownMessage instance
        """
        mobiles = tuple(mobiles)
        first_line = False
        for mobile in mobiles:
            if MOBILE_PATTERN.fullmatch(mobile):
                if not first_line:
                    content += "#####"
                content += " @" + mobile
                first_line = True

        return cls(title=title, text=content, at=At(mobiles=mobiles, is_at_all=at_all))

    def body(self) -> Dict[str, Any]:
        return {
            "markdown": {"title": self.title, "text": self.text},
            "at": self.at.to_dict(),
        }


@dataclass(frozen=True)
class ActionButton:
    """One button of an action card."""

    title: str
    action_url: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "actionUrl": self.action_url}


@dataclass(frozen=True)
class ActionCardMessage(Message):
    """Card with a markdown body and one or more buttons."""

    msgtype: ClassVar[str] = "actionCard"

    title: str
    text: str
    buttons: Tuple[ActionButton, ...]
    hide_avatar: bool = False
    btn_orientation: bool = False

    @classmethod
    def from_links(
        cls,
        title: str,
        content: str,
        link_titles: Sequence[str],
        link_urls: Sequence[str],
        hide_avatar: bool = False,
        btn_orientation: bool = False,
    ) -> "ActionCardMessage":
        """
        Zip button titles and URLs into an action card.

        Raises:
            ValidationError: If either list is empty or their lengths differ
        """
        if not link_titles or not link_urls:
            raise ValidationError("links or titles is empty")
        if len(link_titles) != len(link_urls):
            raise ValidationError("links length and titles length is not equal")

        buttons = tuple(
            ActionButton(title=link_title, action_url=link_url)
            for link_title, link_url in zip(link_titles, link_urls)
        )
        return cls(
            title=title,
            text=content,
            buttons=buttons,
            hide_avatar=hide_avatar,
            btn_orientation=btn_orientation,
        )

    def body(self) -> Dict[str, Any]:
        return {
            "actionCard": {
                "title": self.title,
                "text": self.text,
                "hideAvatar": _flag(self.hide_avatar),
                "btnOrientation": _flag(self.btn_orientation),
                "btns": [button.to_dict() for button in self.buttons],
            }
        }


@dataclass(frozen=True)
class FeedLink:
    """One entry of a feed card."""

    title: str
    message_url: str
    pic_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "messageUrl": self.message_url, "picUrl": self.pic_url}


@dataclass(frozen=True)
class FeedCardMessage(Message):
    """List of links rendered as a feed."""

    msgtype: ClassVar[str] = "feedCard"

    links: Tuple[FeedLink, ...]

    def body(self) -> Dict[str, Any]:
        return {"feedCard": {"links": [link.to_dict() for link in self.links]}}
