"""Message Builder — construct well-formed outbound gateway messages.

Invariants:
    - Every built message has a non-empty recipient
    - Exactly one payload variant: TextMessage carries text, ImageMessage carries url
    - All functions are PURE: no IO, no async, no side effects
    - to_payload() output matches the gateway's send-message body shape

Design Decisions:
    - Frozen dataclasses over dicts: a built message cannot drift after validation
    - Validation raises InvalidInputError here so malformed input never reaches the dispatcher
"""

from dataclasses import dataclass
from typing import Union

from leadrelay.core.domain_types import PhoneNumber
from leadrelay.core.errors import InvalidInputError


@dataclass(frozen=True)
class TextMessage:
    to: PhoneNumber
    text: str


@dataclass(frozen=True)
class ImageMessage:
    to: PhoneNumber
    url: str
    caption: str | None = None


OutboundMessage = Union[TextMessage, ImageMessage]


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise InvalidInputError(f"'{field}' must not be empty", field=field)
    return value


def build_text(to: str, text: str) -> TextMessage:
    """Build a text message. Raises InvalidInputError on empty to/text."""
    return TextMessage(
        to=PhoneNumber(_require(to, "to").strip()),
        text=_require(text, "text"),
    )


def build_image(to: str, url: str, caption: str | None = None) -> ImageMessage:
    """Build an image message. Raises InvalidInputError on empty to/url."""
    return ImageMessage(
        to=PhoneNumber(_require(to, "to").strip()),
        url=_require(url, "url").strip(),
        caption=caption,
    )


def to_payload(message: OutboundMessage) -> dict:
    """Serialize to the gateway wire shape.

    TextMessage  -> {"to": ..., "text": ...}
    ImageMessage -> {"to": ..., "image": {"url": ..., "caption"?: ...}}
    """
    if isinstance(message, TextMessage):
        return {"to": message.to, "text": message.text}
    image: dict = {"url": message.url}
    if message.caption is not None:
        image["caption"] = message.caption
    return {"to": message.to, "image": image}
