"""Reply building blocks sent to the chat gateway."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PostbackButton:
    """Button that sends a postback payload when pressed."""

    title: str
    payload: str


@dataclass(frozen=True)
class QuickReply:
    """Quick reply option resolved to a payload when chosen."""

    title: str
    payload: str


@dataclass(frozen=True)
class GenericCard:
    """Card rendered with the generic template."""

    title: str
    subtitle: str
    item_url: str
    image_url: str
