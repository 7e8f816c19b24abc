"""Pydantic models for inbound Messenger messaging events."""

from pydantic import BaseModel, ConfigDict

MEDIA_TYPES = frozenset({"image", "video"})


class MessengerParticipant(BaseModel):
    """Sender or recipient reference."""

    id: str


class Coordinates(BaseModel):
    """Coordinates shared through a location attachment."""

    lat: float
    long: float


class AttachmentPayload(BaseModel):
    """Attachment payload; media carry a url, locations carry coordinates."""

    model_config = ConfigDict(extra="allow")

    url: str | None = None
    coordinates: Coordinates | None = None
    sticker_id: int | None = None


class Attachment(BaseModel):
    """Message attachment payload."""

    type: str
    payload: AttachmentPayload | None = None
    title: str | None = None
    url: str | None = None

    @property
    def is_media(self) -> bool:
        return self.type in MEDIA_TYPES

    @property
    def is_location(self) -> bool:
        return self.type == "location"


class QuickReplyEvent(BaseModel):
    """Quick reply chosen by the user."""

    payload: str


class MessengerMessage(BaseModel):
    """Message part of a messaging event."""

    mid: str | None = None
    text: str | None = None
    sticker_id: int | None = None
    attachments: list[Attachment] | None = None
    quick_reply: QuickReplyEvent | None = None


class PostbackEvent(BaseModel):
    """Postback triggered by a button press."""

    payload: str
    title: str | None = None


class MessagingEvent(BaseModel):
    """Single inbound messaging event for one user."""

    sender: MessengerParticipant
    recipient: MessengerParticipant | None = None
    timestamp: int
    message: MessengerMessage | None = None
    postback: PostbackEvent | None = None

    @property
    def text(self) -> str | None:
        return self.message.text if self.message else None

    @property
    def postback_payload(self) -> str | None:
        return self.postback.payload if self.postback else None

    @property
    def quick_reply_payload(self) -> str | None:
        if self.message and self.message.quick_reply:
            return self.message.quick_reply.payload
        return None

    @property
    def attachments(self) -> list[Attachment]:
        if self.message and self.message.attachments:
            return self.message.attachments
        return []

    @property
    def is_sticker(self) -> bool:
        return bool(self.message and self.message.sticker_id)
