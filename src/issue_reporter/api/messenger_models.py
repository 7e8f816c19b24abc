"""Pydantic models for Messenger webhook payloads."""

from pydantic import BaseModel, Field


class WebhookEntry(BaseModel):
    """One page entry in a webhook delivery."""

    id: str | None = None
    time: int | None = None
    # Validated one event at a time so a bad event does not sink its neighbours.
    messaging: list[dict[str, object]] = Field(default_factory=list)


class WebhookPayload(BaseModel):
    """Messenger webhook delivery."""

    object: str
    entry: list[WebhookEntry] = Field(default_factory=list)


class NotificationRequest(BaseModel):
    """Text to forward to a user from the issue backend."""

    id: str | None = None
    message: str | None = None
