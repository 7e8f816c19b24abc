"""Messenger Send/Graph API client adapter."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from issue_reporter.domain.replies import GenericCard, PostbackButton, QuickReply

_PROFILE_FIELDS = "first_name,last_name,profile_pic,locale,timezone,gender"


class MessengerClient(Protocol):
    """Interface for Messenger platform interactions."""

    async def send_text(self, recipient_id: str, text: str) -> None:
        """Send a plain text message."""

    async def send_buttons(
        self, recipient_id: str, text: str, buttons: list[PostbackButton]
    ) -> None:
        """Send text with postback buttons."""

    async def send_quick_replies(
        self, recipient_id: str, text: str, options: list[QuickReply]
    ) -> None:
        """Send text with quick reply options."""

    async def send_location_prompt(self, recipient_id: str, text: str) -> None:
        """Send text with a location quick reply."""

    async def send_generic(self, recipient_id: str, cards: list[GenericCard]) -> None:
        """Send cards with the generic template."""

    async def get_profile(self, user_id: str) -> dict[str, object]:
        """Return the user's public profile."""


@dataclass
class HttpxMessengerClient(MessengerClient):
    """Messenger client implemented with httpx."""

    page_access_token: str
    http_client: httpx.AsyncClient
    graph_api_base: str = "https://graph.facebook.com/v19.0"

    @classmethod
    def create(
        cls, page_access_token: str, graph_api_base: str | None = None
    ) -> "HttpxMessengerClient":
        """Create a Messenger client with a managed httpx session."""
        client = cls(page_access_token=page_access_token, http_client=httpx.AsyncClient())
        if graph_api_base:
            client.graph_api_base = graph_api_base
        return client

    async def send_text(self, recipient_id: str, text: str) -> None:
        """Send a text message."""
        await self._send(recipient_id, {"text": text})

    async def send_buttons(
        self, recipient_id: str, text: str, buttons: list[PostbackButton]
    ) -> None:
        """Send a button template with postback buttons."""
        await self._send(
            recipient_id,
            {
                "attachment": {
                    "type": "template",
                    "payload": {
                        "template_type": "button",
                        "text": text,
                        "buttons": [
                            {
                                "type": "postback",
                                "title": button.title,
                                "payload": button.payload,
                            }
                            for button in buttons
                        ],
                    },
                }
            },
        )

    async def send_quick_replies(
        self, recipient_id: str, text: str, options: list[QuickReply]
    ) -> None:
        """Send a text message with quick replies."""
        await self._send(
            recipient_id,
            {
                "text": text,
                "quick_replies": [
                    {
                        "content_type": "text",
                        "title": option.title,
                        "payload": option.payload,
                    }
                    for option in options
                ],
            },
        )

    async def send_location_prompt(self, recipient_id: str, text: str) -> None:
        """Send a text message asking for the user's location."""
        await self._send(
            recipient_id,
            {"text": text, "quick_replies": [{"content_type": "location"}]},
        )

    async def send_generic(self, recipient_id: str, cards: list[GenericCard]) -> None:
        """Send a generic template."""
        await self._send(
            recipient_id,
            {
                "attachment": {
                    "type": "template",
                    "payload": {
                        "template_type": "generic",
                        "elements": [
                            {
                                "title": card.title,
                                "subtitle": card.subtitle,
                                "item_url": card.item_url,
                                "image_url": card.image_url,
                            }
                            for card in cards
                        ],
                    },
                }
            },
        )

    async def get_profile(self, user_id: str) -> dict[str, object]:
        """Fetch the user's profile fields from the Graph API."""
        response = await self.http_client.get(
            f"{self.graph_api_base}/{user_id}",
            params={"fields": _PROFILE_FIELDS, "access_token": self.page_access_token},
            timeout=10,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _send(self, recipient_id: str, message: dict[str, object]) -> None:
        url = f"{self.graph_api_base}/me/messages"
        payload = {"recipient": {"id": recipient_id}, "message": message}
        response = await self.http_client.post(
            url,
            params={"access_token": self.page_access_token},
            json=payload,
            timeout=10,
        )
        response.raise_for_status()
