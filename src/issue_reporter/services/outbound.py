"""Outbound reply actions and their paced delivery."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from issue_reporter.adapters.messenger_client import MessengerClient
from issue_reporter.clock import Clock, now_millis
from issue_reporter.domain.replies import GenericCard, PostbackButton, QuickReply

Sleep = Callable[[float], Awaitable[None]]


class OutboundAction(Protocol):
    """A single message sent to the user."""

    async def deliver(self, messenger: MessengerClient, recipient_id: str) -> None:
        """Send the action through the chat gateway."""


@dataclass(frozen=True)
class SendText:
    text: str

    async def deliver(self, messenger: MessengerClient, recipient_id: str) -> None:
        await messenger.send_text(recipient_id, self.text)


@dataclass(frozen=True)
class SendButtons:
    text: str
    buttons: tuple[PostbackButton, ...]

    async def deliver(self, messenger: MessengerClient, recipient_id: str) -> None:
        await messenger.send_buttons(recipient_id, self.text, list(self.buttons))


@dataclass(frozen=True)
class SendQuickReplies:
    text: str
    options: tuple[QuickReply, ...]

    async def deliver(self, messenger: MessengerClient, recipient_id: str) -> None:
        await messenger.send_quick_replies(recipient_id, self.text, list(self.options))


@dataclass(frozen=True)
class SendLocationPrompt:
    text: str

    async def deliver(self, messenger: MessengerClient, recipient_id: str) -> None:
        await messenger.send_location_prompt(recipient_id, self.text)


@dataclass(frozen=True)
class SendGeneric:
    cards: tuple[GenericCard, ...]

    async def deliver(self, messenger: MessengerClient, recipient_id: str) -> None:
        await messenger.send_generic(recipient_id, list(self.cards))


@dataclass(frozen=True)
class ScheduledAction:
    """An outbound action together with the pause that preceded it."""

    action: OutboundAction
    delay: float


@dataclass
class ReplyScheduler:
    """Deliver one user's outbound actions in order, pausing where declared.

    Actions go out as soon as they are scheduled so that a later failure
    (e.g. a media upload) leaves earlier messages delivered.
    """

    messenger: MessengerClient
    recipient_id: str
    sleep: Sleep = asyncio.sleep
    clock: Clock = now_millis
    delivered: list[ScheduledAction] = field(default_factory=list)

    async def send(self, action: OutboundAction, delay: float = 0.0) -> int:
        """Wait for delay seconds, deliver the action, and return the send time."""
        if delay > 0:
            await self.sleep(delay)
        await action.deliver(self.messenger, self.recipient_id)
        self.delivered.append(ScheduledAction(action=action, delay=delay))
        return self.clock()
