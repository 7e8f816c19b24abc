"""Engine context shared by the dispatcher and the state handlers."""

import asyncio
from dataclasses import dataclass

from issue_reporter.adapters.issue_api_client import IssueBackend
from issue_reporter.adapters.messenger_client import MessengerClient
from issue_reporter.clock import Clock, now_millis
from issue_reporter.domain.events import Attachment, MessagingEvent
from issue_reporter.domain.replies import QuickReply
from issue_reporter.domain.sessions import (
    Category,
    QuickReplyPayload,
    SessionRecord,
)
from issue_reporter.services.i18n import Translator
from issue_reporter.services.outbound import (
    OutboundAction,
    ReplyScheduler,
    SendText,
    Sleep,
)
from issue_reporter.services.session_store import SessionStore


@dataclass(frozen=True)
class EngineOptions:
    """Tunables for the conversation engine."""

    api_user_id: str
    organization_id: str
    pacing_delay: float
    issue_url_template: str
    issue_card_title: str
    issue_fallback_image_url: str
    reset_keyword: str
    long_description_threshold: int


@dataclass
class EngineContext:
    """Collaborators for one engine instance, built once at startup."""

    messenger: MessengerClient
    issue_backend: IssueBackend
    session_store: SessionStore
    translator: Translator
    options: EngineOptions
    sleep: Sleep = asyncio.sleep
    clock: Clock = now_millis


@dataclass
class Turn:
    """One inbound event being handled against a user's session.

    Handlers may replace ``session`` outright; the dispatcher saves whatever
    record is here once the handler returns.
    """

    event: MessagingEvent
    session: SessionRecord
    locale: str
    engine: EngineContext
    replies: ReplyScheduler

    @property
    def user_id(self) -> str:
        return self.event.sender.id

    @property
    def pacing_delay(self) -> float:
        return self.engine.options.pacing_delay

    def t(self, key: str, **substitutions: object) -> str:
        return self.engine.translator.translate(key, self.locale, **substitutions)

    async def send(self, action: OutboundAction, delay: float = 0.0) -> None:
        self.session.last_sent = await self.replies.send(action, delay)

    async def send_text(self, text: str, delay: float = 0.0) -> None:
        await self.send(SendText(text), delay)

    def is_skipping(self) -> bool:
        """Return true when the user chose to skip the current step."""
        if self.event.quick_reply_payload == QuickReplyPayload.SKIP:
            return True
        text = self.event.text
        return bool(text) and self.t("skip_marker") in text

    def skip_reply(self) -> QuickReply:
        return QuickReply(self.t("skip_marker"), QuickReplyPayload.SKIP.value)

    def tag_replies(self) -> tuple[QuickReply, ...]:
        """Quick replies for tagging: the done marker, then every category."""
        done = QuickReply(self.t("done_marker"), QuickReplyPayload.DONE.value)
        categories = tuple(
            QuickReply(f"#{self.t(category.value)}", category.value)
            for category in Category
        )
        return (done, *categories)

    async def add_media(self, attachments: list[Attachment]) -> None:
        """Upload image/video attachments and record the stored URLs in order."""
        media = [
            attachment
            for attachment in attachments
            if attachment.is_media and attachment.payload and attachment.payload.url
        ]
        backend = self.engine.issue_backend
        urls = await asyncio.gather(
            *(backend.upload_media_from_url(item.payload.url) for item in media)
        )
        for item, url in zip(media, urls, strict=True):
            self.session.add_media(item.type, url)
