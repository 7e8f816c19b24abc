"""Route inbound messaging events to the conversation state handlers."""

import logging
from dataclasses import dataclass

from issue_reporter.domain.events import MessagingEvent
from issue_reporter.domain.sessions import ConversationState, Postback, SessionRecord
from issue_reporter.services.engine import EngineContext, Turn
from issue_reporter.services.handlers import HANDLERS, handle_none
from issue_reporter.services.i18n import LOCALE_PATHS
from issue_reporter.services.outbound import ReplyScheduler, ScheduledAction

_logger = logging.getLogger(__name__)


@dataclass
class Dispatcher:
    """Load the user's session, run the matching handler and save the result."""

    engine: EngineContext

    async def dispatch(self, event: MessagingEvent) -> list[ScheduledAction]:
        """Handle one event and return the actions delivered to the user.

        Backend and gateway errors propagate; the session is then left as it
        was before this event.
        """
        user_id = event.sender.id
        if event.message is None and event.postback is None:
            _logger.warning("Dropping event without message or postback from %s", user_id)
            return []

        _logger.info(
            "Event from %s: text=%r postback=%r attachments=%s",
            user_id,
            event.text,
            event.postback_payload,
            [attachment.type for attachment in event.attachments],
        )
        store = self.engine.session_store
        session = self._apply_overrides(event, store.load(user_id))
        locale = self.engine.translator.current_locale(session)
        session.last_received = event.timestamp

        if session.state is ConversationState.DISABLED:
            _logger.info("Session for %s is disabled; not replying", user_id)
            return []

        replies = ReplyScheduler(
            messenger=self.engine.messenger,
            recipient_id=user_id,
            sleep=self.engine.sleep,
            clock=self.engine.clock,
        )
        turn = Turn(
            event=event,
            session=session,
            locale=locale,
            engine=self.engine,
            replies=replies,
        )
        handler = HANDLERS.get(session.state, handle_none)
        await handler(turn)
        store.save(user_id, turn.session)
        return replies.delivered

    def _apply_overrides(
        self, event: MessagingEvent, session: SessionRecord
    ) -> SessionRecord:
        """Replace the session when the user restarts or switches language."""
        postback = event.postback_payload
        if event.text == self.engine.options.reset_keyword or postback == Postback.THAI:
            return SessionRecord(locale_override=LOCALE_PATHS["th"])
        if postback == Postback.ENGLISH:
            return SessionRecord(locale_override=LOCALE_PATHS["en"])
        return session
