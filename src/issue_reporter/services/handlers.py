"""State handlers for the issue reporting conversation."""

import logging
from collections.abc import Awaitable, Callable

from issue_reporter.domain.events import Attachment
from issue_reporter.domain.issues import IssueLocation, IssueSubmission
from issue_reporter.domain.replies import GenericCard, PostbackButton
from issue_reporter.domain.sessions import (
    ConversationState,
    Postback,
    QuickReplyPayload,
    SessionRecord,
)
from issue_reporter.services.engine import Turn
from issue_reporter.services.outbound import (
    SendButtons,
    SendGeneric,
    SendLocationPrompt,
    SendQuickReplies,
)
from issue_reporter.services.text import (
    detect_end_marker,
    extract_hashtags,
    normalize,
)

Handler = Callable[[Turn], Awaitable[None]]

# Labels Messenger gives a dropped pin, in English and Thai.
_DEFAULT_LOCATION_TITLES = frozenset({"Pinned Location", "ตำแหน่งที่ตั้งที่ปักหมุดไว้"})

_logger = logging.getLogger(__name__)


async def handle_none(turn: Turn) -> None:
    """Start a new session: fetch the profile and greet the user."""
    session = turn.session
    session.first_received = turn.event.timestamp
    session.profile = await turn.engine.messenger.get_profile(turn.user_id)
    session.state = ConversationState.WAIT_INTENT

    switch_payload = Postback.THAI if turn.locale == "en" else Postback.ENGLISH
    buttons = (
        PostbackButton(turn.t("report_issue"), Postback.NEW_ISSUE.value),
        PostbackButton(turn.t("contact_us"), Postback.CONTACT_US.value),
        PostbackButton(turn.t("switch_language"), switch_payload.value),
    )
    await turn.send(
        SendButtons(turn.t("greeting", name=_first_name(session)), buttons)
    )


async def handle_wait_intent(turn: Turn) -> None:
    session = turn.session
    payload = turn.event.postback_payload

    if payload == Postback.NEW_ISSUE:
        await turn.send_text(turn.t("get_started"))
        session.state = ConversationState.WAIT_IMAGE
        session.photos = []
        session.videos = []
        await turn.send_text(turn.t("ask_media"), delay=turn.pacing_delay)
    elif payload == Postback.CONTACT_US:
        session.state = ConversationState.DISABLED
        await turn.send_text(turn.t("contact_reply"))
    else:
        await turn.send_text(turn.t("answer_first"))


async def handle_wait_image(turn: Turn) -> None:
    session = turn.session
    attachments = turn.event.attachments
    skipping = turn.is_skipping()

    if not skipping:
        if not attachments:
            await turn.send(
                SendQuickReplies(turn.t("media_skip_hint"), (turn.skip_reply(),))
            )
            return
        if turn.event.is_sticker or not attachments[0].is_media:
            await turn.send_text(turn.t("media_only"))
            return
        await turn.send_text(turn.t("media_received"))
        await turn.add_media(attachments)

    session.state = ConversationState.WAIT_LOCATION
    await turn.send(
        SendLocationPrompt(turn.t("ask_location")), delay=turn.pacing_delay
    )


async def handle_wait_location(turn: Turn) -> None:
    session = turn.session
    attachments = turn.event.attachments
    first = attachments[0] if attachments else None
    skipping = turn.is_skipping()

    if skipping or (first is not None and first.is_location):
        if skipping:
            session.location = None
            session.location_title = ""
        else:
            await turn.send_text(turn.t("location_received"))
            _record_location(session, first)
            title = first.title or ""
            session.location_title = "" if title in _DEFAULT_LOCATION_TITLES else title

        session.state = ConversationState.WAIT_LOCATION_DETAIL
        await turn.send(
            SendQuickReplies(turn.t("ask_location_detail"), (turn.skip_reply(),)),
            delay=turn.pacing_delay,
        )
    elif first is not None and first.is_media and not turn.event.is_sticker:
        await turn.send_text(turn.t("media_added_need_location"))
        await turn.add_media(attachments)
    else:
        await turn.send(
            SendQuickReplies(turn.t("location_skip_hint"), (turn.skip_reply(),))
        )


async def handle_wait_location_detail(turn: Turn) -> None:
    session = turn.session
    text = turn.event.text

    if not text:
        await turn.send(
            SendQuickReplies(turn.t("location_detail_text_only"), (turn.skip_reply(),))
        )
        return

    if not turn.is_skipping():
        session.location_description = text
    await turn.send_text(turn.t("thanks"))
    session.state = ConversationState.WAIT_DESC
    session.hashtags = []
    await turn.send_text(turn.t("ask_description"), delay=turn.pacing_delay)


async def handle_wait_desc(turn: Turn) -> None:
    session = turn.session
    text = turn.event.text

    if text:
        is_ending = _absorb_text(turn, text, keep_description=True)
        done_only = turn.tag_replies()[:1]
        if is_ending:
            session.state = ConversationState.WAIT_TAGS
            session.categories = []
            await turn.send(
                SendQuickReplies(turn.t("ask_categories"), turn.tag_replies()[1:])
            )
        elif len(session.desc) == 1:
            await turn.send(SendQuickReplies(turn.t("keep_typing"), done_only))
        elif session.desc_length > turn.engine.options.long_description_threshold:
            await turn.send(SendQuickReplies(turn.t("done_yet"), done_only))
        else:
            await turn.send(SendQuickReplies("", done_only))
        return

    attachments = turn.event.attachments
    if not attachments:
        return
    first = attachments[0]
    if turn.event.is_sticker:
        await turn.send_text(turn.t("not_understood"))
    elif first.is_media:
        await turn.send_text(turn.t("media_added"))
        await turn.add_media(attachments)
    elif first.is_location:
        await turn.send_text(turn.t("location_updated"))
        _record_location(session, first)
    else:
        await turn.send_text(turn.t("not_understood"))


async def handle_wait_tags(turn: Turn) -> None:
    session = turn.session
    text = turn.event.text
    payload = turn.event.quick_reply_payload

    if text and payload and payload not in {q.value for q in QuickReplyPayload}:
        session.categories.append(payload)
        is_ending = False
    elif text:
        is_ending = payload == QuickReplyPayload.DONE or _absorb_text(
            turn, text, keep_description=False
        )
    else:
        is_ending = False

    if is_ending:
        await _submit_issue(turn)
        return
    await turn.send(SendQuickReplies(turn.t("more_tags"), turn.tag_replies()))


HANDLERS: dict[ConversationState, Handler] = {
    ConversationState.NONE: handle_none,
    ConversationState.WAIT_INTENT: handle_wait_intent,
    ConversationState.WAIT_IMAGE: handle_wait_image,
    ConversationState.WAIT_LOCATION: handle_wait_location,
    ConversationState.WAIT_LOCATION_DETAIL: handle_wait_location_detail,
    ConversationState.WAIT_DESC: handle_wait_desc,
    ConversationState.WAIT_TAGS: handle_wait_tags,
}


def _absorb_text(turn: Turn, text: str, keep_description: bool) -> bool:
    """Take hashtags (and optionally description) from text; return if it ended."""
    session = turn.session
    is_ending, remainder = detect_end_marker(normalize(text), turn.t("done_marker"))
    remainder = remainder.strip()
    if remainder:
        if keep_description:
            session.append_description(remainder)
        session.hashtags.extend(extract_hashtags(remainder))
    return is_ending or turn.event.quick_reply_payload == QuickReplyPayload.DONE


async def _submit_issue(turn: Turn) -> None:
    """Send the report to the backend, confirm it, and reset the session."""
    session = turn.session
    engine = turn.engine
    options = engine.options

    await turn.send_text(turn.t("submitted", name=_first_name(session)))

    detail = " ".join(session.desc)
    user = dict(session.profile or {})
    user["facebook_id"] = turn.user_id
    submission = IssueSubmission(
        categories=list(session.categories),
        created_time=engine.clock(),
        detail=detail,
        location=IssueLocation(
            coordinates=session.location,
            title=session.location_title,
            desc=session.location_description,
        ),
        owner=options.api_user_id,
        user=user,
        photos=list(session.photos),
        videos=list(session.videos),
        provider=options.api_user_id,
        tags=list(session.hashtags),
        organization=options.organization_id,
    )
    issue_id = await engine.issue_backend.create_issue(submission)
    _logger.info("Submitted issue %s for user %s", issue_id, turn.user_id)

    card = GenericCard(
        title=options.issue_card_title,
        subtitle=detail,
        item_url=options.issue_url_template.format(issue_id=issue_id),
        image_url=session.photos[0] if session.photos else options.issue_fallback_image_url,
    )
    await turn.send(SendGeneric((card,)))
    turn.session = SessionRecord(locale_override=session.locale_override)


def _record_location(session: SessionRecord, attachment: Attachment) -> None:
    coordinates = attachment.payload.coordinates if attachment.payload else None
    session.location = (coordinates.lat, coordinates.long) if coordinates else None


def _first_name(session: SessionRecord) -> str:
    profile = session.profile or {}
    return str(profile.get("first_name") or "")
