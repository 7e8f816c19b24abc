"""FastAPI application factory."""

import hashlib
import hmac
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from issue_reporter.api.messenger_models import NotificationRequest, WebhookPayload
from issue_reporter.app_logging import configure_logging
from issue_reporter.containers import AppContainer
from issue_reporter.domain.events import MessagingEvent
from issue_reporter.services.dispatcher import Dispatcher


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    async def dispatch_event(dispatcher: Dispatcher, event: MessagingEvent) -> None:
        try:
            await dispatcher.dispatch(event)
        except Exception:
            logger.exception(
                "Failed to handle messaging event", extra={"sender_id": event.sender.id}
            )

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        """Liveness message."""
        return "มะเฟืองพร้อมให้บริการละค่ะ"

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/webhook")
    async def verify_webhook(request: Request) -> PlainTextResponse:
        """Answer Messenger's subscription challenge."""
        state_container: AppContainer = request.app.state.container
        params = request.query_params
        if (
            params.get("hub.mode") == "subscribe"
            and params.get("hub.verify_token")
            == state_container.settings.messenger_validation_token
        ):
            return PlainTextResponse(params.get("hub.challenge", ""))
        return PlainTextResponse("Forbidden", status_code=403)

    @app.post("/webhook")
    async def messenger_webhook(
        request: Request, background_tasks: BackgroundTasks
    ) -> JSONResponse:
        """Verify and dispatch Messenger webhook deliveries."""
        state_container: AppContainer = request.app.state.container
        body = await request.body()
        if not _is_signature_valid(
            body,
            state_container.settings.messenger_app_secret,
            request.headers.get("x-hub-signature"),
            request.headers.get("x-hub-signature-256"),
        ):
            logger.warning("Rejected webhook delivery with invalid signature")
            return JSONResponse({"status": "invalid signature"}, status_code=401)

        try:
            payload = WebhookPayload.model_validate_json(body)
        except ValidationError:
            logger.warning("Ignoring malformed webhook delivery")
            return JSONResponse({"status": "ignored"})

        if payload.object == "page":
            for entry in payload.entry:
                for raw_event in entry.messaging:
                    try:
                        event = MessagingEvent.model_validate(raw_event)
                    except ValidationError:
                        logger.warning(
                            "Dropping malformed messaging event in entry %s", entry.id
                        )
                        continue
                    if event.message or event.postback:
                        background_tasks.add_task(
                            dispatch_event, state_container.dispatcher, event
                        )
                    else:
                        logger.info(
                            "Unhandled messaging event from %s", event.sender.id
                        )
        return JSONResponse({"status": "ok"})

    @app.get("/notifhook")
    async def verify_notification_hook(request: Request) -> PlainTextResponse:
        """Let the issue backend check its notification token."""
        state_container: AppContainer = request.app.state.container
        token = request.query_params.get("NOTIFICATION_TOKEN")
        if token == state_container.settings.notification_token:
            return PlainTextResponse("Notification token is correct!")
        return PlainTextResponse("Forbidden", status_code=403)

    @app.post("/notifhook")
    async def notification_hook(request: Request) -> PlainTextResponse:
        """Forward a backend notification to a user as a text message."""
        state_container: AppContainer = request.app.state.container
        token = request.query_params.get("NOTIFICATION_TOKEN")
        if token != state_container.settings.notification_token:
            return PlainTextResponse("Incorrect notification token!", status_code=401)
        try:
            notification = NotificationRequest.model_validate(await request.json())
        except (ValueError, ValidationError):
            notification = NotificationRequest()
        if not notification.id or not notification.message:
            return PlainTextResponse(
                "userId and message must not be empty.", status_code=400
            )
        await state_container.messenger_client.send_text(
            notification.id, notification.message
        )
        logger.info(
            "Notified user id %s with message - %s",
            notification.id,
            notification.message,
        )
        return PlainTextResponse(f"Successfully notifying user id {notification.id}")

    return app


def _is_signature_valid(
    body: bytes,
    app_secret: str,
    sha1_header: str | None,
    sha256_header: str | None,
) -> bool:
    """Check Messenger's X-Hub-Signature headers against the raw body."""
    if sha256_header:
        expected = hmac.new(app_secret.encode(), body, hashlib.sha256).hexdigest()
        return hmac.compare_digest(sha256_header, f"sha256={expected}")
    if sha1_header:
        expected = hmac.new(app_secret.encode(), body, hashlib.sha1).hexdigest()
        return hmac.compare_digest(sha1_header, f"sha1={expected}")
    return False
