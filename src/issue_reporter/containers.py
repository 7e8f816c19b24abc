"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from issue_reporter.adapters.issue_api_client import HttpxIssueApiClient, IssueBackend
from issue_reporter.adapters.messenger_client import (
    HttpxMessengerClient,
    MessengerClient,
)
from issue_reporter.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from issue_reporter.config import Settings
from issue_reporter.services.dispatcher import Dispatcher
from issue_reporter.services.engine import EngineContext, EngineOptions
from issue_reporter.services.i18n import Translator
from issue_reporter.services.session_store import SessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    messenger_client: MessengerClient
    issue_backend: IssueBackend
    session_store: SessionStore
    dispatcher: Dispatcher
    close_resources: Callable[[], Awaitable[None]]


def build_engine_options(settings: Settings) -> EngineOptions:
    """Map settings onto engine tunables."""
    return EngineOptions(
        api_user_id=settings.api_user_id,
        organization_id=settings.organization_id,
        pacing_delay=settings.pacing_delay_seconds,
        issue_url_template=settings.issue_url_template,
        issue_card_title=settings.issue_card_title,
        issue_fallback_image_url=settings.issue_fallback_image_url,
        reset_keyword=settings.reset_keyword,
        long_description_threshold=settings.long_description_threshold,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_store = SessionStore(
        repository=SupabaseSessionRepository(supabase_client),
        max_age_seconds=resolved_settings.session_max_age_seconds,
    )
    messenger_client = HttpxMessengerClient.create(
        resolved_settings.messenger_page_access_token,
        graph_api_base=resolved_settings.graph_api_base,
    )
    issue_backend = HttpxIssueApiClient.create(
        base_url=resolved_settings.api_uri,
        username=resolved_settings.api_username,
        password=resolved_settings.api_password,
    )
    engine = EngineContext(
        messenger=messenger_client,
        issue_backend=issue_backend,
        session_store=session_store,
        translator=Translator(default_locale=resolved_settings.default_locale),
        options=build_engine_options(resolved_settings),
    )

    async def close_resources() -> None:
        await messenger_client.close()
        await issue_backend.close()

    return AppContainer(
        settings=resolved_settings,
        messenger_client=messenger_client,
        issue_backend=issue_backend,
        session_store=session_store,
        dispatcher=Dispatcher(engine),
        close_resources=close_resources,
    )
