"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    messenger_app_secret: str
    messenger_validation_token: str
    messenger_page_access_token: str
    notification_token: str
    graph_api_base: str = "https://graph.facebook.com/v19.0"
    api_uri: str
    api_username: str
    api_password: str
    api_user_id: str
    supabase_url: str
    supabase_service_key: str
    session_max_age_seconds: int = 86400
    pacing_delay_seconds: float = 1.0
    default_locale: str = "th"
    organization_id: str = "583ddb7a3db23914407f9b58"
    issue_url_template: str = "http://mafueng.youpin.city/pins/{issue_id}"
    issue_card_title: str = "iCare - Chula Engineering"
    issue_fallback_image_url: str = "https://mafueng.youpin.city/public/image/logo-l.png"
    reset_keyword: str = "#เริ่มใหม่"
    long_description_threshold: int = 140
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
