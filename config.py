"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

reCAPTCHA keys set here only seed the credential store; once an administrator
writes new keys through the admin API the store wins.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RecaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    recaptcha_site_key: str = ""
    recaptcha_secret_key: str = ""
    recaptcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    recaptcha_script_url: str = "https://www.google.com/recaptcha/api.js"

    # Upper bound on a single siteverify call; a timeout rejects the comment
    recaptcha_timeout_seconds: float = 5.0


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "recaptcha-comments"
    comments_collection: str = "comments"


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Optional; without Redis the credential store is process-local
    redis_uri: Optional[str] = None


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    env: str = "development"
    app_name: str = "recaptcha-comments"
    site_language: str = "en-US"

    # Admin API is disabled while this is empty
    admin_api_key: str = ""

    # Only honour X-Forwarded-For & co. behind a trusted reverse proxy
    trust_proxy_headers: bool = False

    cors_origins: list[str] = ["*"]

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    recaptcha: Optional[RecaptchaSettings] = None
    db: Optional[DatabaseSettings] = None
    redis: Optional[RedisSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.recaptcha is None:
            self.recaptcha = RecaptchaSettings()
        if self.db is None:
            self.db = DatabaseSettings()
        if self.redis is None:
            self.redis = RedisSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def widget_language(self) -> str:
        """Language code passed to api.js, e.g. ``en`` for ``en-US``."""
        return self.site_language.split("-")[0]
