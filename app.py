"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import redis.asyncio as aioredis
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.recaptcha import RecaptchaProvider
from infrastructure.credentials.memory import InMemoryCredentialStore
from infrastructure.credentials.redis_store import RedisCredentialStore
from infrastructure.http_client import HttpClient
from routes.comment_routes import router as comment_router
from routes.health_routes import router as health_router
from routes.settings_routes import router as settings_router
from schemas.models.verification import CredentialKey
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def _seed_values(settings: AppSettings) -> dict[CredentialKey, str]:
    return {
        CredentialKey.SITE_KEY: settings.recaptcha.recaptcha_site_key,
        CredentialKey.SECRET_KEY: settings.recaptcha.recaptcha_secret_key,
    }


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(
        log_level=settings.logging.log_level,
        log_format=settings.logging.log_format,
        hash_ips=settings.is_production,
    )

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: AsyncMongoClient = AsyncMongoClient(settings.db.mongodb_uri)
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]
        app.state.settings = settings

        # Redis is optional; without it credentials live in process memory
        redis_client = None
        if settings.redis.redis_uri:
            redis_client = aioredis.from_url(
                settings.redis.redis_uri,
                encoding="utf-8",
                decode_responses=True,
            )
            store = RedisCredentialStore(redis_client)
            await store.seed_missing(_seed_values(settings))
            app.state.credential_store = store
        else:
            log.warning("credential_store_in_memory")
            app.state.credential_store = InMemoryCredentialStore(
                _seed_values(settings)
            )
        app.state.redis = redis_client

        http_client = HttpClient(timeout=settings.recaptcha.recaptcha_timeout_seconds)
        app.state.http_client = http_client
        app.state.captcha_provider = RecaptchaProvider(
            http_client, verify_url=settings.recaptcha.recaptcha_verify_url
        )

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        await http_client.aclose()
        await mongo_client.close()
        if redis_client is not None:
            await redis_client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(comment_router)
    app.include_router(settings_router)

    return app
