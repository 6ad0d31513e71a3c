"""
Integration test app builder.

Builds the real routers and error handlers around mocked MongoDB/Redis and a
mocked siteverify HTTP client, injected via the lifespan. No real network
connections are made.
"""

from contextlib import asynccontextmanager
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi import FastAPI

from config import AppSettings, DatabaseSettings, RedisSettings
from errors import register_error_handlers
from infrastructure.captcha.recaptcha import RecaptchaProvider
from infrastructure.credentials.memory import InMemoryCredentialStore
from routes.comment_routes import router as comment_router
from routes.health_routes import router as health_router
from routes.settings_routes import router as settings_router
from schemas.models.verification import CredentialKey

ADMIN_KEY = "admin-secret"


def _siteverify_response(payload, status_code: int = 200) -> MagicMock:
    resp = MagicMock(status_code=status_code, text=str(payload))
    resp.json.return_value = payload
    return resp


class AppHarness:
    """Handles to the mocks behind a test app."""

    def __init__(self, keys: Optional[dict[CredentialKey, str]], admin_api_key: str):
        self.settings = AppSettings(
            admin_api_key=admin_api_key,
            db=DatabaseSettings(mongodb_uri="mongodb://localhost:27017/"),
            redis=RedisSettings(redis_uri=None),
        )
        self.store = InMemoryCredentialStore(keys)
        self.http = MagicMock()
        self.http.post = AsyncMock(return_value=_siteverify_response({"success": True}))
        self.collection = MagicMock()
        self.collection.insert_one = AsyncMock(
            return_value=MagicMock(inserted_id=ObjectId())
        )
        self.db = MagicMock()
        self.db.__getitem__.return_value = self.collection
        self.db.client.admin.command = AsyncMock(return_value={"ok": 1})
        self.redis = None

    def reply_with(self, payload, status_code: int = 200) -> None:
        """Make the mocked siteverify endpoint answer with *payload*."""
        self.http.post.return_value = _siteverify_response(payload, status_code)

    def build_app(self) -> FastAPI:
        @asynccontextmanager
        async def lifespan(app: FastAPI):
            app.state.settings = self.settings
            app.state.db = self.db
            app.state.redis = self.redis
            app.state.credential_store = self.store
            app.state.captcha_provider = RecaptchaProvider(self.http)
            yield

        app = FastAPI(lifespan=lifespan)
        register_error_handlers(app)
        app.include_router(health_router)
        app.include_router(comment_router)
        app.include_router(settings_router)
        return app


@pytest.fixture
def make_harness():
    def _make(
        keys: Optional[dict[CredentialKey, str]] = None,
        admin_api_key: str = ADMIN_KEY,
    ) -> AppHarness:
        if keys is None:
            keys = {CredentialKey.SITE_KEY: "site-abc", CredentialKey.SECRET_KEY: "abc"}
        return AppHarness(keys, admin_api_key)

    return _make


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_KEY}
