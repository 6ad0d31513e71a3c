"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Long-lived collaborators (HTTP client, credential
store, captcha provider) are built once in the app lifespan and read from
app.state.
"""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, Header, Request

from config import AppSettings
from errors import AuthenticationError, ForbiddenError
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.credentials.protocol import CredentialStore
from repositories.comment_repository import CommentRepository
from services.comment_service import CommentService
from services.widget_service import WidgetService


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


async def get_redis(request: Request):
    """Return the async Redis client from app.state (may be None if not configured)."""
    return request.app.state.redis


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_captcha_provider(request: Request) -> CaptchaProvider:
    return request.app.state.captcha_provider


async def get_comment_service(
    db=Depends(get_db),
    settings: AppSettings = Depends(get_settings),
    captcha: CaptchaProvider = Depends(get_captcha_provider),
    store: CredentialStore = Depends(get_credential_store),
) -> CommentService:
    repo = CommentRepository(db[settings.db.comments_collection])
    return CommentService(repo, captcha, store)


def get_widget_service(
    settings: AppSettings = Depends(get_settings),
    store: CredentialStore = Depends(get_credential_store),
) -> WidgetService:
    return WidgetService(
        store,
        script_url=settings.recaptcha.recaptcha_script_url,
        language=settings.widget_language,
    )


def require_admin(
    settings: AppSettings = Depends(get_settings),
    x_admin_key: Optional[str] = Header(default=None),
) -> None:
    """Gate for the settings endpoints (the "manage configuration" capability)."""
    if not settings.admin_api_key:
        raise ForbiddenError("Admin API is disabled")
    if not x_admin_key:
        raise AuthenticationError("Missing X-Admin-Key header")
    if not secrets.compare_digest(x_admin_key, settings.admin_api_key):
        raise ForbiddenError("Invalid admin key")
