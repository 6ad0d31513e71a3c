"""
Admin endpoints for the reCAPTCHA credentials.

GET /admin/settings/recaptcha — current site key and whether a secret is set
PUT /admin/settings/recaptcha — update either key

Both require the X-Admin-Key header. The secret key is write-only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_credential_store, require_admin
from infrastructure.credentials.protocol import CredentialStore
from schemas.dto.requests.settings import CredentialsUpdateRequest
from schemas.dto.responses.common import ErrorResponse
from schemas.dto.responses.settings import CredentialsStatusResponse
from services.credentials_service import load_credentials, update_credentials

router = APIRouter(
    prefix="/admin/settings",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@router.get("/recaptcha", response_model=CredentialsStatusResponse)
async def get_recaptcha_settings(
    store: CredentialStore = Depends(get_credential_store),
) -> CredentialsStatusResponse:
    return CredentialsStatusResponse.from_credentials(await load_credentials(store))


@router.put("/recaptcha", response_model=CredentialsStatusResponse)
async def update_recaptcha_settings(
    body: CredentialsUpdateRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> CredentialsStatusResponse:
    credentials = await update_credentials(store, body)
    return CredentialsStatusResponse.from_credentials(credentials)
