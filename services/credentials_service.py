"""
Credential loading and administrative updates.

The host reads credentials from the store once per submission and hands the
resulting VerificationCredentials object to the captcha gate.
"""

from __future__ import annotations

from infrastructure.credentials.protocol import CredentialStore
from schemas.dto.requests.settings import CredentialsUpdateRequest
from schemas.models.verification import CredentialKey, VerificationCredentials


async def load_credentials(store: CredentialStore) -> VerificationCredentials:
    """Read both keys; a key that was never configured becomes ``""``."""
    site_key = await store.get(CredentialKey.SITE_KEY)
    secret_key = await store.get(CredentialKey.SECRET_KEY)
    return VerificationCredentials(
        site_key=site_key or "",
        secret_key=secret_key or "",
    )


async def update_credentials(
    store: CredentialStore, body: CredentialsUpdateRequest
) -> VerificationCredentials:
    """Apply the non-None fields of *body* and return the stored result."""
    if body.site_key is not None:
        await store.set(CredentialKey.SITE_KEY, body.site_key)
    if body.secret_key is not None:
        await store.set(CredentialKey.SECRET_KEY, body.secret_key)
    return await load_credentials(store)
