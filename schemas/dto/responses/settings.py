"""
Response DTOs for the admin settings endpoints.

CredentialsStatusResponse — GET/PUT /admin/settings/recaptcha
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from schemas.models.verification import VerificationCredentials


class CredentialsStatusResponse(BaseModel):
    """Current credentials. The secret itself is never echoed back."""

    model_config = ConfigDict(populate_by_name=True)

    site_key: str
    secret_key_configured: bool

    @classmethod
    def from_credentials(
        cls, credentials: VerificationCredentials
    ) -> "CredentialsStatusResponse":
        return cls(
            site_key=credentials.site_key,
            secret_key_configured=credentials.is_configured,
        )
