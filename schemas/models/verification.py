"""
Verification models shared by the credential store and the captcha gate.

VerificationCredentials — site key (public) + secret key (never sent to clients)
VerificationRequest     — per-submission token and remote address
VerificationResult      — Accepted, or Rejected with a reason
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialKey(str, Enum):
    SITE_KEY = "site_key"
    SECRET_KEY = "secret_key"

    @property
    def option_name(self) -> str:
        """Storage name of the option, e.g. ``rc_recaptcha_site_key``."""
        return f"rc_recaptcha_{self.value}"


class RejectionReason(str, Enum):
    CONFIGURATION_ERROR = "configuration_error"
    TRANSPORT_ERROR = "transport_error"
    VERIFICATION_FAILED = "verification_failed"


class VerificationCredentials(BaseModel):
    """reCAPTCHA key pair. An empty string means "not configured"."""

    model_config = ConfigDict(frozen=True)

    site_key: str = ""
    secret_key: str = Field(default="", repr=False)

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)


class VerificationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    remote_address: str = ""


@dataclass(frozen=True)
class VerificationResult:
    accepted: bool
    reason: Optional[RejectionReason] = None
    error_codes: tuple[str, ...] = ()

    @classmethod
    def accept(cls) -> "VerificationResult":
        return cls(accepted=True)

    @classmethod
    def reject(
        cls, reason: RejectionReason, error_codes: tuple[str, ...] = ()
    ) -> "VerificationResult":
        return cls(accepted=False, reason=reason, error_codes=tuple(error_codes))

    @property
    def rejected(self) -> bool:
        return not self.accepted
