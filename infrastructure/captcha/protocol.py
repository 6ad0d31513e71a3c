"""CaptchaProvider protocol — services depend on this, not the concrete implementation."""

from typing import Protocol

from schemas.models.verification import (
    VerificationCredentials,
    VerificationRequest,
    VerificationResult,
)


class CaptchaProvider(Protocol):
    async def verify(
        self, request: VerificationRequest, credentials: VerificationCredentials
    ) -> VerificationResult: ...
