"""
Comment submission pipeline.

Every new comment passes through the reCAPTCHA gate before it is written.
A rejected submission raises an AppError so the route layer returns a
user-facing message and nothing is persisted.
"""

from __future__ import annotations

from typing import Optional

from errors import CaptchaRequiredError, CaptchaVerificationError
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.credentials.protocol import CredentialStore
from repositories.comment_repository import CommentRepository
from schemas.dto.requests.comment import RECAPTCHA_RESPONSE_FIELD, CommentCreateRequest
from schemas.models.comment import CommentDoc
from schemas.models.verification import VerificationRequest
from services.credentials_service import load_credentials
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)

CAPTCHA_REQUIRED_MESSAGE = "Please complete the captcha"
CAPTCHA_INVALID_MESSAGE = "Error: reCAPTCHA response is invalid."


class CommentService:
    def __init__(
        self,
        repository: CommentRepository,
        captcha: CaptchaProvider,
        credential_store: CredentialStore,
    ) -> None:
        self._repo = repository
        self._captcha = captcha
        self._store = credential_store

    async def verify_submission(
        self, token: Optional[str], remote_address: str
    ) -> None:
        """Raise unless the submission's captcha token is verified."""
        if not token or not token.strip():
            raise CaptchaRequiredError(
                CAPTCHA_REQUIRED_MESSAGE, field=RECAPTCHA_RESPONSE_FIELD
            )

        credentials = await load_credentials(self._store)
        result = await self._captcha.verify(
            VerificationRequest(token=token, remote_address=remote_address),
            credentials,
        )
        if result.rejected:
            log.warning(
                "comment_rejected",
                reason=result.reason.value if result.reason else None,
                error_codes=list(result.error_codes),
                ip=hash_ip(remote_address),
            )
            raise CaptchaVerificationError(
                CAPTCHA_INVALID_MESSAGE, field=RECAPTCHA_RESPONSE_FIELD
            )

    async def submit(
        self,
        payload: CommentCreateRequest,
        token: Optional[str],
        remote_address: str,
    ) -> CommentDoc:
        await self.verify_submission(token, remote_address)

        doc = CommentDoc(
            post_id=payload.post_id,
            author=payload.author,
            email=payload.email,
            content=payload.content,
            remote_address=remote_address,
        )
        doc.id = await self._repo.insert(doc)
        log.info("comment_created", comment_id=str(doc.id), post_id=doc.post_id)
        return doc
