"""Google reCAPTCHA implementation of CaptchaProvider.

One siteverify call per verify(); every failure mode resolves to a Rejected
result instead of an exception:
- empty secret key      → configuration_error (no network call)
- network error/timeout → transport_error
- non-2xx / bad body    → transport_error
- success != true       → verification_failed (with the API's error codes)
"""

from typing import Any

from infrastructure.http_client import HttpClient
from schemas.models.verification import (
    RejectionReason,
    VerificationCredentials,
    VerificationRequest,
    VerificationResult,
)
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


def _parse_error_codes(value: Any) -> tuple[str, ...]:
    """Normalise the `error-codes` field, which should be a list of strings."""
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(str(code) for code in value)
    return ()


class RecaptchaProvider:
    def __init__(
        self, http_client: HttpClient, verify_url: str = RECAPTCHA_VERIFY_URL
    ) -> None:
        self._http = http_client
        self._verify_url = verify_url

    async def verify(
        self, request: VerificationRequest, credentials: VerificationCredentials
    ) -> VerificationResult:
        if request is None or credentials is None:
            raise TypeError("verify() requires a request and credentials")

        if not credentials.secret_key:
            log.warning("recaptcha_secret_not_configured")
            return VerificationResult.reject(RejectionReason.CONFIGURATION_ERROR)

        ip = hash_ip(request.remote_address)
        try:
            response = await self._http.post(
                self._verify_url,
                data={
                    "secret": credentials.secret_key,
                    "response": request.token,
                    "remoteip": request.remote_address,
                },
            )
        except Exception as e:
            log.error(
                "recaptcha_request_failed",
                ip=ip,
                error=str(e),
                error_type=type(e).__name__,
            )
            return VerificationResult.reject(RejectionReason.TRANSPORT_ERROR)

        if not 200 <= response.status_code < 300:
            log.error(
                "recaptcha_api_error",
                ip=ip,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            return VerificationResult.reject(RejectionReason.TRANSPORT_ERROR)

        try:
            data: Any = response.json()
        except ValueError as e:
            log.error("recaptcha_invalid_response", ip=ip, error=str(e))
            return VerificationResult.reject(RejectionReason.TRANSPORT_ERROR)
        if not isinstance(data, dict):
            log.error("recaptcha_invalid_response", ip=ip, error="not a JSON object")
            return VerificationResult.reject(RejectionReason.TRANSPORT_ERROR)

        if data.get("success") is True:
            log.info("recaptcha_verified", ip=ip, hostname=data.get("hostname"))
            return VerificationResult.accept()

        error_codes = _parse_error_codes(data.get("error-codes"))
        log.warning("recaptcha_verification_failed", ip=ip, error_codes=list(error_codes))
        return VerificationResult.reject(
            RejectionReason.VERIFICATION_FAILED, error_codes
        )
