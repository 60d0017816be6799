"""reCAPTCHA implementation of CaptchaProvider.

- one POST per call, form-encoded ``secret`` and ``response``
- no retry and no caching; the caller resubmits to try again
- the timeout is enforced by the injected HttpClient
"""

import httpx

from config import RECAPTCHA_VERIFY_URL
from infrastructure.captcha.protocol import (
    MalformedResponse,
    TransportFailure,
    VerificationOutcome,
    VerificationResult,
)
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)


class RecaptchaProvider:
    def __init__(
        self,
        secret: str,
        http_client: HttpClient,
        verify_url: str = RECAPTCHA_VERIFY_URL,
    ) -> None:
        self._secret = secret
        self._http = http_client
        self._verify_url = verify_url

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    async def verify(self, response: str) -> VerificationResult:
        try:
            resp = await self._http.post(
                self._verify_url,
                data={"secret": self._secret, "response": response},
            )
        except httpx.HTTPError as e:
            log.error(
                "recaptcha_request_failed", error=str(e), error_type=type(e).__name__
            )
            return TransportFailure(error=str(e) or type(e).__name__)

        try:
            data = resp.json()
        except ValueError:
            log.error(
                "recaptcha_response_unparseable",
                status_code=resp.status_code,
                response_text=resp.text[:200],
            )
            return MalformedResponse(detail="response body is not JSON")

        if not isinstance(data, dict) or not isinstance(data.get("success"), bool):
            log.error(
                "recaptcha_response_malformed",
                status_code=resp.status_code,
                response_text=resp.text[:200],
            )
            return MalformedResponse(detail="missing boolean 'success' field")

        success = data["success"]
        if success:
            log.info("recaptcha_verified", hostname=data.get("hostname"))
        else:
            log.warning(
                "recaptcha_verification_failed",
                error_codes=data.get("error-codes", []),
            )
        return VerificationOutcome(success=success)
