"""
GatewayService: the verify-then-sign transaction.

Routes call check_configuration() before reading the form, then
authorize() with the parsed Submission. Every failure is raised as an
AppError subclass and becomes a terminal response; nothing is retried or
remembered between requests.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from errors import CaptchaRejectedError, ConfigurationError, UpstreamError
from infrastructure.captcha.protocol import (
    CaptchaProvider,
    MalformedResponse,
    TransportFailure,
)
from schemas.dto.requests.submission import Submission
from shared.logging import get_logger
from shared.redirects import compose_redirect_url
from shared.signing import TokenSigner

log = get_logger(__name__)


def _redirect_host(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


class GatewayService:
    def __init__(self, encoded_signing_key: str, captcha: CaptchaProvider) -> None:
        self._encoded_signing_key = encoded_signing_key
        self._captcha = captcha
        self._signer: Optional[TokenSigner] = None

    @property
    def signer(self) -> TokenSigner:
        """The TokenSigner for the configured key.

        Built on first successful use and reused afterwards. A bad key is
        re-checked (and re-raised) on every access, so each request reports
        the same ConfigurationError until the configuration is fixed.
        """
        if self._signer is None:
            try:
                self._signer = TokenSigner.from_base64(self._encoded_signing_key)
            except ConfigurationError as e:
                log.error("signing_key_invalid", reason=e.message)
                raise
        return self._signer

    @property
    def captcha_configured(self) -> bool:
        return self._captcha.configured

    def check_configuration(self) -> None:
        """Raise ConfigurationError if the gateway cannot sign or verify."""
        _ = self.signer
        if not self.captcha_configured:
            log.error("recaptcha_secret_not_configured")
            raise ConfigurationError("Recaptcha secret is not set.")

    async def authorize(self, submission: Submission) -> str:
        """Verify the CAPTCHA and return the signed redirect location.

        Raises:
            ConfigurationError: signing key or secret missing/invalid.
            UpstreamError: verification service unreachable or unparseable.
            CaptchaRejectedError: the service said the solution is invalid.
        """
        self.check_configuration()

        result = await self._captcha.verify(submission.challenge_response)

        if isinstance(result, TransportFailure):
            raise UpstreamError(f"Recaptcha request failed: {result.error}")
        if isinstance(result, MalformedResponse):
            raise UpstreamError("Recaptcha response is invalid.")
        if not result.success:
            log.info(
                "submission_rejected",
                redirect_host=_redirect_host(submission.redirect_url),
            )
            raise CaptchaRejectedError("Recaptcha response is invalid.")

        signature_hex = self.signer.sign_hex(submission.request_token)
        log.info(
            "token_signed",
            redirect_host=_redirect_host(submission.redirect_url),
        )
        return compose_redirect_url(
            submission.redirect_url, submission.request_token, signature_hex
        )
