"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to short plain-text responses, which is what
the CAPTCHA page and downstream callers expect to see.

Non-AppError exceptions bubble up as 500s (with Sentry reporting in production).
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.logging import get_logger
from shared.security_headers import SECURITY_HEADERS

log = get_logger(__name__)


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(AppError):
    """A required submission field is missing or empty."""

    status_code = 400
    error_code = "validation_error"


class CaptchaRejectedError(AppError):
    """The verification service answered ``success: false``."""

    status_code = 400
    error_code = "captcha_rejected"


class ConfigurationError(AppError):
    """Signing key or verification secret is absent or malformed."""

    status_code = 500
    error_code = "configuration_error"


class UpstreamError(AppError):
    """The verification service could not be reached or answered garbage."""

    status_code = 500
    error_code = "upstream_error"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
        log.info(
            "request_failed",
            path=request.url.path,
            status_code=exc.status_code,
            error_code=exc.error_code,
            field=exc.field,
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        if exc.status_code == 404:
            return PlainTextResponse("404 Not Found", status_code=404)
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> PlainTextResponse:
        # Runs outside the http middleware, so the security headers are set here.
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return PlainTextResponse(
            "Internal Server Error", status_code=500, headers=SECURITY_HEADERS
        )
