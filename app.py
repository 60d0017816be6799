"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.recaptcha import RecaptchaProvider
from infrastructure.http_client import HttpClient
from routes.gateway_routes import router as gateway_router
from routes.health_routes import router as health_router
from services.gateway_service import GatewayService
from shared.logging_config import setup_logging
from shared.security_headers import add_security_headers

ASSETS_DIR = Path(__file__).resolve().parent / "assets"


def create_app(
    settings: Optional[AppSettings] = None,
    http_client: Optional[HttpClient] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    Args:
        settings: Loaded from the environment when omitted.
        http_client: Client for the verification service. When omitted the
            app opens its own at startup and closes it at shutdown; a client
            passed in is left open for the caller to close.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        gateway = settings.gateway
        client = http_client or HttpClient(timeout=gateway.recaptcha_timeout_seconds)
        captcha = RecaptchaProvider(
            secret=gateway.recaptcha_secret,
            http_client=client,
            verify_url=gateway.recaptcha_verify_url,
        )
        app.state.settings = settings
        app.state.gateway_service = GatewayService(
            encoded_signing_key=gateway.private_key,
            captcha=captcha,
        )

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        if http_client is None:
            await client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_url else None,
        lifespan=lifespan,
    )

    app.middleware("http")(add_security_headers)

    register_error_handlers(app)
    app.include_router(gateway_router)
    app.include_router(health_router)
    app.mount("/assets", StaticFiles(directory=ASSETS_DIR), name="assets")

    return app
