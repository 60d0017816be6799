"""
Health check endpoint.

GET /health checks that the gateway is able to sign and verify.
Rules:
- Signing key absent or malformed → "unhealthy" (503).
- Verification secret absent → "unhealthy" (503).
No outbound call is made; the verification service's own availability is
only discovered by real submissions.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import get_gateway_service
from errors import ConfigurationError
from services.gateway_service import GatewayService

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    gateway: GatewayService = Depends(get_gateway_service),
) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    try:
        _ = gateway.signer
        checks["signing_key"] = "ok"
    except ConfigurationError:
        checks["signing_key"] = "error"
        overall = "unhealthy"

    if gateway.captcha_configured:
        checks["recaptcha_secret"] = "ok"
    else:
        checks["recaptcha_secret"] = "not_configured"
        overall = "unhealthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
