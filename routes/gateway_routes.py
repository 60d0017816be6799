"""
CAPTCHA page and submission endpoints.

GET  /            page with the reCAPTCHA widget and the hidden form fields
POST /submit      verify the CAPTCHA, sign the request token, 303 to the caller
GET  /public-key  hex Ed25519 public key for downstream verifiers
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from config import AppSettings
from dependencies import get_gateway_service, get_settings
from schemas.dto.requests.submission import parse_submission
from services.gateway_service import GatewayService
from shared.multipart_form import read_multipart_fields

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter(tags=["gateway"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, settings: AppSettings = Depends(get_settings)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {"recaptcha_site_key": settings.gateway.recaptcha_site_key},
    )


@router.post("/submit")
async def submit(
    request: Request,
    gateway: GatewayService = Depends(get_gateway_service),
) -> PlainTextResponse:
    gateway.check_configuration()

    parts = await read_multipart_fields(
        request.headers.get("content-type", ""), request.stream()
    )
    submission = parse_submission(parts)
    location = await gateway.authorize(submission)

    return PlainTextResponse(
        "Redirecting...",
        status_code=303,
        headers={"location": location},
    )


@router.get("/public-key")
async def public_key(
    gateway: GatewayService = Depends(get_gateway_service),
) -> PlainTextResponse:
    return PlainTextResponse(gateway.signer.public_key_hex)
