"""Response headers that keep the CAPTCHA page from being framed or sniffed."""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request, Response

SECURITY_HEADERS = {
    "content-security-policy": (
        "default-src https:; base-uri 'none'; form-action https:; "
        "frame-ancestors 'none';"
    ),
    "x-frame-options": "DENY",
    "x-content-type-options": "nosniff",
}


async def add_security_headers(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.append(name, value)
    return response
