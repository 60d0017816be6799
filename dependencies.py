"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Everything they hand out was built once in the
app lifespan and is shared read-only between requests.
"""

from __future__ import annotations

from fastapi import Request

from config import AppSettings
from services.gateway_service import GatewayService


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_gateway_service(request: Request) -> GatewayService:
    """Return the GatewayService built at startup."""
    return request.app.state.gateway_service
