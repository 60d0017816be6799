"""
Shared test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during tests. Tests control config through monkeypatch.setenv() or by
passing settings objects directly.
"""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def zero_key() -> bytes:
    """32 zero bytes: a valid (if illustrative) Ed25519 seed."""
    return bytes(32)


@pytest.fixture
def zero_key_b64(zero_key) -> str:
    return base64.b64encode(zero_key).decode()


@pytest.fixture
def verify_response():
    """Build a fake siteverify response carrying *payload* as its JSON body."""

    def _make(payload, status_code: int = 200) -> MagicMock:
        resp = MagicMock(status_code=status_code, text=str(payload))
        resp.json.return_value = payload
        return resp

    return _make


@pytest.fixture
def http_client():
    """An HttpClient stand-in whose post() is an AsyncMock."""
    http = MagicMock()
    http.post = AsyncMock()
    return http
