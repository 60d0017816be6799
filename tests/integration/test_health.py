"""Integration tests for GET /health."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, GatewaySettings, LoggingSettings, SentrySettings


def _build_test_app(private_key: str, recaptcha_secret: str = "secret"):
    settings = AppSettings(
        gateway=GatewaySettings(private_key=private_key, recaptcha_secret=recaptcha_secret),
        logging=LoggingSettings(),
        sentry=SentrySettings(sentry_dsn=""),
    )
    return create_app(settings, http_client=MagicMock())


class TestHealthEndpoint:
    def test_healthy_when_configured(self, zero_key_b64):
        with TestClient(_build_test_app(zero_key_b64)) as client:
            resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "status": "healthy",
            "checks": {"signing_key": "ok", "recaptcha_secret": "ok"},
        }

    def test_unhealthy_when_key_invalid(self):
        with TestClient(_build_test_app("not-a-key")) as client:
            resp = client.get("/health")
        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "unhealthy"
        assert body["checks"]["signing_key"] == "error"

    def test_unhealthy_when_secret_missing(self, zero_key_b64):
        with TestClient(_build_test_app(zero_key_b64, recaptcha_secret="")) as client:
            resp = client.get("/health")
        assert resp.status_code == 503
        assert resp.json()["checks"]["recaptcha_secret"] == "not_configured"

    def test_health_makes_no_outbound_call(self, zero_key_b64):
        http = MagicMock()
        settings = AppSettings(
            gateway=GatewaySettings(private_key=zero_key_b64, recaptcha_secret="s"),
            logging=LoggingSettings(),
            sentry=SentrySettings(sentry_dsn=""),
        )
        with TestClient(create_app(settings, http_client=http)) as client:
            client.get("/health")
        http.post.assert_not_called()
