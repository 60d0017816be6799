"""Unit tests for AppSettings and sub-configs."""

import pytest

from config import (
    RECAPTCHA_VERIFY_URL,
    AppSettings,
    GatewaySettings,
    LoggingSettings,
)


GATEWAY_VARS = (
    "PRIVATE_KEY",
    "RECAPTCHA_SECRET",
    "RECAPTCHA_SITE_KEY",
    "RECAPTCHA_VERIFY_URL",
    "RECAPTCHA_TIMEOUT_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in GATEWAY_VARS + ("ENV", "LOG_FORMAT", "LOG_LEVEL", "LISTEN_ADDR"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# GatewaySettings
# ---------------------------------------------------------------------------


class TestGatewaySettings:
    def test_defaults(self, clean_env):
        s = GatewaySettings()
        assert s.private_key == ""
        assert s.recaptcha_secret == ""
        assert s.recaptcha_site_key == ""
        assert s.recaptcha_verify_url == RECAPTCHA_VERIFY_URL
        assert s.recaptcha_timeout_seconds == 5.0

    def test_loads_from_env(self, clean_env):
        clean_env.setenv("PRIVATE_KEY", "AAAA")
        clean_env.setenv("RECAPTCHA_SECRET", "shh")
        clean_env.setenv("RECAPTCHA_TIMEOUT_SECONDS", "2.5")
        s = GatewaySettings()
        assert s.private_key == "AAAA"
        assert s.recaptcha_secret == "shh"
        assert s.recaptcha_timeout_seconds == 2.5

    def test_missing_secrets_do_not_raise(self, clean_env):
        # misconfiguration is reported per request, never at startup
        AppSettings()


# ---------------------------------------------------------------------------
# LoggingSettings
# ---------------------------------------------------------------------------


class TestLoggingSettings:
    def test_console_in_development(self, clean_env):
        assert LoggingSettings().log_format == "console"

    def test_json_in_production(self, clean_env):
        clean_env.setenv("ENV", "production")
        assert LoggingSettings().log_format == "json"

    def test_explicit_format_wins_in_production(self, clean_env):
        clean_env.setenv("ENV", "production")
        clean_env.setenv("LOG_FORMAT", "console")
        assert LoggingSettings().log_format == "console"


# ---------------------------------------------------------------------------
# AppSettings
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "listen_addr, expected",
    [
        ("", ("127.0.0.1", 6770)),
        ("0.0.0.0:8080", ("0.0.0.0", 8080)),
        ("[::1]:9000", ("::1", 9000)),
        ("localhost", ("127.0.0.1", 6770)),
        ("127.0.0.1:notaport", ("127.0.0.1", 6770)),
        ("127.0.0.1:70000", ("127.0.0.1", 6770)),
    ],
    ids=["unset", "ipv4", "ipv6", "no_port", "bad_port", "port_out_of_range"],
)
def test_listen_host_port(clean_env, listen_addr, expected):
    clean_env.setenv("LISTEN_ADDR", listen_addr)
    assert AppSettings().listen_host_port == expected


class TestAppSettings:
    def test_sub_configs_populated(self, clean_env):
        s = AppSettings()
        for attr in ("gateway", "logging", "sentry"):
            assert getattr(s, attr) is not None, f"sub-config '{attr}' is None"

    def test_explicit_sub_config_kept(self, clean_env):
        gateway = GatewaySettings(recaptcha_secret="given")
        assert AppSettings(gateway=gateway).gateway.recaptcha_secret == "given"
