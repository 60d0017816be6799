"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file) once,
when create_app() builds the AppSettings instance. The resulting object is
treated as read-only for the lifetime of the process.

Secrets are deliberately optional: a missing or malformed PRIVATE_KEY or
RECAPTCHA_SECRET does not stop the process from starting. Every submission
fails with a 500 instead, until an operator fixes the configuration.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LISTEN_HOST = "127.0.0.1"
DEFAULT_LISTEN_PORT = 6770

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # base64-encoded 32-byte Ed25519 seed
    private_key: str = ""

    recaptcha_secret: str = ""
    recaptcha_site_key: str = ""
    recaptcha_verify_url: str = RECAPTCHA_VERIFY_URL
    recaptcha_timeout_seconds: float = 5.0


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production

    @model_validator(mode="after")
    def _json_in_production(self) -> "LoggingSettings":
        if self.env == "production" and "log_format" not in self.model_fields_set:
            self.log_format = "json"
        return self


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1
    sentry_profile_sample_rate: float = 0.05


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Core
    app_name: str = "captcha-gateway"
    listen_addr: str = ""

    # OpenAPI docs URL (None disables the docs UI)
    docs_url: Optional[str] = None

    # Sub-configs (composed via model_validator below)
    gateway: Optional[GatewaySettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.gateway is None:
            self.gateway = GatewaySettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def listen_host_port(self) -> tuple[str, int]:
        """Parse LISTEN_ADDR as ``host:port``, falling back to 127.0.0.1:6770."""
        host, sep, port = self.listen_addr.rpartition(":")
        host = host.strip("[]")
        if not sep or not host or not port.isdigit():
            return DEFAULT_LISTEN_HOST, DEFAULT_LISTEN_PORT
        port_number = int(port)
        if not 0 < port_number < 65536:
            return DEFAULT_LISTEN_HOST, DEFAULT_LISTEN_PORT
        return host, port_number
