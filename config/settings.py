"""UAA login settings — loaded from environment variables via .env file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"

DEFAULT_REDIRECT_URL = "http://localhost:3000/auth/cloudfoundry/callback"


class Settings(BaseSettings):
    """All configuration flows through this class. Never read env vars directly."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Environment ──────────────────────────────────────────────
    uaa_env: Literal["dev", "prod"] = "dev"
    uaa_log_level: str = "INFO"

    # ── Identity Provider ────────────────────────────────────────
    uaa_client_id: str = ""
    uaa_client_secret: SecretStr = SecretStr("")
    uaa_base_url: str = ""
    uaa_auth_url: str = ""

    # ── OAuth Flow ───────────────────────────────────────────────
    uaa_redirect_url: str = DEFAULT_REDIRECT_URL
    uaa_request_timeout: float = 10.0
    uaa_state_cookie_secure: bool = False


@dataclass(frozen=True)
class ProviderConfig:
    """Immutable identity provider credentials and endpoints."""

    client_id: str
    client_secret: str
    base_url: str
    auth_url: str

    def missing(self) -> list[str]:
        """Names of the environment variables that were left empty."""
        fields = {
            "UAA_CLIENT_ID": self.client_id,
            "UAA_CLIENT_SECRET": self.client_secret,
            "UAA_BASE_URL": self.base_url,
            "UAA_AUTH_URL": self.auth_url,
        }
        return [name for name, value in fields.items() if not value]

    @property
    def is_complete(self) -> bool:
        return not self.missing()


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Singleton settings loader — reads .env once, reuses thereafter."""
    global _settings_instance  # noqa: PLW0603
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def load_provider_config() -> ProviderConfig:
    """Read the four provider values fresh from the environment.

    Unset variables come back as empty strings; callers decide whether an
    incomplete config is fatal.
    """
    settings = Settings()
    return ProviderConfig(
        client_id=settings.uaa_client_id,
        client_secret=settings.uaa_client_secret.get_secret_value(),
        base_url=settings.uaa_base_url.rstrip("/"),
        auth_url=settings.uaa_auth_url,
    )
