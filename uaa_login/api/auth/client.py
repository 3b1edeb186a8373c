"""OAuth2 client descriptor for the UAA identity provider."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from config.settings import DEFAULT_REDIRECT_URL, ProviderConfig


class AuthStyle(str, Enum):
    """How client credentials are presented to the token endpoint."""

    IN_HEADER = "header"
    IN_PARAMS = "params"


@dataclass(frozen=True)
class OAuthClientDescriptor:
    """Immutable OAuth2 client: credentials, endpoints and redirect URI."""

    redirect_url: str
    client_id: str
    client_secret: str
    scopes: tuple[str, ...]
    token_url: str
    auth_url: str
    userinfo_url: str
    auth_style: AuthStyle = AuthStyle.IN_HEADER

    def authorization_url(self, state: str, offline: bool = True) -> str:
        """Build the provider authorize URL carrying ``state``."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_url,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": state,
        }
        if offline:
            params["access_type"] = "offline"

        separator = "&" if "?" in self.auth_url else "?"
        return f"{self.auth_url}{separator}{urlencode(params)}"


def build_client(
    config: ProviderConfig,
    redirect_url: str = DEFAULT_REDIRECT_URL,
) -> OAuthClientDescriptor:
    """Derive the client descriptor from provider config. Pure."""
    return OAuthClientDescriptor(
        redirect_url=redirect_url,
        client_id=config.client_id,
        client_secret=config.client_secret,
        scopes=("",),
        token_url=f"{config.base_url}/oauth/token",
        auth_url=config.auth_url,
        userinfo_url=f"{config.base_url}/userinfo",
        auth_style=AuthStyle.IN_HEADER,
    )
