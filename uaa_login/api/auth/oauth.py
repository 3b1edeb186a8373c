"""Authorization code exchange and userinfo fetch against UAA."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, quote_plus

import httpx

from config.settings import ProviderConfig
from uaa_login.api.auth.client import AuthStyle, OAuthClientDescriptor, build_client
from uaa_login.core.exceptions import (
    ConfigMissingError,
    DecodeFailedError,
    ExchangeFailedError,
    ProfileFetchFailedError,
)
from uaa_login.core.logging import get_logger

log = get_logger(__name__)

_CANONICAL_TOKEN_TYPES = {"bearer": "Bearer", "mac": "MAC", "basic": "Basic"}


@dataclass(frozen=True)
class AccessToken:
    """Token endpoint response. Used for a single userinfo request."""

    access_token: str
    token_type: str = "Bearer"
    refresh_token: str = ""
    expires_in: int | None = None
    scope: str = ""

    def authorization_header(self) -> str:
        token_type = _CANONICAL_TOKEN_TYPES.get(
            self.token_type.lower(), self.token_type
        )
        return f"{token_type or 'Bearer'} {self.access_token}"


def _parse_token_body(resp: httpx.Response) -> dict[str, Any]:
    """Token responses are JSON per RFC 6749, but some servers send forms."""
    content_type = resp.headers.get("content-type", "").split(";")[0].strip()
    if content_type in ("application/x-www-form-urlencoded", "text/plain"):
        return dict(parse_qsl(resp.text))
    body = resp.json()
    if not isinstance(body, dict):
        raise ValueError("token response is not a JSON object")
    return body


def _token_from_body(body: dict[str, Any]) -> AccessToken:
    access_token = body.get("access_token")
    if not access_token:
        raise ExchangeFailedError("server response missing access_token")

    expires_in: int | None = None
    if body.get("expires_in") not in (None, ""):
        try:
            expires_in = int(body["expires_in"])
        except (TypeError, ValueError):
            expires_in = None

    return AccessToken(
        access_token=str(access_token),
        token_type=str(body.get("token_type") or "Bearer"),
        refresh_token=str(body.get("refresh_token") or ""),
        expires_in=expires_in,
        scope=str(body.get("scope") or ""),
    )


async def exchange_code(
    client: OAuthClientDescriptor,
    code: str,
    http: httpx.AsyncClient,
) -> AccessToken:
    """POST the authorization code to the token endpoint."""
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": client.redirect_url,
    }
    auth: httpx.BasicAuth | None = None
    if client.auth_style is AuthStyle.IN_HEADER:
        auth = httpx.BasicAuth(quote_plus(client.client_id), quote_plus(client.client_secret))
    else:
        data["client_id"] = client.client_id
        data["client_secret"] = client.client_secret

    try:
        resp = await http.post(
            client.token_url,
            data=data,
            auth=auth,
            headers={"Accept": "application/json"},
        )
    except httpx.HTTPError as exc:
        raise ExchangeFailedError(
            f"code exchange wrong: {exc}",
            context={"token_url": client.token_url},
        ) from exc

    if not resp.is_success:
        raise ExchangeFailedError(
            f"code exchange wrong: token endpoint returned {resp.status_code}",
            context={"status_code": resp.status_code, "body": resp.text[:200]},
        )

    try:
        body = _parse_token_body(resp)
    except ValueError as exc:
        raise ExchangeFailedError(f"code exchange wrong: {exc}") from exc

    return _token_from_body(body)


async def fetch_user_info(
    client: OAuthClientDescriptor,
    token: AccessToken,
    http: httpx.AsyncClient,
) -> dict[str, Any]:
    """GET the userinfo endpoint and decode its JSON object."""
    try:
        resp = await http.get(
            client.userinfo_url,
            headers={
                "Authorization": token.authorization_header(),
                "Accept": "application/json",
            },
        )
    except httpx.HTTPError as exc:
        raise ProfileFetchFailedError(
            f"failed to get user info: {exc}",
            context={"userinfo_url": client.userinfo_url},
        ) from exc

    if not resp.is_success:
        raise ProfileFetchFailedError(
            f"failed to get user info: userinfo returned {resp.status_code}",
            context={"status_code": resp.status_code},
        )

    try:
        user_info = json.loads(resp.content)
    except ValueError as exc:
        raise DecodeFailedError(f"failed to decode user info: {exc}") from exc

    if not isinstance(user_info, dict):
        raise DecodeFailedError(
            "failed to decode user info: expected a JSON object",
            context={"type": type(user_info).__name__},
        )
    return user_info


async def get_user_data(
    config: ProviderConfig,
    code: str,
    http: httpx.AsyncClient,
    redirect_url: str,
) -> dict[str, Any]:
    """Exchange ``code`` and return the caller's UAA profile."""
    missing = config.missing()
    if missing:
        raise ConfigMissingError(
            "provider configuration incomplete",
            context={"missing": missing},
        )

    client = build_client(config, redirect_url=redirect_url)
    token = await exchange_code(client, code, http)
    log.debug("oauth_token_received", token_type=token.token_type, scope=token.scope)
    return await fetch_user_info(client, token, http)
