"""Authentication routes — UAA login redirect and callback."""

from __future__ import annotations

import json

import httpx
from fastapi import APIRouter, Cookie, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from config.settings import ProviderConfig, Settings
from uaa_login.api.auth.client import build_client
from uaa_login.api.auth.oauth import get_user_data
from uaa_login.api.auth.state import clear_state, issue_state, verify_state
from uaa_login.api.deps import get_app_settings, get_http_client, get_provider_config
from uaa_login.core.exceptions import UAALoginError
from uaa_login.core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/auth/cloudfoundry", tags=["auth"])
root_router = APIRouter(tags=["auth"])


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/login")
async def oauth_login(
    config: ProviderConfig = Depends(get_provider_config),
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """Set the state cookie and redirect to the UAA authorize page."""
    missing = config.missing()
    if missing:
        log.warning("oauth_config_incomplete", missing=missing)

    client = build_client(config, redirect_url=settings.uaa_redirect_url)
    response = RedirectResponse(url="", status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    state = issue_state(response, secure=settings.uaa_state_cookie_secure)
    url = client.authorization_url(state, offline=True)
    response.headers["location"] = url

    log.info("oauth_redirect", url=url)
    return response


@root_router.get("/")
async def root(
    config: ProviderConfig = Depends(get_provider_config),
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """Landing page — starts the login flow."""
    return await oauth_login(config=config, settings=settings)


@router.get("/callback", response_model=None)
async def oauth_callback(
    state: str = "",
    code: str = "",
    oauthstate: str | None = Cookie(default=None),
    config: ProviderConfig = Depends(get_provider_config),
    settings: Settings = Depends(get_app_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> PlainTextResponse | RedirectResponse:
    """Validate state, exchange the code and print the UAA profile."""
    log.info("oauth_callback_reached")

    response: PlainTextResponse | RedirectResponse
    try:
        verify_state(oauthstate, state)
        user_info = await get_user_data(
            config, code, http, redirect_url=settings.uaa_redirect_url
        )
    except UAALoginError as exc:
        log.warning(exc.event, error=str(exc), **exc.context)
        response = _redirect_home()
    else:
        log.info("oauth_login_success", fields=sorted(user_info))
        response = PlainTextResponse(f"user info: {json.dumps(user_info)}\n")

    clear_state(response)
    return response
