"""Double-submit CSRF state for the login redirect.

The state value is written to a short-lived cookie and echoed through the
provider's authorize redirect. On callback the two copies must match; no
server-side record is kept.
"""

from __future__ import annotations

import hmac
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Response

from uaa_login.core.exceptions import MissingStateError, StateMismatchError

STATE_COOKIE = "oauthstate"
STATE_TTL = timedelta(minutes=20)
STATE_BYTES = 16


def generate_state_token() -> str:
    """16 random bytes, base64url without padding."""
    return secrets.token_urlsafe(STATE_BYTES)


def issue_state(response: Response, secure: bool = False) -> str:
    """Set the oauthstate cookie on ``response`` and return its value."""
    state = generate_state_token()
    response.set_cookie(
        key=STATE_COOKIE,
        value=state,
        expires=datetime.now(timezone.utc) + STATE_TTL,
        path="/",
        httponly=True,
        secure=secure,
        samesite="lax",
    )
    return state


def verify_state(cookie_value: str | None, returned_state: str | None) -> None:
    """Raise unless the callback's state equals the cookie value."""
    if not cookie_value:
        raise MissingStateError("oauthstate cookie not present")

    if not hmac.compare_digest(
        cookie_value.encode(), (returned_state or "").encode()
    ):
        raise StateMismatchError(
            "invalid oauth state",
            context={"state_present": bool(returned_state)},
        )


def clear_state(response: Response) -> None:
    """Expire the state cookie so each token is used once."""
    response.delete_cookie(key=STATE_COOKIE, path="/")
