"""Custom exception hierarchy for the UAA login flow."""

from __future__ import annotations

from typing import Any


class UAALoginError(Exception):
    """Base exception for all login flow errors."""

    event = "oauth_login_failed"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


# ── State Validation ─────────────────────────────────────────────

class MissingStateError(UAALoginError):
    """The oauthstate cookie was not sent back on callback."""

    event = "oauth_state_missing"


class StateMismatchError(UAALoginError):
    """The returned state parameter does not match the cookie."""

    event = "oauth_state_mismatch"


# ── Provider Calls ───────────────────────────────────────────────

class ExchangeFailedError(UAALoginError):
    """Authorization code could not be exchanged for an access token."""

    event = "oauth_exchange_failed"


class ConfigMissingError(ExchangeFailedError):
    """Required UAA_* variables are empty, so no exchange was attempted."""

    event = "oauth_config_missing"


class ProfileFetchFailedError(UAALoginError):
    """The userinfo endpoint could not be reached or rejected the token."""

    event = "oauth_userinfo_failed"


class DecodeFailedError(UAALoginError):
    """The userinfo body is not a JSON object."""

    event = "oauth_userinfo_decode_failed"
