"""FastAPI dependency injection — per-request config and HTTP client."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx

from config.settings import ProviderConfig, Settings, get_settings, load_provider_config

# ── Configuration ─────────────────────────────────────────────────


def get_app_settings() -> Settings:
    """Provide the process-wide settings."""
    return get_settings()


def get_provider_config() -> ProviderConfig:
    """Re-read provider credentials for every request."""
    return load_provider_config()


# ── Outbound HTTP ─────────────────────────────────────────────────


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Provide an httpx client bounded by the configured timeout."""
    timeout = get_settings().uaa_request_timeout
    async with httpx.AsyncClient(timeout=timeout) as client:
        yield client
