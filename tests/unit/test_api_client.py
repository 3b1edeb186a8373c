"""Tests for the OAuth client descriptor and authorize URL."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from config.settings import ProviderConfig
from uaa_login.api.auth.client import AuthStyle, build_client


class TestBuildClient:
    def test_endpoints(self, provider_config: ProviderConfig) -> None:
        client = build_client(provider_config)
        assert client.token_url == "https://uaa.test/oauth/token"
        assert client.userinfo_url == "https://uaa.test/userinfo"
        assert client.auth_url == "https://login.test/oauth/authorize"

    def test_credentials_and_defaults(self, provider_config: ProviderConfig) -> None:
        client = build_client(provider_config)
        assert client.client_id == "test-client"
        assert client.client_secret == "test-secret"
        assert client.scopes == ("",)
        assert client.auth_style is AuthStyle.IN_HEADER
        assert client.redirect_url == "http://localhost:3000/auth/cloudfoundry/callback"

    def test_redirect_override(self, provider_config: ProviderConfig) -> None:
        client = build_client(provider_config, redirect_url="https://app.example/cb")
        assert client.redirect_url == "https://app.example/cb"

    def test_deterministic(self, provider_config: ProviderConfig) -> None:
        assert build_client(provider_config) == build_client(provider_config)


class TestAuthorizationUrl:
    def test_query_parameters(self, provider_config: ProviderConfig) -> None:
        url = build_client(provider_config).authorization_url("st4te")
        parts = urlsplit(url)
        query = parse_qs(parts.query, keep_blank_values=True)

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == provider_config.auth_url
        assert query == {
            "client_id": ["test-client"],
            "redirect_uri": ["http://localhost:3000/auth/cloudfoundry/callback"],
            "response_type": ["code"],
            "scope": [""],
            "state": ["st4te"],
            "access_type": ["offline"],
        }

    def test_online_access(self, provider_config: ProviderConfig) -> None:
        url = build_client(provider_config).authorization_url("s", offline=False)
        assert "access_type" not in parse_qs(urlsplit(url).query)

    def test_auth_url_with_existing_query(self) -> None:
        config = ProviderConfig("id", "secret", "https://uaa.test", "https://login.test/authorize?zone=dev")
        url = build_client(config).authorization_url("s")
        assert url.startswith("https://login.test/authorize?zone=dev&client_id=id")
