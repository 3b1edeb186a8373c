"""OAuth2 authorization code login against a Cloud Foundry UAA server."""

__version__ = "0.1.0"
