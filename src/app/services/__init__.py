"""Serviços de aplicação."""

from app.services.oauth_token_refresher import OAuthTokenRefresher

__all__ = ["OAuthTokenRefresher"]
