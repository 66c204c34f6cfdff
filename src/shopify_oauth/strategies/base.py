"""Base OAuth strategy class."""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Union

from shopify_oauth.schemas import ShopifyProfile

# verify(access_token, refresh_token, profile) -> user (or awaitable user)
VerifyCallback = Callable[[str, Optional[str], Any], Union[Any, Awaitable[Any]]]

# done(error, profile)
DoneCallback = Callable[[Optional[Exception], Optional[ShopifyProfile]], Any]


class BaseOAuthStrategy(ABC):
    """Abstract base class for OAuth login strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name (e.g., 'shopify')."""
        pass

    @abstractmethod
    def authorization_url(self, state: Optional[str] = None, scope: Optional[list[str]] = None) -> str:
        """
        Get the OAuth authorization URL.

        Args:
            state: CSRF state token
            scope: Optional scopes overriding the configured ones

        Returns:
            Authorization URL to redirect the user to
        """
        pass

    @abstractmethod
    async def fetch_profile(self, access_token: str) -> Any:
        """
        Retrieve the normalized profile for an access token.

        Raises:
            OAuthError: If the profile cannot be fetched or parsed
        """
        pass

    @abstractmethod
    async def authenticate(self, code: str, state: Optional[str] = None) -> Any:
        """
        Complete the login for an authorization code.

        Args:
            code: Authorization code from the OAuth callback
            state: State echoed back by the provider

        Returns:
            The user produced by the verify callback

        Raises:
            AuthenticationError: If any step of the login fails
        """
        pass
