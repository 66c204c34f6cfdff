"""Shopify OAuth strategy implementation."""

import inspect
import logging
from typing import Any, Optional

import httpx

from shopify_oauth.config import (
    CONFIG_OPTIONS,
    Settings,
    ShopifyConfig,
    build_config,
    config_from_settings,
    get_settings,
)
from shopify_oauth.exceptions import (
    ConfigurationError,
    InternalOAuthError,
    InvalidCredentialsError,
    OAuthError,
)
from shopify_oauth.logging import get_logger, log_failure
from shopify_oauth.oauth2 import DEFAULT_TIMEOUT, OAuth2Client
from shopify_oauth.profile import parse_profile
from shopify_oauth.schemas import PROVIDER_NAME, ShopifyProfile
from shopify_oauth.strategies.base import BaseOAuthStrategy, DoneCallback, VerifyCallback

logger = get_logger("strategy")


class ShopifyStrategy(BaseOAuthStrategy):
    """
    Authenticates a shop by delegating to Shopify's OAuth 2.0 flow.

    The application supplies a ``verify`` callback receiving
    ``(access_token, refresh_token, profile)`` and returning the user, or a
    falsy value when the shop must not be logged in.

    Example:
        strategy = ShopifyStrategy(
            {
                "shop": "acme",
                "client_id": "123-456-789",
                "client_secret": "shhh-its-a-secret",
                "callback_url": "https://www.example.net/auth/shopify/callback",
            },
            verify=find_or_create_user,
        )
    """

    def __init__(
        self,
        options: ShopifyConfig | dict[str, Any],
        verify: Optional[VerifyCallback] = None,
        oauth_client: Optional[OAuth2Client] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the strategy.

        Args:
            options: ShopifyConfig or a dict of build_config() keyword options
            verify: Callback turning tokens and profile into a user
            oauth_client: Pre-built OAuth2 client (defaults to one built from options)
            http_client: Shared HTTP client for the default OAuth2 client
            timeout: Request timeout for the default OAuth2 client

        Raises:
            ConfigurationError: If the shop or credentials are missing or an option is unknown
        """
        if isinstance(options, ShopifyConfig):
            self.config = options
        else:
            options = dict(options or {})
            unknown = sorted(set(options) - CONFIG_OPTIONS)
            if unknown:
                raise ConfigurationError(f"Unknown strategy option(s): {', '.join(unknown)}")
            self.config = build_config(**options)

        self.verify = verify
        self.oauth_client = oauth_client or OAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            authorization_url=self.config.authorization_url,
            token_url=self.config.token_url,
            http_client=http_client,
            timeout=timeout,
            provider=PROVIDER_NAME,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        verify: Optional[VerifyCallback] = None,
        **overrides: Any,
    ) -> "ShopifyStrategy":
        """Build a strategy from ``SHOPIFY_*`` environment settings."""
        settings = settings or get_settings()
        config = config_from_settings(settings, **overrides)
        return cls(config, verify=verify, timeout=settings.http_timeout)

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    def authorization_url(self, state: Optional[str] = None, scope: Optional[list[str]] = None) -> str:
        scopes = list(scope) if scope is not None else list(self.config.scope)
        return self.oauth_client.get_authorize_url(
            redirect_uri=self.config.callback_url,
            scope=self.config.scope_separator.join(scopes) or None,
            state=state,
        )

    async def fetch_profile(self, access_token: str) -> ShopifyProfile:
        """
        Retrieve the shop profile from Shopify.

        Args:
            access_token: Access token for the shop

        Returns:
            ShopifyProfile mapped from ``/admin/shop.json``

        Raises:
            InternalOAuthError: If the request fails
            ProfileParseError: If the response cannot be mapped
        """
        try:
            body, _ = await self.oauth_client.get(self.config.profile_url, access_token)
        except httpx.HTTPError as e:
            log_failure(logger, "Profile fetch", e, {"shop": self.config.shop})
            raise InternalOAuthError("failed to fetch user profile", e) from e

        try:
            return parse_profile(body)
        except OAuthError as e:
            log_failure(logger, "Profile parse", e, {"shop": self.config.shop})
            raise

    async def user_profile(self, access_token: str, done: DoneCallback) -> None:
        """
        Callback form of fetch_profile.

        Never raises for fetch or parse failures; the error is handed to
        ``done(error, None)`` and a profile to ``done(None, profile)``.
        """
        try:
            profile = await self.fetch_profile(access_token)
        except OAuthError as e:
            await _maybe_await(done(e, None))
            return
        await _maybe_await(done(None, profile))

    async def authenticate(self, code: str, state: Optional[str] = None) -> Any:
        token = await self.oauth_client.get_access_token(code, redirect_uri=self.config.callback_url)
        profile = await self.fetch_profile(token.access_token)

        if self.verify is None:
            logger.info(f"Authenticated shop {self.config.shop}")
            return profile

        user = await _maybe_await(self.verify(token.access_token, token.refresh_token, profile))
        if not user:
            log_failure(
                logger,
                "Verify",
                "verify callback rejected the shop",
                {"shop": self.config.shop},
                level=logging.INFO,
            )
            raise InvalidCredentialsError()

        logger.info(f"Authenticated shop {self.config.shop}")
        return user


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value
