"""shopify-oauth - Shopify OAuth 2.0 login strategy."""

from shopify_oauth.config import Settings, ShopifyConfig, build_config, get_settings
from shopify_oauth.exceptions import (
    AuthenticationError,
    ConfigurationError,
    InternalOAuthError,
    InvalidCredentialsError,
    OAuthError,
    ProfileParseError,
)
from shopify_oauth.oauth2 import OAuth2Client
from shopify_oauth.profile import parse_profile
from shopify_oauth.schemas import OAuthToken, ShopifyProfile
from shopify_oauth.strategies.shopify import ShopifyStrategy

__version__ = "0.1.0"
__all__ = [
    # Strategy
    "ShopifyStrategy",
    "OAuth2Client",
    "parse_profile",
    # Configuration
    "Settings",
    "ShopifyConfig",
    "build_config",
    "get_settings",
    # Schemas
    "OAuthToken",
    "ShopifyProfile",
    # Exceptions
    "AuthenticationError",
    "ConfigurationError",
    "InternalOAuthError",
    "InvalidCredentialsError",
    "OAuthError",
    "ProfileParseError",
]
