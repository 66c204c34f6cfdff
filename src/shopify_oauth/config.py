"""Configuration management for shopify-oauth."""

import inspect
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from shopify_oauth.exceptions import ConfigurationError

# Shopify hosts every store under this domain
SHOPIFY_DOMAIN_SUFFIX = ".myshopify.com"
DEFAULT_SCOPE_SEPARATOR = ","

# Dot separated DNS labels of letters, digits and inner hyphens
_HOSTNAME_RE = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)(\.(?!-)[a-z0-9-]{1,63}(?<!-))*$")


class Settings(BaseSettings):
    """Strategy settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Store to authenticate against (bare name or full hostname)
    shop: str = ""

    # App credentials from the Shopify partner dashboard
    client_id: str = ""  # API key
    client_secret: str = ""  # API secret key
    callback_url: str = "http://localhost:8000/auth/shopify/callback"

    # Requested access scopes, comma separated (e.g. "read_products,read_orders")
    scope: str = ""
    scope_separator: str = DEFAULT_SCOPE_SEPARATOR

    # HTTP client timeout in seconds
    http_timeout: float = 10.0

    # Logging: "standard" or "json" lines, optionally mirrored to a file
    log_level: str = "WARNING"
    log_format: str = "standard"
    log_file: Optional[str] = None

    @property
    def scopes(self) -> list[str]:
        """Return the configured scopes as a list."""
        return [s.strip() for s in self.scope.split(",") if s.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def normalize_shop(shop: str) -> str:
    """
    Normalize a shop identifier to the store hostname.

    A value without a dot is treated as the bare store name and gets the
    myshopify.com suffix. A value with a dot is taken as a full hostname.
    Scheme prefixes and trailing slashes are dropped.

    Args:
        shop: Shop identifier, e.g. "acme" or "acme.myshopify.com"

    Returns:
        Hostname, e.g. "acme.myshopify.com"
    """
    host = shop.strip().lower()
    for prefix in ("https://", "http://"):
        if host.startswith(prefix):
            host = host[len(prefix) :]
    host = host.rstrip("/")

    if not host:
        raise ConfigurationError("The shop option is required!")

    if "." not in host:
        host = f"{host}{SHOPIFY_DOMAIN_SUFFIX}"

    if len(host) > 253 or not _HOSTNAME_RE.match(host):
        raise ConfigurationError(f"The shop option is not a valid hostname: {shop!r}")
    return host


def admin_base_url(host: str) -> str:
    """Return the admin API base URL for a store hostname."""
    return f"https://{host}/admin/"


@dataclass(frozen=True)
class ShopifyConfig:
    """Immutable strategy configuration.

    Attributes:
        shop: Normalized store hostname
        client_id: App API key
        client_secret: App API secret key
        callback_url: Redirect target registered with the app
        authorization_url: OAuth authorize endpoint
        token_url: OAuth access token endpoint
        profile_url: Shop resource endpoint used as the profile
        scope: Requested access scopes
        scope_separator: Separator used when joining scopes
    """

    shop: str
    client_id: str
    client_secret: str
    callback_url: Optional[str]
    authorization_url: str
    token_url: str
    profile_url: str
    scope: tuple[str, ...] = field(default_factory=tuple)
    scope_separator: str = DEFAULT_SCOPE_SEPARATOR

    @property
    def base_url(self) -> str:
        return admin_base_url(self.shop)


def build_config(
    shop: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    callback_url: Optional[str] = None,
    authorization_url: Optional[str] = None,
    token_url: Optional[str] = None,
    profile_url: Optional[str] = None,
    scope: Optional[list[str] | tuple[str, ...] | str] = None,
    scope_separator: Optional[str] = None,
) -> ShopifyConfig:
    """
    Derive the strategy configuration from the given options.

    Args:
        shop: Shop identifier (required)
        client_id: App API key (required)
        client_secret: App API secret key (required)
        callback_url: Redirect URI sent with the authorization request
        authorization_url: Override for the authorize endpoint
        token_url: Override for the access token endpoint
        profile_url: Override for the shop profile endpoint
        scope: Scopes as a list or a comma separated string
        scope_separator: Separator for joining scopes (default ",")

    Returns:
        Frozen ShopifyConfig

    Raises:
        ConfigurationError: If a required option is missing
    """
    if shop is None or not str(shop).strip():
        raise ConfigurationError("The shop option is required!")
    if not client_id:
        raise ConfigurationError("The client_id option is required!")
    if not client_secret:
        raise ConfigurationError("The client_secret option is required!")

    host = normalize_shop(shop)
    base_url = admin_base_url(host)

    if isinstance(scope, str):
        scope = [s.strip() for s in scope.split(",") if s.strip()]

    return ShopifyConfig(
        shop=host,
        client_id=client_id,
        client_secret=client_secret,
        callback_url=callback_url,
        authorization_url=authorization_url or base_url + "oauth/authorize",
        token_url=token_url or base_url + "oauth/access_token",
        profile_url=profile_url or base_url + "shop.json",
        scope=tuple(scope or ()),
        scope_separator=scope_separator or DEFAULT_SCOPE_SEPARATOR,
    )


def config_from_settings(settings: Optional[Settings] = None, **overrides) -> ShopifyConfig:
    """Build a ShopifyConfig from environment settings, with keyword overrides."""
    settings = settings or get_settings()
    options = {
        "shop": settings.shop,
        "client_id": settings.client_id,
        "client_secret": settings.client_secret,
        "callback_url": settings.callback_url,
        "scope": settings.scopes,
        "scope_separator": settings.scope_separator,
    }
    options.update({k: v for k, v in overrides.items() if v is not None})
    return build_config(**options)


# Keyword options accepted by build_config
CONFIG_OPTIONS = frozenset(inspect.signature(build_config).parameters)
