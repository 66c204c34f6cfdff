"""OAuth strategies for shopify-oauth."""

from shopify_oauth.strategies.base import BaseOAuthStrategy
from shopify_oauth.strategies.shopify import ShopifyStrategy

__all__ = [
    "BaseOAuthStrategy",
    "ShopifyStrategy",
]
