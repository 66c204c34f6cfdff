"""FastAPI integration for shopify-oauth."""

from shopify_oauth.api.router import create_router

__all__ = ["create_router"]
