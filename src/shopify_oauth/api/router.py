"""OAuth login endpoints for hosting a Shopify strategy in FastAPI."""

import secrets
from collections import OrderedDict
from typing import Any

from fastapi import APIRouter, HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import RedirectResponse

from shopify_oauth.exceptions import InvalidCredentialsError, OAuthError
from shopify_oauth.logging import get_logger, log_failure, log_warning
from shopify_oauth.schemas import ShopifyProfile
from shopify_oauth.strategies.base import BaseOAuthStrategy

logger = get_logger("api")

# Pending login states kept per router; the oldest are dropped past this size
MAX_PENDING_STATES = 1024


def _generate_state() -> str:
    """Generate a secure random state for CSRF protection."""
    return secrets.token_urlsafe(32)


def create_router(
    strategy: BaseOAuthStrategy,
    prefix: str = "/auth/shopify",
    max_pending_states: int = MAX_PENDING_STATES,
) -> APIRouter:
    """
    Build login and callback routes for a strategy.

    States are kept in process memory (use Redis when running several
    workers) and consumed on first use. At most ``max_pending_states``
    unanswered logins are remembered.

    Args:
        strategy: Configured strategy
        prefix: Route prefix
        max_pending_states: Cap on remembered login states

    Returns:
        APIRouter with ``/login`` and ``/callback``
    """
    router = APIRouter(prefix=prefix, tags=["authentication"])
    states: OrderedDict[str, None] = OrderedDict()

    @router.get("/login")
    async def login():
        """Redirect the user agent to the provider's authorization page."""
        state = _generate_state()
        states[state] = None
        while len(states) > max_pending_states:
            states.popitem(last=False)
        return RedirectResponse(
            strategy.authorization_url(state=state),
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )

    @router.get("/callback")
    async def callback(code: str, state: str) -> Any:
        """Exchange the authorization code and return the authenticated user."""
        if states.pop(state, False) is False:
            log_warning(logger, "OAuth callback", "invalid or expired state", {"strategy": strategy.name})
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or expired state",
            )

        try:
            user = await strategy.authenticate(code, state=state)
        except InvalidCredentialsError as e:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
        except OAuthError as e:
            log_failure(logger, "OAuth callback", e, {"strategy": strategy.name})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

        if isinstance(user, ShopifyProfile):
            return user.public_dict()
        return jsonable_encoder(user)

    return router
