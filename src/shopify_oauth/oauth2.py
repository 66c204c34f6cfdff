"""Generic OAuth 2.0 authorization code client.

Builds authorization redirects, exchanges codes for tokens and performs
authenticated GET requests. Provider specifics live in the strategies that
hold an instance of this client.
"""

import urllib.parse
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from shopify_oauth.exceptions import InternalOAuthError
from shopify_oauth.logging import get_logger, log_failure
from shopify_oauth.schemas import OAuthToken

logger = get_logger("oauth2")

DEFAULT_TIMEOUT = 10.0


class OAuth2Client:
    """OAuth 2.0 client for the authorization code grant."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        authorization_url: str,
        token_url: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        provider: str = "oauth2",
    ):
        """
        Initialize the OAuth2 client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            authorization_url: Authorization endpoint
            token_url: Token endpoint
            http_client: Optional shared HTTP client; not closed by this class
            timeout: Timeout for requests made with an internal client
            provider: Provider name used in error messages
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorization_url = authorization_url
        self.token_url = token_url
        self.timeout = timeout
        self.provider = provider
        self._http_client = http_client

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    def get_authorize_url(
        self,
        redirect_uri: Optional[str] = None,
        scope: Optional[str] = None,
        state: Optional[str] = None,
        **params: str,
    ) -> str:
        """
        Build the authorization URL the user agent is redirected to.

        Args:
            redirect_uri: Callback URL
            scope: Space or separator-joined scope string
            state: CSRF state token
            **params: Extra query parameters

        Returns:
            Authorization URL
        """
        query = {"response_type": "code", "client_id": self.client_id}
        if redirect_uri:
            query["redirect_uri"] = redirect_uri
        if scope:
            query["scope"] = scope
        if state:
            query["state"] = state
        query.update(params)

        separator = "&" if "?" in self.authorization_url else "?"
        return f"{self.authorization_url}{separator}{urllib.parse.urlencode(query)}"

    async def get_access_token(self, code: str, redirect_uri: Optional[str] = None) -> OAuthToken:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the callback
            redirect_uri: Redirect URI used in the authorization request

        Returns:
            OAuthToken

        Raises:
            InternalOAuthError: If the exchange fails
        """
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
        }
        if redirect_uri:
            data["redirect_uri"] = redirect_uri

        try:
            async with self._client() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            log_failure(logger, "Token exchange", e, {"token_url": self.token_url})
            raise InternalOAuthError("failed to obtain access token", e, self.provider) from e

        try:
            token_data = response.json()
        except ValueError as e:
            log_failure(logger, "Token exchange", e, {"token_url": self.token_url})
            raise InternalOAuthError("failed to obtain access token", e, self.provider) from e

        if not isinstance(token_data, dict) or not token_data.get("access_token"):
            error = ValueError("No access token in response")
            log_failure(logger, "Token exchange", error, {"token_url": self.token_url})
            raise InternalOAuthError("failed to obtain access token", error, self.provider)

        logger.debug(f"Obtained access token from {self.token_url}")
        return OAuthToken(
            access_token=token_data["access_token"],
            refresh_token=token_data.get("refresh_token"),
            token_type=token_data.get("token_type") or "bearer",
            scope=token_data.get("scope"),
            raw=token_data,
        )

    async def get(self, url: str, access_token: str) -> tuple[str, httpx.Response]:
        """
        Perform an authenticated GET request.

        Shopify reads the token from ``X-Shopify-Access-Token``; the bearer
        header is sent too for providers following RFC 6750.

        Args:
            url: Resource URL
            access_token: OAuth access token

        Returns:
            Tuple of (response body, response)

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status
        """
        async with self._client() as client:
            response = await client.get(
                url,
                headers={
                    "Accept": "application/json",
                    "Authorization": f"Bearer {access_token}",
                    "X-Shopify-Access-Token": access_token,
                },
            )
            response.raise_for_status()
            return response.text, response
