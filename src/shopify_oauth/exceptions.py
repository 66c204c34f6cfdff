"""Authentication exceptions for shopify-oauth."""

from typing import Optional


class ConfigurationError(TypeError):
    """Raised when the strategy is constructed with missing options."""

    def __init__(self, message: str = "Invalid strategy configuration"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(Exception):
    """Base authentication error."""

    def __init__(self, message: str = "Authentication failed"):
        self.message = message
        super().__init__(self.message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when the verify callback rejects the authenticated shop."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class OAuthError(AuthenticationError):
    """Raised when OAuth authentication fails."""

    def __init__(self, provider: str, message: str = "OAuth authentication failed"):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class InternalOAuthError(OAuthError):
    """Wraps a transport or HTTP error raised while talking to the provider.

    The original exception is kept on ``cause`` and chained as ``__cause__``
    by the code raising this error.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        provider: str = "shopify",
    ):
        self.cause = cause
        super().__init__(provider, message)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} ({type(self.cause).__name__}: {self.cause})"


class ProfileParseError(OAuthError):
    """Raised when the profile response is not JSON or lacks the shop record."""

    def __init__(
        self,
        message: str = "failed to parse user profile",
        body: Optional[str] = None,
        provider: str = "shopify",
    ):
        self.body = body
        super().__init__(provider, message)
