"""Pydantic schemas for Shopify authentication."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PROVIDER_NAME = "shopify"


class OAuthToken(BaseModel):
    """Token response from the OAuth access token endpoint."""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    scope: Optional[str] = None
    raw: dict[str, Any] = Field(default_factory=dict, repr=False)


class ShopRecord(BaseModel):
    """The ``shop`` object returned by ``/admin/shop.json``.

    Only ``id`` is required; every other field may be absent or null.
    """

    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    shop_owner: Optional[str] = None
    name: Optional[str] = None
    domain: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    currency: Optional[str] = None
    country: Optional[str] = None
    address1: Optional[str] = None
    city: Optional[str] = None
    province_code: Optional[str] = None
    zip: Optional[str] = None


class ShopResponse(BaseModel):
    """Envelope of the shop profile endpoint."""

    model_config = ConfigDict(extra="allow")

    shop: ShopRecord


class ShopifyProfile(BaseModel):
    """Normalized shop profile handed to the verify callback."""

    model_config = ConfigDict(frozen=True)

    provider: str = PROVIDER_NAME
    id: Union[int, str]

    # Owner info
    owner: Optional[str] = None
    email: Optional[str] = None

    # Shop info
    name: Optional[str] = None
    url: Optional[str] = None
    phone: Optional[str] = None
    currency: Optional[str] = None

    # Address info
    country: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None

    # Passthrough of the response for auditing
    raw: str = Field(default="", repr=False)
    json_data: dict[str, Any] = Field(default_factory=dict, repr=False)

    def public_dict(self) -> dict[str, Any]:
        """Return the normalized fields without the raw response."""
        return self.model_dump(exclude={"raw", "json_data"})

