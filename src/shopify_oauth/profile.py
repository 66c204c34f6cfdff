"""Mapping of the Shopify shop resource onto a normalized profile."""

import json
from typing import Any

from pydantic import ValidationError

from shopify_oauth.exceptions import ProfileParseError
from shopify_oauth.schemas import PROVIDER_NAME, ShopifyProfile, ShopResponse


def parse_profile(body: str | bytes) -> ShopifyProfile:
    """
    Parse a ``/admin/shop.json`` response body into a ShopifyProfile.

    Args:
        body: Raw response body

    Returns:
        ShopifyProfile keeping the raw body and the parsed JSON

    Raises:
        ProfileParseError: If the body is not JSON or has no usable ``shop`` record
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    try:
        data: Any = json.loads(body)
    except (TypeError, ValueError, RecursionError) as e:
        raise ProfileParseError(f"profile response is not valid JSON: {e}", body=body) from e

    if not isinstance(data, dict):
        raise ProfileParseError("profile response is not a JSON object", body=body)

    try:
        shop = ShopResponse.model_validate(data).shop
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ProfileParseError(f"malformed shop record: {fields}", body=body) from e

    return ShopifyProfile(
        provider=PROVIDER_NAME,
        id=shop.id,
        owner=shop.shop_owner,
        email=shop.email,
        name=shop.name,
        url=shop.domain,
        phone=shop.phone,
        currency=shop.currency,
        country=shop.country,
        address=shop.address1,
        city=shop.city,
        state=shop.province_code,
        zip=shop.zip,
        raw=body,
        json_data=data,
    )
