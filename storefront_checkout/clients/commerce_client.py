#   Copyright 2026 UCP Authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Client for the commerce platform's REST API.

Storefront calls (locale lookups, shipping options, live totals) use the
public key. Merchant details and checkout updates require the secret key.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from storefront_checkout.constants import CHEC_AUTH_HEADER
from storefront_checkout.exceptions import CommerceApiError
from storefront_checkout.exceptions import InvalidIdentifierError
from storefront_checkout.models import CheckoutLive
from storefront_checkout.models import Merchant
from storefront_checkout.models import ShippingCheck
from storefront_checkout.models import ShippingOption

logger = logging.getLogger(__name__)


def _segment(value: Optional[str]) -> str:
  """Percent-encodes a value for use as a single URL path segment.

  Raises:
    InvalidIdentifierError: The value is empty or a dot segment, which the URL
      parser would collapse into a different path.
  """
  if not value or value in (".", ".."):
    raise InvalidIdentifierError(f"Invalid path identifier: {value!r}")
  return quote(value, safe="")


class CommerceClient:
  """Thin async wrapper over the commerce platform endpoints we depend on."""

  def __init__(
      self,
      api_url: str,
      public_key: str,
      secret_key: str,
      timeout: float = 10.0,
      transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    self.api_url = api_url.rstrip("/")
    self.public_key = public_key
    self.secret_key = secret_key
    self.timeout = timeout
    self._transport = transport

  async def _request(
      self,
      method: str,
      path: str,
      params: Optional[Dict[str, Any]] = None,
      body: Optional[Dict[str, Any]] = None,
      use_secret_key: bool = False,
  ) -> Any:
    """Sends a request and returns the decoded JSON body."""
    headers = {
        CHEC_AUTH_HEADER: (
            self.secret_key if use_secret_key else self.public_key
        ),
        "Accept": "application/json",
    }
    if params:
      params = {k: v for k, v in params.items() if v is not None}

    try:
      async with httpx.AsyncClient(
          base_url=self.api_url,
          timeout=self.timeout,
          transport=self._transport,
      ) as client:
        response = await client.request(
            method, path, params=params, json=body, headers=headers
        )
    except httpx.RequestError as e:
      raise CommerceApiError(
          f"Network error calling {method} {path}: {e}"
      ) from e

    if response.is_error:
      logger.error(
          "Commerce API %s %s failed: Status %d",
          method,
          path,
          response.status_code,
      )
      raise CommerceApiError(
          f"Commerce API {method} {path} returned {response.status_code}",
          upstream_status=response.status_code,
      )

    try:
      return response.json()
    except ValueError as e:
      raise CommerceApiError(
          f"Commerce API {method} {path} returned invalid JSON"
      ) from e

  async def list_shipping_countries(self, checkout_id: str) -> Dict[str, str]:
    """Returns the countries the checkout can ship to, keyed by ISO code."""
    data = await self._request(
        "GET", f"/v1/services/locale/{_segment(checkout_id)}/countries"
    )
    return data.get("countries") or {}

  async def list_shipping_subdivisions(
      self, checkout_id: str, country: str
  ) -> Dict[str, str]:
    """Returns the subdivisions of a country, keyed by combined region code."""
    data = await self._request(
        "GET",
        f"/v1/services/locale/{_segment(checkout_id)}/countries/"
        f"{_segment(country)}/subdivisions",
    )
    return data.get("subdivisions") or {}

  async def get_shipping_options(
      self, checkout_id: str, country: str, region: Optional[str] = None
  ) -> List[ShippingOption]:
    """Returns the shipping options available for a destination."""
    data = await self._request(
        "GET",
        f"/v1/checkouts/{_segment(checkout_id)}/helper/shipping_options",
        params={"country": country, "region": region or None},
    )
    return [ShippingOption.model_validate(option) for option in data or []]

  async def check_shipping_option(
      self,
      checkout_id: str,
      shipping_option_id: str,
      country: str,
      region: Optional[str] = None,
  ) -> ShippingCheck:
    """Applies a shipping option to the checkout and returns the new totals."""
    data = await self._request(
        "GET",
        f"/v1/checkouts/{_segment(checkout_id)}/check/shipping",
        params={
            "shipping_option_id": shipping_option_id,
            "country": country,
            "region": region or None,
        },
    )
    return ShippingCheck.model_validate(data)

  async def get_live(self, checkout_id: str) -> CheckoutLive:
    """Returns the live object of a checkout."""
    data = await self._request(
        "GET", f"/v1/checkouts/{_segment(checkout_id)}/live"
    )
    return CheckoutLive.model_validate(data)

  async def get_merchant(self) -> Merchant:
    """Returns the merchant, including its address."""
    data = await self._request("GET", "/v1/merchants", use_secret_key=True)
    return Merchant.model_validate(data)

  async def update_checkout(
      self, checkout_id: str, body: Dict[str, Any]
  ) -> Dict[str, Any]:
    """Updates a checkout and returns the platform's response body."""
    return await self._request(
        "PUT",
        f"/v1/checkouts/{_segment(checkout_id)}",
        body=body,
        use_secret_key=True,
    )
