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

"""Client the shipping form uses to reach this server's tax endpoint."""

from typing import Any, Dict, Optional

import httpx

from storefront_checkout.constants import TAX_ROUTE


class StorefrontClient:
  """Calls the storefront's own API routes."""

  def __init__(
      self,
      base_url: str,
      timeout: float = 10.0,
      transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    self.base_url = base_url.rstrip("/")
    self.timeout = timeout
    self._transport = transport

  async def set_tax_zone(
      self,
      checkout_id: str,
      country: str,
      region: Optional[str] = None,
      zip_code: Optional[str] = None,
  ) -> Dict[str, Any]:
    """Requests a tax calculation for the checkout's destination.

    Returns the decoded response body, which is either the applied tax object
    or an error object with `code` and `message`.
    """
    params = {
        "token": checkout_id,
        "country": country,
        "region": region,
        "zip": zip_code,
    }
    async with httpx.AsyncClient(
        base_url=self.base_url,
        timeout=self.timeout,
        transport=self._transport,
    ) as client:
      response = await client.post(
          TAX_ROUTE,
          params={k: v for k, v in params.items() if v},
          headers={"Content-Type": "application/json"},
      )
    return response.json()
