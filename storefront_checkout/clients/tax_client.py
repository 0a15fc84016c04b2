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

"""Client for the tax provider's sales tax API."""

import logging
from typing import Optional

import httpx

from storefront_checkout.exceptions import TaxProviderError
from storefront_checkout.models import TaxForOrder
from storefront_checkout.models import TaxOrderRequest

logger = logging.getLogger(__name__)


class TaxClient:
  """Calculates sales tax for an order through the provider's v2 API."""

  def __init__(
      self,
      api_url: str,
      api_key: str,
      timeout: float = 10.0,
      transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    self.api_url = api_url.rstrip("/")
    self.api_key = api_key
    self.timeout = timeout
    self._transport = transport

  async def tax_for_order(self, order: TaxOrderRequest) -> TaxForOrder:
    """Calculates the tax for an order.

    Args:
      order: Origin, destination, line items and shipping of the order.

    Returns:
      The provider's tax calculation.

    Raises:
      TaxProviderError: The provider rejected the order or was unreachable.
        `detail` carries the provider's explanation when one was returned.
    """
    payload = order.model_dump(mode="json", exclude_none=True)
    logger.info("Tax provider request: %s", payload)

    try:
      async with httpx.AsyncClient(
          base_url=self.api_url,
          timeout=self.timeout,
          transport=self._transport,
      ) as client:
        response = await client.post(
            "/v2/taxes",
            json=payload,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            },
        )
    except httpx.RequestError as e:
      raise TaxProviderError(f"Network error calling tax provider: {e}") from e

    if response.is_error:
      detail = _error_detail(response)
      logger.warning(
          "Tax provider rejected order: Status %d: %s",
          response.status_code,
          detail,
      )
      raise TaxProviderError(
          "Tax provider rejected the order",
          detail=detail,
          upstream_status=response.status_code,
      )

    try:
      result = TaxForOrder.model_validate(response.json())
    except ValueError as e:
      raise TaxProviderError(
          "Tax provider returned an unreadable response"
      ) from e

    logger.info("Tax provider response: %s", result.tax.model_dump())
    return result


def _error_detail(response: httpx.Response) -> Optional[str]:
  """Pulls the human-readable detail out of a provider error body."""
  try:
    body = response.json()
  except ValueError:
    return response.text or None
  if isinstance(body, dict):
    return body.get("detail") or body.get("error")
  return None
