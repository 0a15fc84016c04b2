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

"""Tax service bridging the commerce platform and the tax provider.

A single calculation runs as:
- Fetch the checkout's live totals and the merchant's origin address
  concurrently.
- Build the tax provider request from the origin, the destination, every
  line item and the shipping price.
- Ask the provider for the tax; a rejection becomes an INVALID_ADDRESS error.
- Map the provider's per-line-item breakdown into the platform's custom tax
  schema and write it back to the checkout.

Nothing is retried and nothing is applied partially: the checkout update is
only sent once the provider answered.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.clients.tax_client import TaxClient
from storefront_checkout.constants import TAX_BREAKDOWN_TYPE
from storefront_checkout.constants import TAX_PROVIDER_NAME
from storefront_checkout.exceptions import InvalidAddressError
from storefront_checkout.exceptions import MissingAttributesError
from storefront_checkout.exceptions import TaxProviderError
from storefront_checkout.models import ApplyTax
from storefront_checkout.models import ApplyTaxRequest
from storefront_checkout.models import CheckoutLive
from storefront_checkout.models import LineItemTax
from storefront_checkout.models import Merchant
from storefront_checkout.models import TaxAmount
from storefront_checkout.models import TaxForOrder
from storefront_checkout.models import TaxLineItemRequest
from storefront_checkout.models import TaxOrderRequest

logger = logging.getLogger(__name__)


class TaxService:
  """Calculates tax for a checkout destination and applies it."""

  def __init__(
      self,
      commerce: CommerceClient,
      tax_client: TaxClient,
      origin_state: str,
  ):
    self.commerce = commerce
    self.tax_client = tax_client
    self.origin_state = origin_state

  async def apply_tax(
      self,
      token: Optional[str],
      country: Optional[str],
      region: Optional[str] = None,
      zip_code: Optional[str] = None,
  ) -> Dict[str, Any]:
    """Calculates the tax for a destination and applies it to the checkout.

    Args:
      token: The checkout token.
      country: Destination ISO country code.
      region: Destination 2-letter region code, required by the provider for
        US and CA.
      zip_code: Destination postal code.

    Returns:
      The checkout's tax object after the update.

    Raises:
      MissingAttributesError: token or country is missing.
      InvalidAddressError: The tax provider rejected the calculation.
      CommerceApiError: Reading or updating the checkout failed.
    """
    if not token or not country:
      raise MissingAttributesError(
          "A checkout token, destination country, and shipping price must be"
          " provided."
      )

    live, merchant = await asyncio.gather(
        self.commerce.get_live(token), self.commerce.get_merchant()
    )

    order = self.build_tax_request(live, merchant, country, region, zip_code)
    try:
      tax_response = await self.tax_client.tax_for_order(order)
    except TaxProviderError as e:
      raise InvalidAddressError(e.detail) from e

    request_body = self.build_apply_tax_request(tax_response)
    logger.info(
        "Applying tax to checkout %s: %s", token, request_body.model_dump()
    )

    response = await self.commerce.update_checkout(
        token, request_body.model_dump(mode="json")
    )
    logger.info("Checkout %s tax: %s", token, response.get("tax"))
    return response.get("tax")

  def build_tax_request(
      self,
      live: CheckoutLive,
      merchant: Merchant,
      country: str,
      region: Optional[str] = None,
      zip_code: Optional[str] = None,
  ) -> TaxOrderRequest:
    """Builds the provider request for the checkout's current contents."""
    shipping_price = live.shipping.price.raw if live.shipping else 0
    return TaxOrderRequest(
        from_country=merchant.address.country,
        from_state=self.origin_state,
        from_zip=merchant.address.postal_zip_code,
        to_country=country,
        to_state=region or None,
        to_zip=zip_code or None,
        shipping=shipping_price,
        line_items=[
            TaxLineItemRequest(
                id=item.id,
                quantity=item.quantity,
                unit_price=item.price.raw,
            )
            for item in live.line_items
        ],
    )

  @staticmethod
  def build_apply_tax_request(tax_response: TaxForOrder) -> ApplyTaxRequest:
    """Maps the provider's per-line-item breakdown to the platform schema."""
    breakdown = tax_response.tax.breakdown
    line_items = breakdown.line_items if breakdown else []
    return ApplyTaxRequest(
        tax=ApplyTax(
            provider=TAX_PROVIDER_NAME,
            line_items=[
                LineItemTax(
                    id=item.id,
                    breakdown=[
                        TaxAmount(
                            amount=item.tax_collectable,
                            rate=item.combined_tax_rate,
                            type=TAX_BREAKDOWN_TYPE,
                        )
                    ],
                )
                for item in line_items
            ],
        )
    )
