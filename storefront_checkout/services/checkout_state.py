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

"""Per-session checkout state shared by the shipping form and the summary."""

import logging
from typing import Optional

from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.models import CheckoutLive

logger = logging.getLogger(__name__)


class CheckoutState:
  """The checkout token and the platform's latest live object for it."""

  def __init__(
      self,
      commerce: CommerceClient,
      checkout_id: Optional[str],
      live: Optional[CheckoutLive] = None,
  ):
    self.commerce = commerce
    self.id = checkout_id
    self.live = live
    # Set by the order submit flow; the summary only reads them.
    self.processing = False
    self.error: Optional[str] = None

  async def set_shipping_method(
      self,
      shipping_option_id: str,
      country: str,
      region: Optional[str] = None,
  ) -> None:
    """Applies a shipping option and takes the platform's recomputed totals.

    Raises:
      CommerceApiError: The platform rejected the option.
    """
    result = await self.commerce.check_shipping_option(
        self.id, shipping_option_id, country, region
    )
    if not result.valid:
      logger.warning(
          "Shipping option %s is not valid for checkout %s",
          shipping_option_id,
          self.id,
      )
    if result.live is not None:
      self.live = result.live

  async def refresh_live(self) -> CheckoutLive:
    self.live = await self.commerce.get_live(self.id)
    return self.live
