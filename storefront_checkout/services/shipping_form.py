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

"""Shipping form controller for a single checkout session.

The form reacts to field changes in dependency order:

- Choosing a country clears the region and fetches that country's
  subdivisions and shipping options.
- Choosing a region re-fetches the shipping options for (country, region).
- When exactly one shipping option is available it is selected and applied
  to the checkout without user interaction.
- Address and shipping-method changes are debounced; once they settle the
  destination checklist is re-evaluated, and the first time it passes a tax
  zone request is sent to the storefront's tax endpoint.

Every remote call is best-effort. Failures are logged and leave the previous
state in place; a superseded lookup is not cancelled, so whichever response
lands last wins.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.clients.storefront_client import StorefrontClient
from storefront_checkout.constants import FORM_DEBOUNCE_SECONDS
from storefront_checkout.exceptions import CheckoutError
from storefront_checkout.helpers.debounce import Debouncer
from storefront_checkout.models import ShippingAddress
from storefront_checkout.models import ShippingOption
from storefront_checkout.services import address_rules
from storefront_checkout.services.checkout_state import CheckoutState

logger = logging.getLogger(__name__)

# Errors a best-effort lookup logs and drops.
_REMOTE_ERRORS = (CheckoutError, httpx.HTTPError, ValueError)

ADDRESS_FIELDS = frozenset(ShippingAddress.model_fields)


class ShippingForm:
  """Reactive controller behind the shipping address and method fields."""

  def __init__(
      self,
      state: CheckoutState,
      commerce: CommerceClient,
      storefront: StorefrontClient,
      debounce_seconds: float = FORM_DEBOUNCE_SECONDS,
  ):
    self.state = state
    self.commerce = commerce
    self.storefront = storefront

    self.address = ShippingAddress()
    self.shipping_method: Optional[str] = None

    self.countries: Optional[Dict[str, str]] = None
    self.subdivisions: Optional[Dict[str, str]] = None
    self.shipping_options: List[ShippingOption] = []

    self.can_calculate_tax = False
    self.tax: Optional[Dict[str, Any]] = None

    # Debounced views of the watched fields.
    self._watched_address: Optional[ShippingAddress] = None
    self._watched_shipping: Optional[str] = None
    self._address_watch = Debouncer(self._on_address_settled, debounce_seconds)
    self._shipping_watch = Debouncer(
        self._on_shipping_settled, debounce_seconds
    )

  # --- Field changes ---

  async def load(self) -> None:
    """Fetches the shipping countries when the form first mounts."""
    await self._fetch_countries(self.state.id)

  async def set_country(self, country: str) -> None:
    self.address.country = country
    self.address.region = ""
    self._address_changed()

    if country:
      await asyncio.gather(
          self._fetch_subdivisions(self.state.id, country),
          self._fetch_shipping_options(self.state.id, country),
      )

  async def set_region(self, region: str) -> None:
    self.address.region = region
    self._address_changed()

    if region:
      await self._fetch_shipping_options(
          self.state.id, self.address.country, region
      )

  async def set_address_field(self, name: str, value: str) -> None:
    """Updates a free-text address field such as street or postal_zip_code."""
    if name == "country":
      await self.set_country(value)
      return
    if name == "region":
      await self.set_region(value)
      return
    if name not in ADDRESS_FIELDS:
      raise ValueError(f"Unknown shipping field: {name}")

    setattr(self.address, name, value)
    self._address_changed()

  async def select_shipping_method(self, option_id: str) -> None:
    """Handles the user picking a shipping option."""
    self._set_shipping_value(option_id)
    await self._apply_shipping_method(option_id)

  async def settle(self) -> None:
    """Waits until debounced watchers and the lookups they started finish."""
    while self._address_watch.pending or self._shipping_watch.pending:
      await self._address_watch.settle()
      await self._shipping_watch.settle()

  def close(self) -> None:
    self._address_watch.cancel()
    self._shipping_watch.cancel()

  # --- Watchers ---

  def _address_changed(self) -> None:
    self._address_watch.trigger(self.address.model_copy())

  def _set_shipping_value(self, option_id: Optional[str]) -> None:
    self.shipping_method = option_id
    self._shipping_watch.trigger(option_id)

  async def _on_address_settled(self, address: ShippingAddress) -> None:
    self._watched_address = address
    await self._evaluate_tax_eligibility()

  async def _on_shipping_settled(self, option_id: Optional[str]) -> None:
    self._watched_shipping = option_id
    await self._evaluate_tax_eligibility()

  async def _evaluate_tax_eligibility(self) -> None:
    ready = address_rules.can_calculate_tax(
        self._watched_address, self._watched_shipping
    )
    became_ready = ready and not self.can_calculate_tax
    self.can_calculate_tax = ready

    if became_ready:
      logger.info("Ready to calculate tax for checkout %s", self.state.id)
      await self._set_tax_zone(self.state.id, self._watched_address)

  # --- Remote lookups ---

  async def _fetch_countries(self, checkout_id: Optional[str]) -> None:
    try:
      self.countries = await self.commerce.list_shipping_countries(checkout_id)
    except _REMOTE_ERRORS as e:
      logger.warning("Failed to fetch shipping countries: %s", e)

  async def _fetch_subdivisions(
      self, checkout_id: Optional[str], country: str
  ) -> None:
    try:
      self.subdivisions = await self.commerce.list_shipping_subdivisions(
          checkout_id, country
      )
    except _REMOTE_ERRORS as e:
      logger.warning("Failed to fetch subdivisions for %s: %s", country, e)

  async def _fetch_shipping_options(
      self,
      checkout_id: Optional[str],
      country: str,
      region: Optional[str] = None,
  ) -> None:
    if not checkout_id and not country:
      return

    self._set_shipping_value(None)

    try:
      options = await self.commerce.get_shipping_options(
          checkout_id, country, region
      )
    except _REMOTE_ERRORS as e:
      logger.warning("Failed to fetch shipping options for %s: %s", country, e)
      return

    self.shipping_options = options
    if len(options) == 1:
      option_id = options[0].id
      self._set_shipping_value(option_id)
      await self._apply_shipping_method(option_id)

  async def _apply_shipping_method(self, option_id: str) -> None:
    try:
      await self.state.set_shipping_method(
          option_id, self.address.country, self.address.region or None
      )
    except _REMOTE_ERRORS as e:
      logger.warning("Failed to set shipping method %s: %s", option_id, e)

  async def _set_tax_zone(
      self, checkout_id: Optional[str], address: ShippingAddress
  ) -> None:
    """Asks the storefront to calculate and apply tax for the destination."""
    if not checkout_id:
      return

    try:
      tax = await self.storefront.set_tax_zone(
          checkout_id,
          address.country,
          region=address_rules.region_code(address.region),
          zip_code=address.postal_zip_code or None,
      )
    except _REMOTE_ERRORS as e:
      logger.warning("Tax zone request failed: %s", e)
      return

    logger.info("Tax response: %s", tax)
    if isinstance(tax, dict) and "code" in tax and "message" in tax:
      return

    self.tax = tax
    try:
      await self.state.refresh_live()
    except _REMOTE_ERRORS as e:
      logger.warning("Failed to refresh checkout after tax: %s", e)
