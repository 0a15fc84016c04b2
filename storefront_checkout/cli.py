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

"""Shipping form client for a running storefront checkout server.

This script fills in a checkout's shipping form the way a shopper would:
1. Loading the shipping countries for the checkout.
2. Selecting the destination country, then its region.
3. Entering the street address.
4. Selecting a shipping option (a lone option selects itself).
5. Waiting for the form to settle, which sends the tax zone request.
6. Printing the checkout summary with the applied tax.

Usage:
  storefront-checkout-cli --checkout_id=chkt_123 --country=US --region=US-NY \
      --street="1 Main St" --town_city="New York" --postal_zip_code=10001 \
      --server_url=http://localhost:3000
"""

import asyncio
import logging
from typing import Sequence

from absl import app as absl_app
from absl import flags

from storefront_checkout import config
from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.clients.storefront_client import StorefrontClient
from storefront_checkout.services.checkout_state import CheckoutState
from storefront_checkout.services.checkout_summary import CheckoutSummary
from storefront_checkout.services.shipping_form import ShippingForm

FLAGS = flags.FLAGS
flags.DEFINE_string("checkout_id", None, "Checkout token to fill in")
flags.DEFINE_string(
    "server_url", "http://localhost:3000", "Storefront server base URL"
)
flags.DEFINE_string("country", None, "Destination ISO country code")
flags.DEFINE_string("region", "", "Destination region, e.g. US-NY")
flags.DEFINE_string("street", "", "Street address")
flags.DEFINE_string("town_city", "", "City")
flags.DEFINE_string("postal_zip_code", "", "Postal or zip code")
flags.DEFINE_string(
    "shipping_option_id",
    None,
    "Shipping option to select when more than one is offered",
)

logger = logging.getLogger(__name__)


async def fill_shipping_form(form: ShippingForm) -> None:
  """Enters the flag values into the form in the order a shopper would."""
  await form.load()
  if form.countries is not None:
    logger.info("Ships to %d countries", len(form.countries))

  await form.set_country(FLAGS.country)
  if FLAGS.region:
    await form.set_region(FLAGS.region)
  for field in ("street", "town_city", "postal_zip_code"):
    value = getattr(FLAGS, field)
    if value:
      await form.set_address_field(field, value)

  for option in form.shipping_options:
    print(
        f"  {option.id}: {option.description}:"
        f" {option.price.formatted_with_symbol}"
    )

  if FLAGS.shipping_option_id:
    await form.select_shipping_method(FLAGS.shipping_option_id)
  elif not form.shipping_method and form.shipping_options:
    print("Multiple shipping options; pass --shipping_option_id to pick one.")

  await form.settle()


async def run_session() -> None:
  settings = config.load_settings(FLAGS.env_file)
  commerce = CommerceClient(
      settings.chec_api_url,
      settings.chec_public_key,
      settings.chec_secret_key,
      timeout=settings.http_timeout_seconds,
  )
  storefront = StorefrontClient(
      FLAGS.server_url, timeout=settings.http_timeout_seconds
  )
  state = CheckoutState(commerce, FLAGS.checkout_id)
  form = ShippingForm(state, commerce, storefront)

  try:
    await fill_shipping_form(form)
  finally:
    form.close()

  print(f"Ready to calculate tax: {form.can_calculate_tax}")
  print(f"Tax response: {form.tax}")

  if state.live is None:
    await state.refresh_live()
  summary = CheckoutSummary.from_live(
      state.live, processing=state.processing, error=state.error
  )
  print("\n".join(summary.render()))


def main(argv: Sequence[str]) -> None:
  """Main entry point for the shipping form client."""
  del argv  # Unused.
  logging.basicConfig(level=logging.INFO)

  if not FLAGS.checkout_id or not FLAGS.country:
    logger.error("Both --checkout_id and --country must be provided.")
    print("\nUsage:")
    print(FLAGS.main_module_help())
    raise SystemExit(1)

  asyncio.run(run_session())


def run() -> None:
  absl_app.run(main)


if __name__ == "__main__":
  run()
