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

"""Tests for the tax service."""

import asyncio

from absl.testing import absltest

from storefront_checkout import testing_fakes
from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.clients.tax_client import TaxClient
from storefront_checkout.exceptions import CommerceApiError
from storefront_checkout.exceptions import InvalidAddressError
from storefront_checkout.exceptions import MissingAttributesError
from storefront_checkout.models import CheckoutLive
from storefront_checkout.models import Merchant
from storefront_checkout.models import TaxForOrder
from storefront_checkout.services.tax_service import TaxService


class TaxServiceTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.platform = testing_fakes.FakeCommercePlatform()
    self.provider = testing_fakes.FakeTaxProvider()
    commerce = CommerceClient(
        "https://commerce.test",
        "pk_test",
        "sk_test",
        transport=self.platform.transport(),
    )
    tax_client = TaxClient(
        "https://tax.test", "tax_key", transport=self.provider.transport()
    )
    self.service = TaxService(commerce, tax_client, origin_state="NY")

  def test_build_tax_request(self) -> None:
    live = CheckoutLive.model_validate(self.platform.live)
    merchant = Merchant.model_validate(self.platform.merchant)

    order = self.service.build_tax_request(
        live, merchant, "US", region="CA", zip_code="90002"
    )

    self.assertEqual(order.from_country, "US")
    self.assertEqual(order.from_state, "NY")
    self.assertEqual(order.from_zip, "10001")
    self.assertEqual(order.to_country, "US")
    self.assertEqual(order.to_state, "CA")
    self.assertEqual(order.to_zip, "90002")
    self.assertEqual(order.shipping, 5.0)
    self.assertEqual(
        [(i.id, i.quantity, i.unit_price) for i in order.line_items],
        [("item_rose", 2, 10.0), ("item_tulip", 1, 10.0)],
    )

  def test_build_tax_request_without_shipping(self) -> None:
    self.platform.live.pop("shipping")
    live = CheckoutLive.model_validate(self.platform.live)
    order = self.service.build_tax_request(live, Merchant(), "GB")
    self.assertEqual(order.shipping, 0)
    self.assertIsNone(order.to_state)

  def test_build_apply_tax_request(self) -> None:
    response = TaxForOrder.model_validate({
        "tax": {
            "amount_to_collect": 1.78,
            "rate": 0.08875,
            "breakdown": {
                "line_items": [{
                    "id": "item_rose",
                    "tax_collectable": 1.78,
                    "combined_tax_rate": 0.08875,
                    "state_amount": 0.8,
                }]
            },
        }
    })

    body = TaxService.build_apply_tax_request(response)

    self.assertEqual(
        body.model_dump(),
        {
            "tax": {
                "provider": "TaxJar",
                "line_items": [{
                    "id": "item_rose",
                    "breakdown": [
                        {"amount": 1.78, "rate": 0.08875, "type": "Tax"}
                    ],
                }],
            }
        },
    )

  def test_apply_tax(self) -> None:
    tax = asyncio.run(self.service.apply_tax("chkt_1", "US", "NY", "10001"))

    self.assertEqual(tax["provider"], "TaxJar")
    self.assertAlmostEqual(tax["amount"]["raw"], 2.66)
    self.assertLen(self.provider.requests, 1)
    self.assertEqual(self.provider.requests[0]["to_state"], "NY")
    self.assertLen(self.platform.updates, 1)
    self.assertEqual(
        [i["id"] for i in self.platform.updates[0]["tax"]["line_items"]],
        ["item_rose", "item_tulip"],
    )

  def test_apply_tax_without_breakdown(self) -> None:
    self.provider.omit_breakdown = True
    tax = asyncio.run(self.service.apply_tax("chkt_1", "GB"))
    self.assertEqual(self.platform.updates[0]["tax"]["line_items"], [])
    self.assertEqual(tax["amount"]["raw"], 0)

  def test_missing_attributes(self) -> None:
    with self.assertRaises(MissingAttributesError):
      asyncio.run(self.service.apply_tax(None, "US"))
    with self.assertRaises(MissingAttributesError):
      asyncio.run(self.service.apply_tax("chkt_1", ""))
    self.assertEmpty(self.platform.requests)

  def test_provider_rejection(self) -> None:
    self.provider.reject("to_zip 99999 is not used within to_state NY")

    with self.assertRaises(InvalidAddressError) as cm:
      asyncio.run(self.service.apply_tax("chkt_1", "US", "NY", "99999"))

    self.assertEqual(cm.exception.status_code, 400)
    self.assertEqual(
        cm.exception.message, "to_zip 99999 is not used within to_state NY"
    )
    self.assertEmpty(self.platform.updates)

  def test_checkout_update_failure_propagates(self) -> None:
    self.platform.failing.add("PUT /v1/checkouts/chkt_1")
    with self.assertRaises(CommerceApiError):
      asyncio.run(self.service.apply_tax("chkt_1", "US", "NY", "10001"))


if __name__ == "__main__":
  absltest.main()
