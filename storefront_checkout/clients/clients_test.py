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

"""Tests for the commerce, tax provider and storefront clients."""

import asyncio

from absl.testing import absltest
import httpx

from storefront_checkout import testing_fakes
from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.clients.storefront_client import StorefrontClient
from storefront_checkout.clients.tax_client import TaxClient
from storefront_checkout.exceptions import CommerceApiError
from storefront_checkout.exceptions import InvalidIdentifierError
from storefront_checkout.exceptions import TaxProviderError
from storefront_checkout.models import TaxOrderRequest


def _unreachable(request: httpx.Request) -> httpx.Response:
  raise httpx.ConnectError("connection refused", request=request)


class CommerceClientTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.platform = testing_fakes.FakeCommercePlatform()
    self.client = CommerceClient(
        "https://commerce.test/",
        "pk_test",
        "sk_test",
        transport=self.platform.transport(),
    )

  def test_public_calls_use_public_key(self) -> None:
    asyncio.run(self.client.get_live("chkt_1"))
    request = self.platform.requests[0]
    self.assertEqual(request.headers["X-Authorization"], "pk_test")
    self.assertEqual(request.url.host, "commerce.test")

  def test_secret_calls_use_secret_key(self) -> None:
    merchant = asyncio.run(self.client.get_merchant())
    self.assertEqual(merchant.address.postal_zip_code, "10001")
    self.assertEqual(
        self.platform.requests[0].headers["X-Authorization"], "sk_test"
    )

  def test_shipping_options_omit_empty_region(self) -> None:
    self.platform.shipping_options[("GB", None)] = [
        {"id": "ship_std", "description": "Standard",
         "price": testing_fakes.price(5.0), "extra_field": True}
    ]
    options = asyncio.run(
        self.client.get_shipping_options("chkt_1", "GB", region="")
    )
    self.assertEqual([o.id for o in options], ["ship_std"])
    self.assertEqual(
        dict(self.platform.requests[0].url.params), {"country": "GB"}
    )

  def test_error_status_raises(self) -> None:
    self.platform.failing.add("/live")
    with self.assertRaises(CommerceApiError) as cm:
      asyncio.run(self.client.get_live("chkt_1"))
    self.assertEqual(cm.exception.upstream_status, 500)
    self.assertEqual(cm.exception.status_code, 502)

  def test_ids_are_escaped_into_one_segment(self) -> None:
    body = {"tax": {"provider": "TaxJar", "line_items": []}}
    asyncio.run(self.client.update_checkout("../products/prod_1", body))

    request = self.platform.requests[0]
    self.assertEqual(request.method, "PUT")
    self.assertEqual(
        request.url.raw_path, b"/v1/checkouts/..%2Fproducts%2Fprod_1"
    )
    self.assertEqual(request.headers["X-Authorization"], "sk_test")

  def test_query_characters_stay_in_path(self) -> None:
    asyncio.run(self.client.get_live("../merchants?x="))
    request = self.platform.requests[0]
    self.assertEqual(
        request.url.raw_path, b"/v1/checkouts/..%2Fmerchants%3Fx%3D/live"
    )
    self.assertEqual(dict(request.url.params), {})

  def test_dot_segments_rejected(self) -> None:
    with self.assertRaises(InvalidIdentifierError) as cm:
      asyncio.run(self.client.update_checkout("..", {}))
    self.assertEqual(cm.exception.status_code, 400)
    with self.assertRaises(InvalidIdentifierError):
      asyncio.run(self.client.list_shipping_subdivisions("chkt_1", "."))
    with self.assertRaises(InvalidIdentifierError):
      asyncio.run(self.client.get_live(""))
    self.assertEmpty(self.platform.requests)

  def test_network_error_raises(self) -> None:
    client = CommerceClient(
        "https://commerce.test",
        "pk_test",
        "sk_test",
        transport=httpx.MockTransport(_unreachable),
    )
    with self.assertRaises(CommerceApiError):
      asyncio.run(client.list_shipping_countries("chkt_1"))


class TaxClientTest(absltest.TestCase):

  def setUp(self) -> None:
    super().setUp()
    self.provider = testing_fakes.FakeTaxProvider()
    self.client = TaxClient(
        "https://tax.test", "tax_key", transport=self.provider.transport()
    )
    self.order = TaxOrderRequest(
        to_country="GB",
        shipping=5.0,
        line_items=[{"id": "item_rose", "quantity": 1, "unit_price": 10.0}],
    )

  def test_omits_unset_fields(self) -> None:
    result = asyncio.run(self.client.tax_for_order(self.order))
    self.assertNotIn("to_state", self.provider.requests[0])
    self.assertLen(result.tax.breakdown.line_items, 1)

  def test_rejection_carries_detail(self) -> None:
    self.provider.reject("to_country is required", status=400)
    with self.assertRaises(TaxProviderError) as cm:
      asyncio.run(self.client.tax_for_order(self.order))
    self.assertEqual(cm.exception.detail, "to_country is required")
    self.assertEqual(cm.exception.upstream_status, 400)

  def test_network_error(self) -> None:
    client = TaxClient(
        "https://tax.test",
        "tax_key",
        transport=httpx.MockTransport(_unreachable),
    )
    with self.assertRaises(TaxProviderError):
      asyncio.run(client.tax_for_order(self.order))


class StorefrontClientTest(absltest.TestCase):

  def test_set_tax_zone_skips_empty_params(self) -> None:
    storefront = testing_fakes.FakeStorefront()
    client = StorefrontClient(
        "http://storefront.test", transport=storefront.transport()
    )
    tax = asyncio.run(client.set_tax_zone("chkt_1", "GB", region=None))
    self.assertEqual(tax["provider"], "TaxJar")
    self.assertEqual(
        storefront.tax_requests, [{"token": "chkt_1", "country": "GB"}]
    )


if __name__ == "__main__":
  absltest.main()
