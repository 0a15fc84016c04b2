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

"""Tests for the tax eligibility checklist and region code handling."""

from absl.testing import absltest

from storefront_checkout.models import ShippingAddress
from storefront_checkout.services.address_rules import can_calculate_tax
from storefront_checkout.services.address_rules import region_code


def us_address(**overrides) -> ShippingAddress:
  values = {
      "country": "US",
      "region": "US-NY",
      "street": "1 Main St",
      "town_city": "New York",
      "postal_zip_code": "10001",
  }
  values.update(overrides)
  return ShippingAddress(**values)


class CanCalculateTaxTest(absltest.TestCase):

  def test_complete_us_address(self) -> None:
    self.assertTrue(can_calculate_tax(us_address(), "ship_std"))

  def test_us_address_missing_zip(self) -> None:
    self.assertFalse(
        can_calculate_tax(us_address(postal_zip_code=""), "ship_std")
    )

  def test_us_address_missing_street_or_city(self) -> None:
    self.assertFalse(can_calculate_tax(us_address(street=""), "ship_std"))
    self.assertFalse(can_calculate_tax(us_address(town_city=""), "ship_std"))

  def test_us_address_missing_region(self) -> None:
    self.assertFalse(can_calculate_tax(us_address(region=""), "ship_std"))

  def test_canada_needs_region_only(self) -> None:
    address = ShippingAddress(country="CA", region="CA-ON")
    self.assertTrue(can_calculate_tax(address, "ship_std"))
    self.assertFalse(
        can_calculate_tax(ShippingAddress(country="CA"), "ship_std")
    )

  def test_other_countries_need_country_and_shipping_only(self) -> None:
    address = ShippingAddress(country="GB")
    self.assertTrue(can_calculate_tax(address, "ship_std"))
    self.assertTrue(can_calculate_tax(address, "ship_express"))

  def test_shipping_method_required(self) -> None:
    self.assertFalse(can_calculate_tax(us_address(), None))
    self.assertFalse(can_calculate_tax(ShippingAddress(country="GB"), ""))

  def test_country_required(self) -> None:
    self.assertFalse(can_calculate_tax(ShippingAddress(), "ship_std"))
    self.assertFalse(can_calculate_tax(None, "ship_std"))


class RegionCodeTest(absltest.TestCase):

  def test_strips_country_prefix(self) -> None:
    self.assertEqual(region_code("US-NY"), "NY")
    self.assertEqual(region_code("CA-ON"), "ON")

  def test_unprefixed_region_passes_through(self) -> None:
    self.assertEqual(region_code("NY"), "NY")

  def test_empty_region(self) -> None:
    self.assertIsNone(region_code(""))
    self.assertIsNone(region_code(None))


if __name__ == "__main__":
  absltest.main()
