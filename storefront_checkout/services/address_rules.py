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

"""Destination rules deciding when a shipping address can be taxed."""

from typing import Optional

from storefront_checkout.constants import REGION_REQUIRED_COUNTRIES
from storefront_checkout.constants import STREET_ADDRESS_REQUIRED_COUNTRIES
from storefront_checkout.models import ShippingAddress


def can_calculate_tax(
    address: Optional[ShippingAddress], shipping_method: Optional[str]
) -> bool:
  """Checks whether the address and shipping method are enough to tax.

  Every destination needs a country and a shipping method. The tax provider
  additionally requires a region for US and CA, and a street, city and zip
  for the US.

  Args:
    address: The current shipping form values.
    shipping_method: The selected shipping option id.

  Returns:
    True once every field the destination requires is filled in.
  """
  if not address or not shipping_method:
    return False

  country = address.country
  if not country:
    return False

  required_fields = []
  if country in REGION_REQUIRED_COUNTRIES:
    required_fields.append(address.region)
  if country in STREET_ADDRESS_REQUIRED_COUNTRIES:
    required_fields.extend(
        [address.street, address.town_city, address.postal_zip_code]
    )

  return all(required_fields)


def region_code(region: Optional[str]) -> Optional[str]:
  """Strips the country prefix from a combined region code ("US-NY" -> "NY")."""
  if not region:
    return None
  _, sep, code = region.partition("-")
  if not sep:
    return region
  return code or None
