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

"""Models for the commerce platform and tax provider payloads.

Neither schema is owned by this server. Commerce models ignore fields they do
not name so that platform additions pass through harmlessly; the tax provider
request and the apply-tax body are built here and serialized as-is.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class _CommerceModel(BaseModel):
  model_config = ConfigDict(extra="ignore")


# --- Commerce platform ---


class Price(_CommerceModel):
  raw: float = 0
  formatted: Optional[str] = None
  formatted_with_symbol: Optional[str] = None
  formatted_with_code: Optional[str] = None


class LineItem(_CommerceModel):
  id: str
  name: Optional[str] = None
  quantity: int = 1
  price: Price = Field(default_factory=Price)


class ShippingInfo(_CommerceModel):
  id: Optional[str] = None
  description: Optional[str] = None
  price: Price = Field(default_factory=Price)


class CheckoutTax(_CommerceModel):
  """Tax object attached to a checkout by the platform."""

  amount: Optional[Price] = None
  included_in_price: Optional[bool] = None
  provider: Optional[str] = None
  breakdown: Optional[List[Dict[str, Any]]] = None
  zone: Optional[Dict[str, Any]] = None


class CheckoutLive(_CommerceModel):
  """The platform's computed checkout state."""

  subtotal: Optional[Price] = None
  tax: Optional[CheckoutTax] = None
  total: Optional[Price] = None
  total_with_tax: Optional[Price] = None
  line_items: List[LineItem] = Field(default_factory=list)
  shipping: Optional[ShippingInfo] = None


class MerchantAddress(_CommerceModel):
  country: Optional[str] = None
  region: Optional[str] = None
  postal_zip_code: Optional[str] = None
  street: Optional[str] = None
  town_city: Optional[str] = None


class Merchant(_CommerceModel):
  id: Optional[int | str] = None
  name: Optional[str] = None
  address: MerchantAddress = Field(default_factory=MerchantAddress)


class ShippingOption(_CommerceModel):
  id: str
  description: str = ""
  price: Price = Field(default_factory=Price)
  countries: List[str] = Field(default_factory=list)


class ShippingCheck(_CommerceModel):
  """Result of validating a shipping option against a checkout."""

  valid: bool = False
  price: Optional[Price] = None
  live: Optional[CheckoutLive] = None


class ShippingAddress(BaseModel):
  """Values of the shipping.* form fields."""

  name: str = ""
  street: str = ""
  town_city: str = ""
  postal_zip_code: str = ""
  country: str = ""
  region: str = ""


# --- Tax provider ---


class TaxLineItemRequest(BaseModel):
  id: str
  quantity: int
  unit_price: float


class TaxOrderRequest(BaseModel):
  """Body of the tax provider's order tax calculation call."""

  from_country: Optional[str] = None
  from_state: Optional[str] = None
  from_zip: Optional[str] = None
  to_country: str
  to_state: Optional[str] = None
  to_zip: Optional[str] = None
  shipping: float = 0
  line_items: List[TaxLineItemRequest] = Field(default_factory=list)


class TaxBreakdownLineItem(BaseModel):
  model_config = ConfigDict(extra="ignore")

  id: str
  tax_collectable: float = 0
  combined_tax_rate: float = 0


class TaxBreakdown(BaseModel):
  model_config = ConfigDict(extra="ignore")

  line_items: List[TaxBreakdownLineItem] = Field(default_factory=list)


class TaxResult(BaseModel):
  model_config = ConfigDict(extra="ignore")

  order_total_amount: Optional[float] = None
  shipping: Optional[float] = None
  taxable_amount: Optional[float] = None
  amount_to_collect: float = 0
  rate: float = 0
  has_nexus: Optional[bool] = None
  freight_taxable: Optional[bool] = None
  tax_source: Optional[str] = None
  breakdown: Optional[TaxBreakdown] = None


class TaxForOrder(BaseModel):
  model_config = ConfigDict(extra="ignore")

  tax: TaxResult


# --- Apply-tax body sent back to the platform ---


class TaxAmount(BaseModel):
  amount: float
  rate: float
  type: str


class LineItemTax(BaseModel):
  id: str
  breakdown: List[TaxAmount]


class ApplyTax(BaseModel):
  provider: str
  line_items: List[LineItemTax]


class ApplyTaxRequest(BaseModel):
  tax: ApplyTax


# --- API responses ---


class ErrorResponse(BaseModel):
  code: str
  message: str


class CheckoutSummaryView(BaseModel):
  """Display lines of the checkout summary."""

  subtotal: Optional[str] = None
  tax: Optional[str] = None
  shipping: Optional[str] = None
  total: Optional[float] = None
  item_count: int = 0
  item_count_label: str = "0 items"
  button_label: str = "Continue"
  button_disabled: bool = False
  error: Optional[str] = None
