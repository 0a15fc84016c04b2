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

"""Checkout summary shown under the shipping form.

Amounts come preformatted from the commerce platform; the only arithmetic
done here is adding the tax to the total.
"""

from typing import List, Optional

from storefront_checkout.models import CheckoutLive
from storefront_checkout.models import CheckoutSummaryView
from storefront_checkout.models import LineItem
from storefront_checkout.models import Price
from storefront_checkout.models import ShippingInfo


class CheckoutSummary:
  """Subtotal, tax, shipping and total lines for a checkout."""

  def __init__(
      self,
      subtotal: Optional[Price] = None,
      shipping: Optional[ShippingInfo] = None,
      line_items: Optional[List[LineItem]] = None,
      total: Optional[Price] = None,
      live: Optional[CheckoutLive] = None,
      processing: bool = False,
      error: Optional[str] = None,
  ):
    self.subtotal = subtotal
    self.shipping = shipping
    self.line_items = line_items or []
    self.total = total
    self.live = live
    self.processing = processing
    self.error = error

  @classmethod
  def from_live(
      cls,
      live: CheckoutLive,
      processing: bool = False,
      error: Optional[str] = None,
  ) -> "CheckoutSummary":
    return cls(
        subtotal=live.subtotal,
        shipping=live.shipping,
        line_items=live.line_items,
        total=live.total,
        live=live,
        processing=processing,
        error=error,
    )

  @property
  def tax_amount(self) -> Optional[Price]:
    tax = self.live.tax if self.live else None
    return tax.amount if tax else None

  def tax_line(self) -> Optional[str]:
    amount = self.tax_amount
    if amount is None:
      return None
    if amount.raw > 0:
      return amount.formatted_with_symbol
    return "0.00"

  def total_with_tax(self) -> Optional[float]:
    amount = self.tax_amount
    if not self.total or amount is None:
      return None
    return self.total.raw + amount.raw

  @property
  def item_count(self) -> int:
    return len(self.line_items)

  def item_count_label(self) -> str:
    count = self.item_count
    return f"{count} {'item' if count == 1 else 'items'}"

  def button_label(self) -> str:
    return "Processing order" if self.processing else "Continue"

  def view(self) -> CheckoutSummaryView:
    return CheckoutSummaryView(
        subtotal=self.subtotal.formatted_with_symbol if self.subtotal else None,
        tax=self.tax_line(),
        shipping=(
            self.shipping.price.formatted_with_symbol if self.shipping else None
        ),
        total=self.total_with_tax(),
        item_count=self.item_count,
        item_count_label=self.item_count_label(),
        button_label=self.button_label(),
        button_disabled=self.processing,
        error=self.error,
    )

  def render(self) -> List[str]:
    """Returns the summary as display lines."""
    lines = []
    if self.subtotal:
      lines.append(f"Subtotal: {self.subtotal.formatted_with_symbol}")
    lines.append(f"Tax: {self.tax_line() or ''}")
    if self.shipping:
      lines.append(f"Shipping: {self.shipping.price.formatted_with_symbol}")
    total = self.total_with_tax()
    lines.append(
        f"Total: {'' if total is None else f'{total:.2f}'},"
        f" {self.item_count_label()}"
    )
    if self.error:
      lines.append(self.error)
    lines.append(f"[{self.button_label()}]")
    return lines
