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

"""Test fixtures: in-memory stand-ins for the remote APIs.

Each fake is served through httpx.MockTransport so the tests exercise the real
clients without network access. Only the *_test.py modules import this.
"""

import json
import re
from typing import Any, Dict, List, Optional, Set, Tuple

import httpx


def price(raw: float, symbol: str = "$") -> Dict[str, Any]:
  return {
      "raw": raw,
      "formatted": f"{raw:.2f}",
      "formatted_with_symbol": f"{symbol}{raw:.2f}",
      "formatted_with_code": f"{raw:.2f} USD",
  }


def sample_live() -> Dict[str, Any]:
  return {
      "subtotal": price(30.0),
      "total": price(35.0),
      "line_items": [
          {"id": "item_rose", "name": "Red Rose", "quantity": 2,
           "price": price(10.0)},
          {"id": "item_tulip", "name": "White Tulip", "quantity": 1,
           "price": price(10.0)},
      ],
      "shipping": {
          "id": "ship_std",
          "description": "Standard",
          "price": price(5.0),
      },
  }


class FakeCommercePlatform:
  """Serves the commerce endpoints the clients call."""

  def __init__(self) -> None:
    self.countries: Dict[str, str] = {
        "US": "United States",
        "CA": "Canada",
        "GB": "United Kingdom",
    }
    self.subdivisions: Dict[str, Dict[str, str]] = {
        "US": {"US-NY": "New York", "US-CA": "California"},
        "CA": {"CA-ON": "Ontario"},
        "GB": {"GB-ENG": "England"},
    }
    # Keyed by (country, region); region None is the country-wide list.
    self.shipping_options: Dict[Tuple[str, Optional[str]], List[Dict]] = {}
    self.live: Dict[str, Any] = sample_live()
    self.merchant: Dict[str, Any] = {
        "id": 1,
        "name": "Flower Shop",
        "address": {
            "country": "US",
            "region": "New York",
            "postal_zip_code": "10001",
        },
    }
    self.failing: Set[str] = set()
    self.requests: List[httpx.Request] = []
    self.updates: List[Dict[str, Any]] = []

  def transport(self) -> httpx.MockTransport:
    return httpx.MockTransport(self.handle)

  def paths(self) -> List[str]:
    return [request.url.path for request in self.requests]

  def handle(self, request: httpx.Request) -> httpx.Response:
    self.requests.append(request)
    # Route on the encoded path so an escaped id stays one segment.
    path = request.url.raw_path.decode("ascii").partition("?")[0]
    params = request.url.params

    for name in self.failing:
      if name in f"{request.method} {path}":
        return httpx.Response(500, json={"error": "Server Error"})

    match = re.fullmatch(r"/v1/services/locale/[^/]+/countries", path)
    if match:
      return httpx.Response(200, json={"countries": self.countries})

    match = re.fullmatch(
        r"/v1/services/locale/[^/]+/countries/([^/]+)/subdivisions", path
    )
    if match:
      return httpx.Response(
          200,
          json={"subdivisions": self.subdivisions.get(match.group(1), {})},
      )

    if re.fullmatch(r"/v1/checkouts/[^/]+/helper/shipping_options", path):
      key = (params.get("country"), params.get("region"))
      return httpx.Response(200, json=self.shipping_options.get(key, []))

    if re.fullmatch(r"/v1/checkouts/[^/]+/check/shipping", path):
      option_id = params.get("shipping_option_id")
      option = self._find_option(option_id)
      if option is None:
        return httpx.Response(422, json={"error": {"message": "Invalid"}})
      self.live["shipping"] = {
          "id": option["id"],
          "description": option["description"],
          "price": option["price"],
      }
      return httpx.Response(
          200, json={"valid": True, "price": option["price"], "live": self.live}
      )

    if re.fullmatch(r"/v1/checkouts/[^/]+/live", path):
      return httpx.Response(200, json=self.live)

    if path == "/v1/merchants":
      return httpx.Response(200, json=self.merchant)

    match = re.fullmatch(r"/v1/checkouts/([^/]+)", path)
    if match and request.method == "PUT":
      body = json.loads(request.content)
      self.updates.append(body)
      tax = self._apply_tax(body["tax"])
      return httpx.Response(200, json={"id": match.group(1), "tax": tax})

    return httpx.Response(404, json={"error": "Not Found"})

  def _find_option(self, option_id: Optional[str]) -> Optional[Dict]:
    for options in self.shipping_options.values():
      for option in options:
        if option["id"] == option_id:
          return option
    return None

  def _apply_tax(self, tax: Dict[str, Any]) -> Dict[str, Any]:
    total = sum(
        entry["amount"]
        for item in tax["line_items"]
        for entry in item["breakdown"]
    )
    applied = {
        "amount": price(total),
        "provider": tax["provider"],
        "breakdown": tax["line_items"],
    }
    self.live["tax"] = applied
    return applied


class FakeTaxProvider:
  """Serves the tax provider's order calculation endpoint."""

  def __init__(self) -> None:
    self.rate = 0.08875
    self.error: Optional[Tuple[int, str]] = None
    self.omit_breakdown = False
    self.requests: List[Dict[str, Any]] = []

  def transport(self) -> httpx.MockTransport:
    return httpx.MockTransport(self.handle)

  def reject(self, detail: str, status: int = 400) -> None:
    self.error = (status, detail)

  def handle(self, request: httpx.Request) -> httpx.Response:
    if request.url.path != "/v2/taxes":
      return httpx.Response(404, json={"error": "Not Found"})
    body = json.loads(request.content)
    self.requests.append(body)

    if self.error:
      status, detail = self.error
      return httpx.Response(
          status,
          json={"error": "Bad Request", "detail": detail, "status": status},
      )

    line_items = [
        {
            "id": item["id"],
            "tax_collectable": round(
                item["unit_price"] * item["quantity"] * self.rate, 2
            ),
            "combined_tax_rate": self.rate,
        }
        for item in body.get("line_items", [])
    ]
    tax = {
        "amount_to_collect": sum(i["tax_collectable"] for i in line_items),
        "rate": self.rate,
        "has_nexus": True,
        "freight_taxable": False,
        "tax_source": "destination",
    }
    if not self.omit_breakdown:
      tax["breakdown"] = {"line_items": line_items}
    return httpx.Response(200, json={"tax": tax})


class FakeStorefront:
  """Serves the storefront's tax route, recording each tax zone request."""

  def __init__(self, commerce: Optional[FakeCommercePlatform] = None) -> None:
    self.commerce = commerce
    self.tax_requests: List[Dict[str, str]] = []
    self.response: Dict[str, Any] = {
        "amount": price(2.66),
        "provider": "TaxJar",
    }
    self.status = 200

  def transport(self) -> httpx.MockTransport:
    return httpx.MockTransport(self.handle)

  def reject(self, code: str, message: str, status: int = 400) -> None:
    self.status = status
    self.response = {"code": code, "message": message}

  def handle(self, request: httpx.Request) -> httpx.Response:
    if request.url.path != "/api/tax" or request.method != "POST":
      return httpx.Response(404, json={"detail": "Not Found"})
    self.tax_requests.append(dict(request.url.params))
    if self.commerce is not None and self.status == 200:
      self.commerce.live["tax"] = self.response
    return httpx.Response(self.status, json=self.response)
