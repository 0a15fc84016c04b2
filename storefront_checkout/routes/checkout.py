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

"""Checkout lookup routes backing the shipping form and summary."""

from typing import List, Optional

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Path
from fastapi import Query

from storefront_checkout import dependencies
from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.models import CheckoutSummaryView
from storefront_checkout.models import ShippingOption
from storefront_checkout.services.checkout_summary import CheckoutSummary

router = APIRouter(prefix="/api/checkout")


@router.get(
    "/{token}/countries",
    response_model=dict[str, str],
    operation_id="list_shipping_countries",
)
async def list_shipping_countries(
    token: str = Path(...),
    commerce: CommerceClient = Depends(dependencies.get_commerce_client),
) -> dict[str, str]:
  """List the countries the checkout ships to."""
  return await commerce.list_shipping_countries(token)


@router.get(
    "/{token}/countries/{country}/subdivisions",
    response_model=dict[str, str],
    operation_id="list_shipping_subdivisions",
)
async def list_shipping_subdivisions(
    token: str = Path(...),
    country: str = Path(...),
    commerce: CommerceClient = Depends(dependencies.get_commerce_client),
) -> dict[str, str]:
  """List the subdivisions of a shipping country."""
  return await commerce.list_shipping_subdivisions(token, country)


@router.get(
    "/{token}/shipping-options",
    response_model=List[ShippingOption],
    operation_id="get_shipping_options",
)
async def get_shipping_options(
    token: str = Path(...),
    country: str = Query(...),
    region: Optional[str] = Query(None),
    commerce: CommerceClient = Depends(dependencies.get_commerce_client),
) -> List[ShippingOption]:
  """List the shipping options for a destination."""
  return await commerce.get_shipping_options(token, country, region)


@router.get(
    "/{token}/summary",
    response_model=CheckoutSummaryView,
    operation_id="get_checkout_summary",
)
async def get_checkout_summary(
    token: str = Path(...),
    commerce: CommerceClient = Depends(dependencies.get_commerce_client),
) -> CheckoutSummaryView:
  """Summarize the checkout's live totals."""
  live = await commerce.get_live(token)
  return CheckoutSummary.from_live(live).view()
