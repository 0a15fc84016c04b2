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

"""Tax calculation route for the storefront checkout server."""

from typing import Any, Optional

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query

from storefront_checkout import dependencies
from storefront_checkout.constants import TAX_ROUTE
from storefront_checkout.models import ErrorResponse
from storefront_checkout.services.tax_service import TaxService

router = APIRouter()


@router.post(
    TAX_ROUTE,
    response_model=Optional[dict[str, Any]],
    operation_id="apply_tax",
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def apply_tax(
    token: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    region: Optional[str] = Query(None),
    zip_code: Optional[str] = Query(None, alias="zip"),
    tax_service: TaxService = Depends(dependencies.get_tax_service),
) -> Optional[dict[str, Any]]:
  """Calculate the destination's tax and apply it to the checkout."""
  return await tax_service.apply_tax(token, country, region, zip_code)
