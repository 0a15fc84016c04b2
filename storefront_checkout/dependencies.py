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

"""FastAPI dependencies for the storefront checkout server.

Clients and services are built per request from the cached settings. Tests
swap them out through `app.dependency_overrides`.
"""

from fastapi import Depends

from storefront_checkout import config
from storefront_checkout.clients.commerce_client import CommerceClient
from storefront_checkout.clients.tax_client import TaxClient
from storefront_checkout.services.tax_service import TaxService


def get_settings() -> config.Settings:
  """Dependency provider for Settings."""
  return config.get_settings()


def get_commerce_client(
    settings: config.Settings = Depends(get_settings),
) -> CommerceClient:
  """Dependency provider for CommerceClient."""
  return CommerceClient(
      settings.chec_api_url,
      settings.chec_public_key,
      settings.chec_secret_key,
      timeout=settings.http_timeout_seconds,
  )


def get_tax_client(
    settings: config.Settings = Depends(get_settings),
) -> TaxClient:
  """Dependency provider for TaxClient."""
  return TaxClient(
      settings.taxjar_api_url,
      settings.taxjar_api_key,
      timeout=settings.http_timeout_seconds,
  )


def get_tax_service(
    settings: config.Settings = Depends(get_settings),
    commerce: CommerceClient = Depends(get_commerce_client),
    tax_client: TaxClient = Depends(get_tax_client),
) -> TaxService:
  """Dependency provider for TaxService."""
  return TaxService(commerce, tax_client, settings.tax_origin_state)
