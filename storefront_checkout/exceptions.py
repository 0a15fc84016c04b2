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

"""Custom exceptions for the storefront checkout server."""

from typing import Optional


class CheckoutError(Exception):
  """Base class for all checkout exceptions."""

  def __init__(
      self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500
  ):
    self.message = message
    self.code = code
    self.status_code = status_code
    super().__init__(self.message)


class MissingAttributesError(CheckoutError):
  """Raised when required query attributes are absent."""

  def __init__(self, message: str):
    super().__init__(message, code="MISSING_ATTRIBUTES", status_code=422)


class InvalidAddressError(CheckoutError):
  """Raised when the tax provider rejects the destination address."""

  def __init__(self, message: str):
    super().__init__(message, code="INVALID_ADDRESS", status_code=400)


class InvalidIdentifierError(CheckoutError):
  """Raised when an identifier cannot be used as a URL path segment."""

  def __init__(self, message: str):
    super().__init__(message, code="INVALID_IDENTIFIER", status_code=400)


class CommerceApiError(CheckoutError):
  """Raised when a commerce platform call fails."""

  def __init__(self, message: str, upstream_status: Optional[int] = None):
    super().__init__(message, code="COMMERCE_API_ERROR", status_code=502)
    self.upstream_status = upstream_status


class TaxProviderError(CheckoutError):
  """Raised when the tax provider rejects or fails a calculation."""

  def __init__(
      self,
      message: str,
      detail: Optional[str] = None,
      upstream_status: Optional[int] = None,
  ):
    super().__init__(message, code="TAX_PROVIDER_ERROR", status_code=502)
    self.detail = detail or message
    self.upstream_status = upstream_status
