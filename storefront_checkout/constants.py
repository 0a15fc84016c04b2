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

"""Constants shared by the checkout server, form controller and CLI."""

CHEC_AUTH_HEADER = "X-Authorization"

TAX_PROVIDER_NAME = "TaxJar"
TAX_BREAKDOWN_TYPE = "Tax"

# Form watchers settle this long after the last change.
FORM_DEBOUNCE_SECONDS = 0.6

# Countries whose tax calculation needs a region.
REGION_REQUIRED_COUNTRIES = frozenset({"US", "CA"})
# Countries whose tax calculation needs the full street address.
STREET_ADDRESS_REQUIRED_COUNTRIES = frozenset({"US"})

TAX_ROUTE = "/api/tax"
