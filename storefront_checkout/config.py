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

"""Shared configuration for the checkout server and CLI.

Remote API credentials come from the environment (optionally seeded from a
.env file). Process options such as the listening port are absl flags and are
only read by the entry points.
"""

import functools
import os
from typing import Optional

from absl import flags
from dotenv import load_dotenv
from pydantic import BaseModel

FLAGS = flags.FLAGS

# Define flags only if they haven't been defined yet (to avoid duplicates
# during tests or re-imports)
try:
  flags.DEFINE_string("host", "0.0.0.0", "Interface to bind the server to")
  flags.DEFINE_integer("port", 3000, "Port to run the server on")
  flags.DEFINE_string("env_file", None, "Optional .env file to load")
except flags.DuplicateFlagError:
  pass


class Settings(BaseModel):
  """Remote API endpoints and credentials."""

  chec_api_url: str = "https://api.chec.io"
  chec_public_key: str = ""
  chec_secret_key: str = ""
  taxjar_api_url: str = "https://api.taxjar.com"
  taxjar_api_key: str = ""
  # The merchant's region is not ISO coded, so the origin state is configured.
  tax_origin_state: str = "NY"
  http_timeout_seconds: float = 10.0


def _get_float(key: str, default: float) -> float:
  try:
    return float(os.getenv(key, str(default)))
  except ValueError:
    return default


def load_settings(env_file: Optional[str] = None) -> Settings:
  """Builds settings from the environment, loading env_file first if given."""
  if env_file:
    load_dotenv(env_file)
  else:
    load_dotenv()

  defaults = Settings()
  return Settings(
      chec_api_url=os.getenv("CHEC_API_URL", defaults.chec_api_url).rstrip(
          "/"
      ),
      chec_public_key=os.getenv("CHEC_PUBLIC_KEY", ""),
      chec_secret_key=os.getenv("CHEC_SECRET_KEY", ""),
      taxjar_api_url=os.getenv(
          "TAXJAR_API_URL", defaults.taxjar_api_url
      ).rstrip("/"),
      taxjar_api_key=os.getenv("TAXJAR_API_KEY", ""),
      tax_origin_state=os.getenv(
          "TAX_ORIGIN_STATE", defaults.tax_origin_state
      ),
      http_timeout_seconds=_get_float(
          "HTTP_TIMEOUT_SECONDS", defaults.http_timeout_seconds
      ),
  )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Reads and caches the process-wide settings."""
  return load_settings()
