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

"""Storefront Checkout Server (Python/FastAPI)."""

import logging
from typing import Sequence

from absl import app as absl_app
from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
import uvicorn

import storefront_checkout
from storefront_checkout import config
from storefront_checkout.exceptions import CheckoutError
from storefront_checkout.routes.checkout import router as checkout_router
from storefront_checkout.routes.tax import router as tax_router

# --- App Setup ---

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Storefront Checkout Service",
    version=storefront_checkout.__version__,
    description=(
        "Shipping lookups and tax calculation bridging the commerce platform"
        " and the tax provider"
    ),
)


@app.exception_handler(CheckoutError)
async def checkout_exception_handler(request: Request, exc: CheckoutError):
  """Handles checkout exceptions and converts them to JSON responses."""
  del request  # Unused.
  if exc.status_code >= 500:
    logger.error("%s: %s", exc.code, exc.message)
  return JSONResponse(
      status_code=exc.status_code,
      content={"code": exc.code, "message": exc.message},
  )


app.include_router(tax_router)
app.include_router(checkout_router)


def main(argv: Sequence[str]) -> None:
  """Main entry point for the Storefront Checkout Server."""
  del argv  # Unused.

  # Request handlers read the cached settings; reload them with the env file.
  settings = config.load_settings(config.FLAGS.env_file)
  config.get_settings.cache_clear()
  if not settings.chec_secret_key or not settings.taxjar_api_key:
    logger.warning(
        "CHEC_SECRET_KEY and TAXJAR_API_KEY should be set; tax requests will"
        " be rejected upstream."
    )

  uvicorn.run(app, host=config.FLAGS.host, port=config.FLAGS.port)


def run() -> None:
  absl_app.run(main)


if __name__ == "__main__":
  run()
