"""HTTP client for the remote product catalog.

One GET, no retries: callers (the catalog store) decide whether to try
again. Every failure surfaces as a ``FetchError`` subclass carrying a message
fit for display.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from storefront.shared.core.configuration import DEFAULT_CATALOG_URL
from storefront.shared.domain.catalog.models import Product

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base class for catalog fetch failures."""

    kind = "unknown"

    def __init__(self, user_message: str):
        self.user_message = user_message
        super().__init__(user_message)


class BadStatusError(FetchError):
    """The endpoint answered with something other than HTTP 200."""

    kind = "bad_status"

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Failed to load products (server returned HTTP {status_code})")


class NetworkError(FetchError):
    """The request never got a response (DNS, timeout, connection reset)."""

    kind = "network"

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network error: {str(cause) or type(cause).__name__}")


class InvalidEndpointError(FetchError):
    """The configured endpoint is not a usable URL."""

    kind = "invalid_url"

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Invalid catalog address: {str(cause) or type(cause).__name__}")


class CatalogParseError(FetchError):
    """The response body was not a valid product list."""

    kind = "parse"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to read product data: {detail}")


class CatalogClient:
    """Fetches the product listing.

    Args:
        endpoint_url: Product listing URL
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used by tests to fake the server
    """

    def __init__(
        self,
        endpoint_url: str = DEFAULT_CATALOG_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._transport = transport

    def _get_async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def fetch_products(self) -> List[Product]:
        """Download and parse the full catalog.

        Returns:
            Products in server response order

        Raises:
            BadStatusError: Non-200 response
            NetworkError: Transport-level failure
            InvalidEndpointError: The endpoint URL cannot be requested
            CatalogParseError: Body is not a JSON array of valid products
        """
        try:
            async with self._get_async_client() as client:
                response = await client.get(self.endpoint_url)
        except httpx.RequestError as e:
            logger.warning(f"Catalog request to {self.endpoint_url} failed: {e!r}")
            raise NetworkError(e) from e
        except httpx.InvalidURL as e:
            logger.error(f"Catalog endpoint {self.endpoint_url!r} is not a valid URL: {e}")
            raise InvalidEndpointError(e) from e

        if response.status_code != 200:
            logger.warning(f"Catalog endpoint returned HTTP {response.status_code}")
            raise BadStatusError(response.status_code)

        return parse_products(response.content)


def parse_products(body: bytes | str) -> List[Product]:
    """Parse a catalog response body; any bad element fails the whole body."""
    try:
        data = json.loads(body)
    except ValueError as e:
        raise CatalogParseError(f"response is not valid JSON ({e})") from e

    if not isinstance(data, list):
        raise CatalogParseError(f"expected a JSON array, got {type(data).__name__}")

    products: List[Product] = []
    for index, item in enumerate(data):
        try:
            products.append(Product.model_validate(item))
        except ValidationError as e:
            raise CatalogParseError(
                f"item {index} is invalid ({e.error_count()} error(s))"
            ) from e

    logger.debug(f"Parsed {len(products)} products")
    return products
