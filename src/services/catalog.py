"""
Product catalog HTTP client.

Every call resolves to a FetchResult instead of raising: views start from
FetchResult.loading(), await the call, and render whichever of data or error
comes back. One request per call, no retries or caching.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

import httpx

from db.models import Product
from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)

T = TypeVar("T")

# anything that means "the body is not what we expected"
_PARSE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


class FetchStatus(str, Enum):
    LOADING = "loading"
    DATA = "data"
    ERROR = "error"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    status: FetchStatus
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def loading(cls) -> FetchResult[T]:
        return cls(FetchStatus.LOADING)

    @classmethod
    def ok(cls, data: T) -> FetchResult[T]:
        return cls(FetchStatus.DATA, data=data)

    @classmethod
    def failed(cls, error: str) -> FetchResult[T]:
        return cls(FetchStatus.ERROR, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is FetchStatus.ERROR


class CatalogClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else config.HTTP_TIMEOUT
        )
        self._transport = transport

    async def _get_json(self, path: str, not_ok_message: str):
        url = f"{self.base_url}{path}"
        _logger.debug(f"GET {url}")
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport
        ) as client:
            response = await client.get(url)
            if not response.is_success:
                _logger.warning(f"GET {url} returned {response.status_code}")
                raise _NotOk(not_ok_message)
            return response.json()

    async def fetch_products(self) -> FetchResult[List[Product]]:
        try:
            payload = await self._get_json("/products", "Failed to fetch products")
            products = [Product.from_dict(entry) for entry in payload]
        except _NotOk as e:
            return FetchResult.failed(str(e))
        except httpx.HTTPError as e:
            _logger.warning(f"Product list request failed: {e!r}")
            return FetchResult.failed(str(e) or "Network error")
        except _PARSE_ERRORS as e:
            _logger.warning(f"Unreadable product list: {e!r}")
            return FetchResult.failed("Invalid response from catalog")
        _logger.info(f"Fetched {len(products)} products.")
        return FetchResult.ok(products)

    async def fetch_product(self, product_id: int) -> FetchResult[Product]:
        try:
            payload = await self._get_json(
                f"/products/{product_id}", "Product not found"
            )
            product = Product.from_dict(payload)
        except _NotOk as e:
            return FetchResult.failed(str(e))
        except httpx.HTTPError as e:
            _logger.warning(f"Product {product_id} request failed: {e!r}")
            return FetchResult.failed(str(e) or "Network error")
        except _PARSE_ERRORS as e:
            # the public API answers unknown ids with 200 and an empty body
            _logger.warning(f"Unreadable product {product_id}: {e!r}")
            return FetchResult.failed("Product not found")
        return FetchResult.ok(product)


class _NotOk(Exception):
    pass
