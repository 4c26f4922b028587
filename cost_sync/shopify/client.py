"""
Shopify REST Admin API client for variant costs.
"""

import asyncio
import logging
import math
from decimal import Decimal
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ShopifyClientError(Exception):
    """Base exception for Shopify client errors."""
    pass


class ShopifyAuthError(ShopifyClientError):
    """Authentication error."""
    pass


class ShopifyRateLimitError(ShopifyClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Seconds to wait from a Retry-After header.

    Returns None when the header is missing or not a number of seconds
    (e.g. an HTTP-date), so the caller falls back to exponential backoff.
    """
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


class ShopifyClient:
    """
    Async HTTP client for the Shopify REST Admin API.

    Lists variants (following Link header pagination) and writes
    variant costs. Retries rate-limited and failed requests.
    """

    API_VERSION = "2025-07"
    PAGE_LIMIT = 250
    MAX_RETRIES = 5
    BASE_RETRY_DELAY = 1.0  # seconds

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Shopify client.

        Args:
            shop_domain: Store domain (e.g., "mystore.myshopify.com")
            access_token: Admin API access token
            api_version: Admin API version, defaults to API_VERSION
            transport: Optional httpx transport (used by tests)
        """
        # Clean domain
        domain = shop_domain
        if domain.startswith("https://"):
            domain = domain[8:]
        elif domain.startswith("http://"):
            domain = domain[7:]
        domain = domain.rstrip("/")

        self.shop_domain = domain
        self.access_token = access_token
        self.api_version = api_version or self.API_VERSION
        self.base_url = f"https://{domain}/admin/api/{self.api_version}"

        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(60.0, connect=10.0),
                headers={
                    "Content-Type": "application/json",
                    "X-Shopify-Access-Token": self.access_token,
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request with retry logic.

        Returns:
            The successful response

        Raises:
            ShopifyAuthError: If authentication fails
            ShopifyRateLimitError: If rate limit exceeded after retries
            ShopifyClientError: For other errors
        """
        client = await self._get_client()
        last_error: Optional[Exception] = None

        for attempt in range(self.MAX_RETRIES):
            try:
                response = await client.request(method, url, **kwargs)

                if response.status_code == 401:
                    raise ShopifyAuthError(
                        f"Authentication failed for {self.shop_domain}"
                    )

                if response.status_code == 429:
                    retry_after = parse_retry_after(
                        response.headers.get("Retry-After")
                    )
                    raise ShopifyRateLimitError(
                        "Rate limit exceeded", retry_after=retry_after
                    )

                if response.is_error:
                    raise ShopifyClientError(
                        f"{method} {response.url.path} returned "
                        f"{response.status_code}: {response.text[:500]}"
                    )

                return response

            except ShopifyRateLimitError as e:
                last_error = e
                delay = e.retry_after or (
                    self.BASE_RETRY_DELAY * (2 ** attempt)
                )
                logger.warning(
                    f"Rate limited, waiting {delay:.1f}s "
                    f"(attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                await asyncio.sleep(delay)

            except httpx.RequestError as e:
                last_error = ShopifyClientError(f"Request error: {e}")
                delay = self.BASE_RETRY_DELAY * (2 ** attempt)
                logger.warning(
                    f"Request error, retrying in {delay:.1f}s: {e}"
                )
                await asyncio.sleep(delay)

        # All retries exhausted
        raise last_error or ShopifyClientError("Max retries exceeded")

    async def iter_variant_pages(self) -> AsyncIterator[List[Dict[str, Any]]]:
        """
        Yield pages of variants, following the Link rel="next" header.

        Each page depends on the link returned with the previous one.
        """
        url: Optional[str] = f"{self.base_url}/variants.json"
        params: Optional[Dict[str, Any]] = {"limit": self.PAGE_LIMIT}

        while url:
            response = await self._request("GET", url, params=params)
            try:
                variants = response.json().get("variants", [])
            except ValueError as e:
                raise ShopifyClientError(f"Invalid variants response: {e}") from e

            yield variants

            url = response.links.get("next", {}).get("url")
            # The next link already carries limit and page_info
            params = None

    async def list_all_variants(self) -> List[Dict[str, Any]]:
        """
        Fetch every variant in the store.

        Returns:
            Flat list of variant dicts (each with at least "id" and "sku")
        """
        variants: List[Dict[str, Any]] = []
        async for page in self.iter_variant_pages():
            variants.extend(page)
            logger.info(f"Fetched {len(variants)} variants so far...")

        logger.info(f"Total Shopify variants fetched: {len(variants)}")
        return variants

    async def update_variant_cost(self, variant_id: Any, cost: Decimal) -> None:
        """
        Set the unit cost of a variant.

        Args:
            variant_id: Numeric Shopify variant id
            cost: Cost already rounded to cents (sent as e.g. "12.50")

        Raises:
            ShopifyClientError: If Shopify rejects the update
        """
        await self._request(
            "PUT",
            f"{self.base_url}/variants/{variant_id}.json",
            json={"variant": {"id": variant_id, "cost": str(cost)}},
        )

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
