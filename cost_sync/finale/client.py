"""
Finale Inventory API client for the supplier price catalog.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class FinaleClientError(Exception):
    """Base exception for Finale client errors."""
    pass


class FinaleAuthError(FinaleClientError):
    """Authentication error."""
    pass


class FinaleClient:
    """
    Async HTTP client for the Finale product API.

    Authenticates with HTTP Basic auth using an API key and secret.
    """

    BASE_URL = "https://app.finaleinventory.com"

    def __init__(
        self,
        account: str,
        api_key: str,
        api_secret: str,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Finale client.

        Args:
            account: Account path segment (app.finaleinventory.com/<account>/...)
            api_key: Finale API key
            api_secret: Finale API secret
            base_url: Override for the Finale host
            transport: Optional httpx transport (used by tests)
        """
        self.account = account.strip("/")
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.product_url = f"{self.base_url}/{self.account}/api/product/"

        self._auth = httpx.BasicAuth(api_key, api_secret)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(120.0, connect=10.0),
                headers={"Content-Type": "application/json"},
                auth=self._auth,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch_catalog(self) -> Any:
        """
        Fetch the full product catalog.

        Returns:
            Decoded JSON body; its "supplierList" holds the supplier prices

        Raises:
            FinaleAuthError: If the credentials are rejected
            FinaleClientError: For transport errors, non-2xx responses and
                               non-JSON bodies
        """
        logger.info("Fetching Finale data from API...")
        client = await self._get_client()

        try:
            response = await client.get(self.product_url)
        except httpx.RequestError as e:
            raise FinaleClientError(f"Request error: {e}") from e

        if response.status_code == 401:
            raise FinaleAuthError(f"Authentication failed for account {self.account}")

        if response.is_error:
            raise FinaleClientError(
                f"GET {response.url.path} returned "
                f"{response.status_code}: {response.text[:500]}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise FinaleClientError(f"Invalid JSON from Finale: {e}") from e

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
