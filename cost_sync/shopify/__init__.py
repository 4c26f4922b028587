"""
Shopify API module.
"""

from cost_sync.shopify.client import (
    ShopifyClient,
    ShopifyClientError,
    ShopifyAuthError,
    ShopifyRateLimitError,
)
from cost_sync.shopify.batch_update import apply_cost_updates

__all__ = [
    "ShopifyClient",
    "ShopifyClientError",
    "ShopifyAuthError",
    "ShopifyRateLimitError",
    "apply_cost_updates",
]
