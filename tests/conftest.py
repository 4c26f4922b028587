"""
Shared fakes for the Shopify and Finale collaborators.
"""

import pytest
from cost_sync.finale.client import FinaleClientError
from cost_sync.shopify.client import ShopifyClientError


class FakeShopify:
    """In-memory variant source and cost sink."""

    def __init__(self, variants=(), fail_ids=(), list_error=None):
        self.variants = list(variants)
        self.fail_ids = set(fail_ids)
        self.list_error = list_error
        self.calls = []
        self.on_update = None

    async def list_all_variants(self):
        if self.list_error:
            raise self.list_error
        return list(self.variants)

    async def update_variant_cost(self, variant_id, cost):
        self.calls.append((variant_id, cost))
        if self.on_update:
            self.on_update(variant_id, cost)
        if variant_id in self.fail_ids:
            raise ShopifyClientError(f"PUT /variants/{variant_id}.json returned 422")


class FakeFinale:
    """In-memory supplier source."""

    def __init__(self, catalog=None, error=None):
        self.catalog = catalog
        self.error = error
        self.fetches = 0

    async def fetch_catalog(self):
        self.fetches += 1
        if self.error:
            raise self.error
        return self.catalog


@pytest.fixture
def shopify_error():
    return ShopifyClientError("GET /variants.json returned 500")


@pytest.fixture
def finale_error():
    return FinaleClientError("Request error: unreachable")
