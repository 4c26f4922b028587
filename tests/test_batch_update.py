"""
Tests for sequential cost updates.
"""

import asyncio
from decimal import Decimal

from cost_sync.models import CostUpdate
from cost_sync.shopify import batch_update
from cost_sync.shopify.batch_update import apply_cost_updates
from conftest import FakeShopify


def updates(*pairs):
    return [CostUpdate(variant_id=v, new_cost=Decimal(c)) for v, c in pairs]


class TestApplyCostUpdates:
    """Tests for apply_cost_updates function."""

    def test_sends_updates_in_order(self):
        client = FakeShopify()

        result = asyncio.run(apply_cost_updates(
            client, updates((1, "12.50"), (2, "25.00")), delay_seconds=0
        ))

        assert client.calls == [(1, Decimal("12.50")), (2, Decimal("25.00"))]
        assert result == {"success_count": 2, "error_count": 0, "errors_by_variant": {}}

    def test_failure_does_not_stop_batch(self):
        client = FakeShopify(fail_ids={1})

        result = asyncio.run(apply_cost_updates(
            client, updates((1, "1.00"), (2, "2.00")), delay_seconds=0
        ))

        assert [c[0] for c in client.calls] == [1, 2]
        assert result["success_count"] == 1
        assert result["error_count"] == 1
        assert "422" in result["errors_by_variant"]["1"]

    def test_unexpected_error_is_recorded(self):
        class BrokenClient:
            async def update_variant_cost(self, variant_id, cost):
                raise KeyError("variant")

        result = asyncio.run(apply_cost_updates(
            BrokenClient(), updates((7, "1.00")), delay_seconds=0
        ))

        assert result["error_count"] == 1
        assert result["errors_by_variant"]["7"].startswith("Unexpected error")

    def test_delay_only_between_calls(self, monkeypatch):
        delays = []

        async def fake_sleep(seconds):
            delays.append(seconds)

        monkeypatch.setattr(batch_update, "sleep", fake_sleep)
        assert asyncio.sleep is not fake_sleep

        asyncio.run(apply_cost_updates(
            FakeShopify(), updates((1, "1"), (2, "2"), (3, "3")), delay_seconds=0.15
        ))

        assert delays == [0.15, 0.15]

    def test_no_updates(self):
        result = asyncio.run(apply_cost_updates(FakeShopify(), [], delay_seconds=0))

        assert result["success_count"] == 0
