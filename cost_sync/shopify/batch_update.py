"""
Sequential cost updates for Shopify variants.
"""

import asyncio
import logging
from typing import Any, Dict, Sequence

from ..models import CostUpdate
from .client import ShopifyClientError

logger = logging.getLogger(__name__)

# Throttle sleep, replaceable in tests
sleep = asyncio.sleep


async def apply_cost_updates(
    client: Any,
    updates: Sequence[CostUpdate],
    delay_seconds: float = 0.15
) -> Dict[str, Any]:
    """
    Apply variant cost updates one at a time with a fixed delay between calls.

    A failed update is recorded and the batch continues.

    Args:
        client: Object with an async update_variant_cost(variant_id, cost)
                method, normally a ShopifyClient
        updates: Updates in the order they should be sent
        delay_seconds: Delay between successive API calls

    Returns:
        Dict with "success_count", "error_count", and "errors_by_variant"
    """
    success_count = 0
    error_count = 0
    errors_by_variant: Dict[str, str] = {}

    total = len(updates)

    for processed, update in enumerate(updates, start=1):
        if processed > 1 and delay_seconds > 0:
            await sleep(delay_seconds)

        variant_key = str(update.variant_id)
        try:
            await client.update_variant_cost(update.variant_id, update.new_cost)
            success_count += 1
            logger.info(
                f"Updated variant {update.variant_id} cost to {update.new_cost}"
            )
        except ShopifyClientError as e:
            errors_by_variant[variant_key] = str(e)
            error_count += 1
            logger.error(f"Failed to update variant {update.variant_id}: {e}")
        except Exception as e:
            errors_by_variant[variant_key] = f"Unexpected error: {e}"
            error_count += 1
            logger.exception(f"Unexpected error updating variant {update.variant_id}")

        # Progress reporting
        if processed % 100 == 0 or processed == total:
            logger.info(f"Progress: {processed}/{total} variants ({int(processed/total*100)}%)")

    logger.info(f"Cost update complete: {success_count} succeeded, {error_count} failed")

    return {
        "success_count": success_count,
        "error_count": error_count,
        "errors_by_variant": errors_by_variant
    }
