"""
Cost sync processor: Finale supplier prices -> Shopify variant costs.
"""

import logging
import traceback
from pathlib import Path
from typing import Any, Optional, Union

from ..finale import CatalogStage
from ..models import SyncReport, SyncStatus, utcnow
from ..shopify import apply_cost_updates
from .catalog import build_supplier_map
from .rules import build_variant_records, derive_cost_updates, group_by_family

logger = logging.getLogger(__name__)


class SyncError(Exception):
    """Error during sync process."""

    def __init__(self, message: str, report: Optional[SyncReport] = None):
        super().__init__(message)
        self.report = report


async def sync_costs(
    variant_source: Any,
    supplier_source: Any,
    cost_sink: Any,
    *,
    delay_seconds: float = 0.15,
    staging_dir: Union[str, Path] = "./data",
    dry_run: bool = False,
) -> SyncReport:
    """
    Run one cost sync pass.

    Steps:
        1. List every storefront variant
        2. Parse the SKUs of variants that have one
        3. Fetch the supplier catalog, stage it to disk, reduce it to a price map
        4. Group variants by family and derive costs
        5. Send the updates one at a time with delay_seconds between calls

    The staged catalog file is removed when the run ends, whether it
    succeeded or not.

    Args:
        variant_source: Object with async list_all_variants()
        supplier_source: Object with async fetch_catalog()
        cost_sink: Object with async update_variant_cost(variant_id, cost)
        delay_seconds: Throttle between update calls
        staging_dir: Directory for the temporary catalog file
        dry_run: Derive and log updates without sending them

    Returns:
        SyncReport for the run

    Raises:
        SyncError: If fetching variants or the catalog fails
    """
    report = SyncReport(dry_run=dry_run)
    logger.info("Starting cost sync" + (" (dry run)" if dry_run else ""))

    try:
        # Step 1-2: Variants and their SKUs
        variants = await variant_source.list_all_variants()
        report.variants_fetched = len(variants)

        records = build_variant_records(variants)
        report.variants_with_sku = len(records)
        logger.info(f"Total Shopify SKU entries: {len(records)}")

        with CatalogStage(staging_dir) as stage:
            # Step 3: Supplier prices
            catalog = await supplier_source.fetch_catalog()
            stage.write(catalog)

            supplier_map = build_supplier_map(catalog)
            report.supplier_entries = len(supplier_map)

            # Step 4: Families and derived costs
            groups = group_by_family(records)
            report.families = len(groups)
            report.families_priced = sum(1 for prefix in groups if prefix in supplier_map)
            report.families_skipped = report.families - report.families_priced

            updates = derive_cost_updates(groups, supplier_map)
            report.updates_derived = len(updates)
            logger.info(
                f"{report.families} families, {report.families_priced} priced, "
                f"{report.families_skipped} without supplier price; "
                f"{len(updates)} cost updates"
            )

            # Step 5: Apply
            if dry_run:
                for update in updates:
                    logger.info(f"[dry run] Would update variant {update.variant_id} cost to {update.new_cost}")
            elif updates:
                result = await apply_cost_updates(cost_sink, updates, delay_seconds=delay_seconds)
                report.updates_applied = result["success_count"]
                report.updates_failed = result["error_count"]
                report.errors_by_variant = result["errors_by_variant"]

                if result["errors_by_variant"]:
                    logger.warning(f"Some updates failed: {result['error_count']} variants had errors")

        report.status = SyncStatus.SUCCESS
        report.finished_at = utcnow()
        logger.info("Finished updating Shopify variant costs.")
        return report

    except Exception as e:
        logger.error(f"Sync failed: {e}")
        logger.debug(traceback.format_exc())

        report.status = SyncStatus.FAILED
        report.finished_at = utcnow()
        report.error_message = str(e)
        raise SyncError(f"Sync failed: {e}", report=report) from e
