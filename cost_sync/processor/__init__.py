"""
Processor package for cost sync operations.
"""

from .rules import (
    parse_sku,
    build_variant_records,
    group_by_family,
    derive_family_costs,
    derive_cost_updates,
    round_cost,
)
from .catalog import build_supplier_map, flatten_supplier_rows, CatalogFormatError
from .sync import sync_costs, SyncError
from .runner import run_sync, SyncResult

__all__ = [
    "parse_sku",
    "build_variant_records",
    "group_by_family",
    "derive_family_costs",
    "derive_cost_updates",
    "round_cost",
    "build_supplier_map",
    "flatten_supplier_rows",
    "CatalogFormatError",
    "sync_costs",
    "SyncError",
    "run_sync",
    "SyncResult",
]
