"""
Reduction of the Finale product catalog to a supplier price map.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ..models import SupplierEntry

logger = logging.getLogger(__name__)


class CatalogFormatError(ValueError):
    """The catalog does not have the expected supplierList shape."""
    pass


def flatten_supplier_rows(catalog: Any) -> List[dict]:
    """
    Flatten Finale's doubly nested supplierList into a list of rows.

    The catalog looks like:
        {"supplierList": [[{"supplierProductId": "FR320", "price": 12.5}, ...], ...]}

    Inner values that are not lists, and rows that are not objects, are
    skipped with a warning.

    Raises:
        CatalogFormatError: If supplierList is missing or not a list
    """
    if not isinstance(catalog, dict):
        raise CatalogFormatError(
            f"Expected a JSON object, got {type(catalog).__name__}"
        )

    supplier_list = catalog.get("supplierList")
    if not isinstance(supplier_list, list):
        raise CatalogFormatError("supplierList not found or not an array")

    rows = []
    for index, supplier_arr in enumerate(supplier_list):
        if supplier_arr is None:
            continue
        if not isinstance(supplier_arr, list):
            logger.warning(f"Skipping supplierList[{index}]: not an array")
            continue
        for supplier in supplier_arr:
            if isinstance(supplier, dict):
                rows.append(supplier)
            else:
                logger.warning(f"Skipping non-object row in supplierList[{index}]")
    return rows


def build_supplier_map(catalog: Any) -> Dict[str, SupplierEntry]:
    """
    Build a map of supplierProductId -> SupplierEntry.

    Duplicate policy: rows are applied in catalog order and the last row
    for an id wins. A warning is logged when a later row changes the price.

    A malformed catalog is reported and yields an empty map, so no family
    will be priced.
    """
    try:
        rows = flatten_supplier_rows(catalog)
    except CatalogFormatError as e:
        logger.warning(f"Unexpected Finale data format: {e}")
        return {}

    supplier_map: Dict[str, SupplierEntry] = {}
    skipped = 0

    for row in rows:
        if not row.get("supplierProductId"):
            continue

        try:
            entry = SupplierEntry.model_validate(row)
        except ValidationError as e:
            skipped += 1
            logger.warning(
                f"Skipping supplier row {row.get('supplierProductId')!r}: "
                f"{e.error_count()} invalid field(s)"
            )
            continue

        previous = supplier_map.get(entry.supplier_product_id)
        if previous is not None and previous.price != entry.price:
            logger.warning(
                f"Duplicate supplierProductId {entry.supplier_product_id!r}: "
                f"price {previous.price} replaced by {entry.price}"
            )
        supplier_map[entry.supplier_product_id] = entry

    logger.info(
        f"Supplier catalog: {len(supplier_map)} products"
        + (f", {skipped} invalid rows skipped" if skipped else "")
    )
    return supplier_map
