"""
Business rules for deriving variant costs from supplier prices.
"""

import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..models import CostUpdate, FamilyGroup, SupplierEntry, VariantRecord

logger = logging.getLogger(__name__)


# A pack-size suffix: final hyphen followed by ASCII digits
SKU_QTY_PATTERN = re.compile(r"(.*)-([0-9]+)")
DEFAULT_QTY = 1
CENT = Decimal("0.01")


def parse_sku(sku: str) -> Tuple[str, int]:
    """
    Split a SKU into its family prefix and quantity multiplier.

    Examples:
        "FR320-20" -> ("FR320", 20)
        "FR320"    -> ("FR320", 1)
        "A-B-5"    -> ("A-B", 5)

    A zero multiplier ("X-0") is not a pack size, so such SKUs are
    treated as having no suffix.

    Args:
        sku: Variant SKU

    Returns:
        Tuple of (prefix, qty) with qty >= 1
    """
    match = SKU_QTY_PATTERN.fullmatch(sku)
    if match:
        qty = int(match.group(2), 10)
        if qty >= 1:
            return match.group(1), qty
    return sku, DEFAULT_QTY


def build_variant_records(variants: Iterable[Mapping[str, Any]]) -> List[VariantRecord]:
    """
    Parse storefront variants into records, skipping variants without a SKU.

    Args:
        variants: Variant dicts with "id" and "sku"

    Returns:
        List of VariantRecord in input order
    """
    records = []
    for variant in variants:
        sku = variant.get("sku")
        if not sku:
            continue
        prefix, qty = parse_sku(sku)
        records.append(VariantRecord(
            variant_id=variant["id"],
            original_sku=sku,
            prefix=prefix,
            qty=qty,
        ))
    return records


def group_by_family(records: Iterable[VariantRecord]) -> Dict[str, FamilyGroup]:
    """
    Partition records by exact family prefix.

    Members keep the order in which they were encountered. Variants with
    identical SKUs are kept as separate members.
    """
    members_by_prefix: Dict[str, List[VariantRecord]] = {}
    for record in records:
        members_by_prefix.setdefault(record.prefix, []).append(record)

    return {
        prefix: FamilyGroup(prefix=prefix, members=tuple(members))
        for prefix, members in members_by_prefix.items()
    }


def round_cost(value: Decimal) -> Decimal:
    """Round a cost to cents, halves rounding up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def derive_family_costs(
    group: FamilyGroup,
    supplier: Optional[SupplierEntry],
) -> List[CostUpdate]:
    """
    Derive the cost of every member of a family from one supplier price.

    The member with the smallest quantity is the baseline and costs exactly
    the supplier price; every other member costs price × (qty / min_qty).

    Args:
        group: Family to price
        supplier: Matching supplier entry, or None if the family is not
                  stocked in the supplier catalog

    Returns:
        One CostUpdate per member in member order, or an empty list when
        there is no supplier entry or a cost cannot be rounded to cents
    """
    if supplier is None:
        return []

    min_qty = group.min_qty
    updates = []
    try:
        for member in group.members:
            # price * (qty / min_qty)
            cost = supplier.price * member.qty / min_qty
            updates.append(CostUpdate(
                variant_id=member.variant_id,
                new_cost=round_cost(cost),
            ))
    except InvalidOperation:
        logger.warning(
            f"Skipping family {group.prefix!r}: cost from price {supplier.price} "
            f"is out of range"
        )
        return []
    return updates


def derive_cost_updates(
    groups: Mapping[str, FamilyGroup],
    supplier_map: Mapping[str, SupplierEntry],
) -> List[CostUpdate]:
    """Derive updates for every family, group by group."""
    updates: List[CostUpdate] = []
    for prefix, group in groups.items():
        updates.extend(derive_family_costs(group, supplier_map.get(prefix)))
    return updates
