"""
Data model: parsed variants, family groups, cost updates, supplier catalog
rows and sync run reports.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class VariantRecord:
    """A storefront variant with its SKU split into family and pack size."""

    variant_id: Any
    original_sku: str
    prefix: str
    qty: int


@dataclass(frozen=True)
class FamilyGroup:
    """All variants sharing a family prefix, in first-seen order."""

    prefix: str
    members: Tuple[VariantRecord, ...]

    @property
    def min_qty(self) -> int:
        """Quantity of the baseline member."""
        return min(member.qty for member in self.members)


@dataclass(frozen=True)
class CostUpdate:
    """A cost to be written to one variant."""

    variant_id: Any
    new_cost: Decimal


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class SyncStatus(str, Enum):
    """Status of a sync run."""
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class SupplierEntry(BaseModel):
    """One supplier row from the Finale product catalog."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    supplier_product_id: str = Field(alias="supplierProductId", min_length=1)
    price: Decimal = Field(ge=0)

    @field_validator("supplier_product_id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        # Finale occasionally returns numeric product ids
        if isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_float(cls, value: Any) -> Any:
        if isinstance(value, float):
            return str(value)
        return value


class SyncReport(BaseModel):
    """Summary of a single sync run."""
    started_at: datetime = Field(default_factory=utcnow)
    finished_at: Optional[datetime] = None
    status: SyncStatus = SyncStatus.RUNNING
    dry_run: bool = False

    # Statistics
    variants_fetched: int = 0
    variants_with_sku: int = 0
    families: int = 0
    families_priced: int = 0
    families_skipped: int = 0
    supplier_entries: int = 0
    updates_derived: int = 0
    updates_applied: int = 0
    updates_failed: int = 0

    # Error information
    errors_by_variant: Dict[str, str] = Field(default_factory=dict)
    error_message: Optional[str] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()
