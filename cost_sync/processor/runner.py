"""
Runner that wires configured clients into a cost sync.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import Settings
from ..finale import FinaleClient
from ..models import SyncReport
from ..shopify import ShopifyClient
from .sync import sync_costs, SyncError

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of a sync run."""
    report: Optional[SyncReport]
    error: Optional[str]

    @property
    def success(self) -> bool:
        return self.error is None


async def run_sync(
    settings: Settings,
    dry_run: bool = False,
    delay_seconds: Optional[float] = None,
) -> SyncResult:
    """Run a cost sync with clients built from settings, with error handling."""
    missing = settings.missing_credentials()
    if missing:
        error = f"Missing configuration: {', '.join(missing)}"
        logger.error(error)
        return SyncResult(report=None, error=error)

    if delay_seconds is None:
        delay_seconds = settings.update_delay_seconds

    shopify = ShopifyClient(
        settings.shopify_domain,
        settings.shopify_access_token,
        api_version=settings.shopify_api_version,
    )
    finale = FinaleClient(
        settings.finale_account,
        settings.finale_api_key,
        settings.finale_api_secret,
        base_url=settings.finale_base_url,
    )

    try:
        async with shopify, finale:
            report = await sync_costs(
                shopify,
                finale,
                shopify,
                delay_seconds=delay_seconds,
                staging_dir=settings.staging_dir,
                dry_run=dry_run,
            )
        result = SyncResult(report=report, error=None)
    except SyncError as e:
        result = SyncResult(report=e.report, error=str(e))
    except Exception as e:
        logger.exception("Unexpected error during cost sync")
        result = SyncResult(report=None, error=f"Unexpected error: {e}")

    if result.report is not None and result.report.duration_seconds is not None:
        logger.info(f"Total runtime: {result.report.duration_seconds:.3f}s")

    return result
