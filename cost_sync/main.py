"""
Finale Cost Sync - command line entry point.

Usage:
    cost-sync [--dry-run] [--delay SECONDS] [--log-level LEVEL]
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import settings
from .processor import run_sync

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cost-sync",
        description="Update Shopify variant costs from Finale supplier prices",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Derive and log cost updates without sending them to Shopify",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help=f"Seconds between update calls (default: {settings.update_delay_seconds})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger.info("Starting Finale cost sync...")
    result = asyncio.run(run_sync(settings, dry_run=args.dry_run, delay_seconds=args.delay))

    if not result.success:
        logger.error(f"Cost sync failed: {result.error}")
        return 1

    report = result.report
    logger.info(
        f"Cost sync completed: {report.updates_applied} updated, "
        f"{report.updates_failed} failed, {report.families_skipped} families without supplier price"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
