"""Snapshot entrypoint - Load the feeds once and log a rendered page.

Usage:
    python -m coinview.snapshot_entrypoint                      # First page, provider order
    python -m coinview.snapshot_entrypoint btc                  # Filter by name/symbol
    python -m coinview.snapshot_entrypoint btc market_cap 2     # Filter, sort, page
"""

import asyncio
import sys
from typing import Optional

from coinview.core.logging import get_logger
from coinview.ingestion.coingecko import CoinGeckoSource
from coinview.services.rendering import render_asset_row, render_trending_row
from coinview.services.sorting import resolve_field
from coinview.services.view_service import MarketViewService

logger = get_logger("snapshot_entrypoint")


async def run_snapshot(
    search: Optional[str],
    sort: Optional[str],
    page: int,
    service: Optional[MarketViewService] = None,
) -> bool:
    service = service or MarketViewService(CoinGeckoSource())
    results = await service.refresh()

    if not results["catalog"]:
        logger.error(f"Catalog load failed: {service.catalog.error}")
        return False

    result = service.render_page(search=search, sort=sort, page=page)
    logger.info(f"Page {result.page}/{result.total_pages} ({result.total_items} assets)")
    for asset in result.items:
        row = render_asset_row(asset)
        logger.info(
            f"{row.rank:>4} {row.symbol:<8} {row.price:>16} {row.change_24h:>9} {row.change_7d:>9} {row.market_cap:>10}"
        )

    for trending in service.merged_trending():
        row = render_trending_row(trending)
        logger.info(f"trending #{row.rank} {row.symbol} ({row.status}) price={row.price} 24h={row.change_24h}")
    return True


def main():
    """Main entry point for a one-shot snapshot."""
    args = sys.argv[1:]
    search = args[0] if len(args) > 0 else None
    sort = args[1] if len(args) > 1 else None
    page = 1
    if sort:
        try:
            resolve_field(sort)
        except ValueError as exc:
            logger.error(str(exc))
            sys.exit(1)
    if len(args) > 2:
        try:
            page = int(args[2])
        except ValueError:
            logger.error(f"Invalid page: {args[2]}")
            sys.exit(1)

    ok = asyncio.run(run_snapshot(search, sort, page))
    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
