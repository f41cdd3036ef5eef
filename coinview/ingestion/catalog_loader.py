"""Sequential multi-page catalog loading."""

from __future__ import annotations

import math
from typing import List, Set

from coinview.core.errors import MarketDataError, NetworkFetchError
from coinview.core.logging import get_logger
from coinview.schemas.market import Asset, AssetCatalog
from .base import MarketDataSource

log = get_logger("ingestion.catalog_loader")


class CatalogLoader:
    """Accumulates market pages into one catalog snapshot.

    Pages are requested one after another so the accumulated order matches
    page order. A failure on any page fails the whole load.
    """

    def __init__(self, source: MarketDataSource, total: int, page_size: int):
        if total < 0:
            raise ValueError("total must be >= 0")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.source = source
        self.total = total
        self.page_size = page_size

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.page_size)

    async def load(self) -> AssetCatalog:
        accumulated: List[Asset] = []

        for page in range(1, self.page_count + 1):
            try:
                records = await self.source.fetch_markets_page(page, self.page_size)
            except MarketDataError as exc:
                log.error(f"Catalog page {page}/{self.page_count} failed: {exc}")
                raise NetworkFetchError("Failed to fetch coin data.") from exc
            accumulated.extend(records)

        assets = self._dedupe(accumulated[: self.total])
        log.info(f"Loaded catalog from {self.source.name}: pages={self.page_count} assets={len(assets)}")
        return AssetCatalog.build(assets)

    @staticmethod
    def _dedupe(assets: List[Asset]) -> List[Asset]:
        # Provider pages can shift between requests; keep the first occurrence.
        seen: Set[str] = set()
        unique: List[Asset] = []
        for asset in assets:
            if asset.id in seen:
                log.warning(f"Dropping repeated asset id across pages: {asset.id}")
                continue
            seen.add(asset.id)
            unique.append(asset)
        return unique
