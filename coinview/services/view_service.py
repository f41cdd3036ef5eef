"""Market view model: feed loading, view state and page rendering.

Ties the pure components together:

    catalog -> search filter -> sorter -> paginator -> formatted rows
    trending + catalog -> merged trending rows

Each feed (catalog, trending, categories, per-asset detail) is loaded through
its own ``FeedLoader`` so a failure in one never affects the others.
"""

from __future__ import annotations

import asyncio
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from coinview.core.config import settings
from coinview.core.logging import get_logger
from coinview.ingestion.base import MarketDataSource
from coinview.ingestion.catalog_loader import CatalogLoader
from coinview.schemas.market import (
    Asset,
    AssetCatalog,
    AssetDetail,
    Category,
    MergedTrendingRow,
    TrendingEntry,
)
from coinview.services.load_state import FeedLoader
from coinview.services.pagination import Page, clamp_page, next_page, paginate, prev_page
from coinview.services.search import Debouncer, Scheduler, filter_assets
from coinview.services.sorting import Direction, SortKey, SortState, sort_assets
from coinview.services.trending import merge_trending

log = get_logger("view_service")

ViewName = Literal["all", "highlights", "categories"]

CATALOG_ERROR_MESSAGE = "Failed to fetch coin data."


@dataclass
class ViewState:
    search_text: str = ""
    query: str = ""
    sort: SortState = field(default_factory=SortState)
    page: int = 1
    view: ViewName = "all"


class MarketViewService:
    """Owns the loaded feeds and the current ``ViewState``."""

    def __init__(
        self,
        source: MarketDataSource,
        catalog_size: Optional[int] = None,
        catalog_page_size: Optional[int] = None,
        page_size: Optional[int] = None,
        debounce_seconds: Optional[float] = None,
        scheduler: Optional[Scheduler] = None,
        detail_cache_size: Optional[int] = None,
    ):
        self.source = source
        self.page_size = page_size or settings.TABLE_PAGE_SIZE
        self.loader = CatalogLoader(
            source,
            total=catalog_size if catalog_size is not None else settings.CATALOG_SIZE,
            page_size=catalog_page_size or settings.CATALOG_PAGE_SIZE,
        )

        self.catalog: FeedLoader[AssetCatalog] = FeedLoader(
            "catalog", AssetCatalog(), error_message=CATALOG_ERROR_MESSAGE
        )
        self.trending: FeedLoader[List[TrendingEntry]] = FeedLoader("trending", [])
        self.categories: FeedLoader[List[Category]] = FeedLoader("categories", [])
        # Most recently used last; failed lookups are never cached.
        self.details: "OrderedDict[str, FeedLoader[Optional[AssetDetail]]]" = OrderedDict()
        self.detail_cache_size = detail_cache_size or settings.DETAIL_CACHE_SIZE

        self.state = ViewState()
        window = debounce_seconds if debounce_seconds is not None else settings.SEARCH_DEBOUNCE_SECONDS
        self._search = Debouncer(window, self._apply_query, scheduler)

    # -------------------------------------------------------------------------
    # Feed loading
    # -------------------------------------------------------------------------
    async def load_catalog(self) -> bool:
        ok = await self.catalog.run(self.loader.load)
        if ok:
            self.state.page = clamp_page(self.state.page, len(self.visible_assets()), self.page_size)
        return ok

    async def load_trending(self) -> bool:
        return await self.trending.run(self.source.fetch_trending)

    async def load_categories(self) -> bool:
        return await self.categories.run(self.source.fetch_categories)

    async def load_detail(self, asset_id: str) -> FeedLoader[Optional[AssetDetail]]:
        loader = self.details.get(asset_id)
        if loader is None:
            loader = FeedLoader(f"detail:{asset_id}", None, error_message="Failed to fetch coin details")

        ok = await loader.run(lambda: self.source.fetch_asset_detail(asset_id))
        if not ok:
            self.details.pop(asset_id, None)
            return loader

        self.details[asset_id] = loader
        self.details.move_to_end(asset_id)
        while len(self.details) > self.detail_cache_size:
            self.details.popitem(last=False)
        return loader

    async def refresh(self) -> Dict[str, bool]:
        """Reload catalog and trending feeds independently."""
        catalog_ok, trending_ok = await asyncio.gather(self.load_catalog(), self.load_trending())
        log.info(f"Refresh finished | catalog={catalog_ok} trending={trending_ok} size={len(self.catalog.data)}")
        return {"catalog": catalog_ok, "trending": trending_ok}

    # -------------------------------------------------------------------------
    # View state transitions
    # -------------------------------------------------------------------------
    def set_search(self, text: str) -> None:
        self.state.search_text = text
        self._search.submit(text)

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def _apply_query(self, query: str) -> None:
        if query != self.state.query:
            log.debug(f"Search query settled: {query!r}")
        self.state.query = query
        self.state.page = 1

    def select_sort(self, key: str) -> SortState:
        self.state.sort = self.state.sort.select(key)
        self.state.page = clamp_page(self.state.page, len(self.visible_assets()), self.page_size)
        return self.state.sort

    def goto_page(self, page: int) -> int:
        self.state.page = clamp_page(page, len(self.visible_assets()), self.page_size)
        return self.state.page

    def next_page(self) -> int:
        self.state.page = next_page(self.state.page, len(self.visible_assets()), self.page_size)
        return self.state.page

    def prev_page(self) -> int:
        self.state.page = prev_page(self.state.page, len(self.visible_assets()), self.page_size)
        return self.state.page

    async def switch_view(self, view: ViewName) -> ViewName:
        self.state.view = view
        if view == "categories" and not self.categories.loaded and not self.categories.loading:
            await self.load_categories()
        return view

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------
    def visible_assets(self) -> List[Asset]:
        filtered = filter_assets(self.catalog.data.assets, self.state.query)
        return self.state.sort.apply(filtered)

    def current_page(self) -> Page[Asset]:
        return paginate(self.visible_assets(), self.state.page, self.page_size)

    def render_page(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        direction: Direction = "desc",
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page[Asset]:
        """Stateless render: does not touch ``self.state``."""
        assets = filter_assets(self.catalog.data.assets, search)
        if sort:
            assets = sort_assets(assets, sort, direction)
        return paginate(assets, page, page_size or self.page_size)

    def merged_trending(self) -> List[MergedTrendingRow]:
        return merge_trending(self.trending.data, self.catalog.data)

    def highlights(self, limit: int = 3) -> Dict[str, list]:
        assets = self.catalog.data.assets
        return {
            "trending": self.merged_trending()[:limit],
            "gainers": sort_assets(assets, SortKey.CHANGE_24H, "desc")[:limit],
            "losers": sort_assets(assets, SortKey.CHANGE_24H, "asc")[:limit],
        }


# Global instance holder for the service
_view_service: Optional[MarketViewService] = None


def init_view_service(source: MarketDataSource) -> MarketViewService:
    """Initialize the global view service at application startup."""
    global _view_service
    _view_service = MarketViewService(source)
    return _view_service


def get_view_service() -> Optional[MarketViewService]:
    return _view_service


def shutdown_view_service() -> None:
    global _view_service
    _view_service = None
