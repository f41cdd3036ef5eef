"""Coin routes - Stateless catalog pages, trending, highlights, categories and details."""

import time
import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from coinview.api.deps import get_service
from coinview.schemas.api import (
    AssetDetailOut,
    CategoriesResponse,
    HighlightsResponse,
    PageResponse,
    RefreshResponse,
    TrendingResponseOut,
)
from coinview.services.pagination import Page
from coinview.services.rendering import (
    feed_status,
    render_asset_row,
    render_category,
    render_detail,
    render_trending_row,
)
from coinview.services.sorting import resolve_field
from coinview.services.view_service import MarketViewService

router = APIRouter(tags=["coins"])


def build_page_response(page: Page, service: MarketViewService, start: float) -> dict:
    return {
        "request_id": str(uuid.uuid4()),
        "api_latency_ms": int((time.perf_counter() - start) * 1000),
        "page": page.page,
        "page_size": page.page_size,
        "total_items": page.total_items,
        "total_pages": page.total_pages,
        "has_next": page.has_next,
        "has_prev": page.has_prev,
        "loading": service.catalog.loading,
        "error": service.catalog.error,
        "data": [render_asset_row(asset) for asset in page.items],
    }


@router.get("/coins", response_model=PageResponse)
def list_coins(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or symbol"),
    sort: Optional[str] = Query(None, description="price, change_24h, change_7d, market_cap or a numeric field"),
    direction: Literal["asc", "desc"] = Query("desc", description="Sort direction"),
    page: int = Query(1, description="Page number (clamped to the available range)"),
    page_size: Optional[int] = Query(None, ge=1, le=250, description="Rows per page"),
    service: MarketViewService = Depends(get_service),
):
    """
    Render one page of the catalog without touching the shared view state.

    Missing numeric values sort as zero and render as "N/A" / "-".
    """
    start = time.perf_counter()
    if sort:
        try:
            resolve_field(sort)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

    result = service.render_page(search=search, sort=sort, direction=direction, page=page, page_size=page_size)
    return PageResponse(**build_page_response(result, service, start))


@router.get("/coins/{asset_id}", response_model=AssetDetailOut)
async def get_coin_detail(asset_id: str, service: MarketViewService = Depends(get_service)):
    """Fetch and render a single asset with its seven-day sparkline."""
    loader = await service.load_detail(asset_id)
    if loader.data is None:
        if service.catalog.data.get(asset_id) is None and service.catalog.loaded:
            raise HTTPException(status_code=404, detail=f"Asset '{asset_id}' not found")
        raise HTTPException(status_code=502, detail=loader.error or "Failed to fetch coin details")
    return render_detail(loader.data)


@router.get("/trending", response_model=TrendingResponseOut)
def get_trending(service: MarketViewService = Depends(get_service)):
    """Trending feed joined with catalog data, in trending rank order."""
    rows = service.merged_trending()
    return TrendingResponseOut(
        status=service.trending.status.value,
        error=service.trending.error,
        data=[render_trending_row(row) for row in rows],
    )


@router.get("/highlights", response_model=HighlightsResponse)
def get_highlights(
    limit: int = Query(3, ge=1, le=50, description="Rows per highlight section"),
    service: MarketViewService = Depends(get_service),
):
    """Trending preview plus top 24h gainers and losers."""
    sections = service.highlights(limit)
    return HighlightsResponse(
        trending=[render_trending_row(row) for row in sections["trending"]],
        gainers=[render_asset_row(asset) for asset in sections["gainers"]],
        losers=[render_asset_row(asset) for asset in sections["losers"]],
    )


@router.get("/categories", response_model=CategoriesResponse)
async def get_categories(service: MarketViewService = Depends(get_service)):
    """Coin categories; fetched on first request."""
    if not service.categories.loaded and not service.categories.loading:
        await service.load_categories()
    return CategoriesResponse(
        status=service.categories.status.value,
        error=service.categories.error,
        data=[render_category(category) for category in service.categories.data],
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(service: MarketViewService = Depends(get_service)):
    """Reload the catalog and trending feeds."""
    await service.refresh()
    return RefreshResponse(
        catalog=feed_status(service.catalog),
        trending=feed_status(service.trending),
        catalog_size=len(service.catalog.data),
    )
