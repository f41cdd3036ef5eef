from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class SparkPointOut(BaseModel):
    index: int
    value: Optional[float] = None


class AssetRowOut(BaseModel):
    """One rendered catalog row; every numeric field is display-formatted."""

    id: str
    symbol: str
    name: str
    image: Optional[str] = None
    rank: str
    price: str
    change_24h: str
    change_7d: str
    market_cap: str
    volume_24h: str
    sparkline: list[SparkPointOut]


class TrendingRowOut(BaseModel):
    rank: int
    status: Literal["matched", "unmatched"]
    id: str
    name: str
    symbol: str
    thumb: Optional[str] = None
    image: Optional[str] = None
    price_btc: Optional[float] = None
    price: str
    change_24h: str
    market_cap: str
    sparkline: list[SparkPointOut]


class CategoryOut(BaseModel):
    name: str
    market_cap: str
    market_cap_change_24h: str


class AssetDetailOut(BaseModel):
    id: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    rank: str
    price: str
    change_24h: str
    market_cap: str
    volume_24h: str
    total_supply: str
    description: Optional[str] = None
    sparkline: list[SparkPointOut]


class FeedStatusOut(BaseModel):
    name: str
    status: Literal["idle", "loading", "success", "error"]
    error: Optional[str] = None
    updated_at: Optional[datetime] = None


class ViewStateOut(BaseModel):
    view: Literal["all", "highlights", "categories"]
    search_text: str
    query: str
    search_pending: bool
    sort: Optional[str] = None
    direction: Literal["asc", "desc"]
    page: int


class PageResponse(BaseModel):
    request_id: str
    api_latency_ms: int
    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next: bool
    has_prev: bool
    loading: bool
    error: Optional[str] = None
    data: list[AssetRowOut]


class ViewResponse(PageResponse):
    state: ViewStateOut


class TrendingResponseOut(BaseModel):
    status: Literal["idle", "loading", "success", "error"]
    error: Optional[str] = None
    data: list[TrendingRowOut]


class HighlightsResponse(BaseModel):
    trending: list[TrendingRowOut]
    gainers: list[AssetRowOut]
    losers: list[AssetRowOut]


class CategoriesResponse(BaseModel):
    status: Literal["idle", "loading", "success", "error"]
    error: Optional[str] = None
    data: list[CategoryOut]


class RefreshResponse(BaseModel):
    catalog: FeedStatusOut
    trending: FeedStatusOut
    catalog_size: int


class HealthResponse(BaseModel):
    status: str
    catalog: FeedStatusOut
    trending: FeedStatusOut
    catalog_size: int
