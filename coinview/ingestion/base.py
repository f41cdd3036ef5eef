"""Abstract market-data source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from coinview.schemas.market import Asset, AssetDetail, Category, TrendingEntry


class MarketDataSource(ABC):
    """Read-only market-data provider used by the view model.

    Implementations raise ``coinview.core.errors.MarketDataError`` subclasses
    on failure; they never return partial pages.
    """

    name: str

    @abstractmethod
    async def fetch_markets_page(self, page: int, per_page: int) -> List[Asset]:
        """Fetch one page of market-cap ordered assets, sparkline and 24h/7d changes included."""

    @abstractmethod
    async def fetch_trending(self) -> List[TrendingEntry]:
        """Fetch the trending feed in rank order."""

    @abstractmethod
    async def fetch_asset_detail(self, asset_id: str) -> AssetDetail:
        """Fetch a single asset with market data and sparkline."""

    @abstractmethod
    async def fetch_categories(self) -> List[Category]:
        """Fetch coin categories."""
