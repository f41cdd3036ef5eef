"""Shared fakes for view-model tests"""

import itertools
from typing import Callable, Dict, List, Optional, Set

import pytest

from coinview.core.errors import NetworkFetchError
from coinview.ingestion.base import MarketDataSource
from coinview.schemas.market import Asset, AssetDetail, Category, TrendingEntry


def build_asset(asset_id: str, **fields) -> Asset:
    fields.setdefault("symbol", asset_id[:3])
    fields.setdefault("name", asset_id.title())
    return Asset(id=asset_id, **fields)


class FakeSource(MarketDataSource):
    """In-memory market data source with per-feed failure switches"""

    name = "fake"

    def __init__(self, pages: Optional[Dict[int, List[Asset]]] = None):
        self.pages = pages or {}
        self.trending: List[TrendingEntry] = []
        self.categories: List[Category] = []
        self.details: Dict[str, AssetDetail] = {}
        self.failing_pages: Set[int] = set()
        self.fail_trending = False
        self.fail_categories = False
        self.page_calls: List[tuple] = []
        self.category_calls = 0

    async def fetch_markets_page(self, page: int, per_page: int) -> List[Asset]:
        self.page_calls.append((page, per_page))
        if page in self.failing_pages:
            raise NetworkFetchError(f"page {page} unavailable")
        return list(self.pages.get(page, []))

    async def fetch_trending(self) -> List[TrendingEntry]:
        if self.fail_trending:
            raise NetworkFetchError("trending unavailable")
        return list(self.trending)

    async def fetch_asset_detail(self, asset_id: str) -> AssetDetail:
        if asset_id not in self.details:
            raise NetworkFetchError(f"GET /coins/{asset_id} failed with status 404")
        return self.details[asset_id]

    async def fetch_categories(self) -> List[Category]:
        self.category_calls += 1
        if self.fail_categories:
            raise NetworkFetchError("categories unavailable")
        return list(self.categories)


class _Handle:
    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit clock instead of the event loop"""

    def __init__(self):
        self.now = 0
        self._jobs: List[tuple] = []
        self._seq = itertools.count()

    def __call__(self, delay: float, callback: Callable[[], None]) -> _Handle:
        handle = _Handle()
        self._jobs.append((self.now + delay, next(self._seq), callback, handle))
        return handle

    def advance_to(self, moment: float) -> None:
        while True:
            due = sorted(job for job in self._jobs if job[0] <= moment and not job[3].cancelled)
            if not due:
                break
            job = due[0]
            self._jobs.remove(job)
            self.now = job[0]
            job[2]()
        self.now = moment


@pytest.fixture
def make_asset():
    """Asset factory"""
    return build_asset


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sample_assets():
    """Five assets in market-cap order with some missing fields"""
    return [
        build_asset(
            "bitcoin",
            symbol="btc",
            name="Bitcoin",
            current_price=65000.0,
            market_cap=1_280_000_000_000,
            market_cap_rank=1,
            total_volume=32_000_000_000,
            price_change_percentage_24h=1.5,
            price_change_percentage_7d_in_currency=4.2,
            sparkline_in_7d={"price": [64000.0, 64500.0, 65000.0]},
        ),
        build_asset(
            "ethereum",
            symbol="eth",
            name="Ethereum",
            current_price=3400.0,
            market_cap=410_000_000_000,
            market_cap_rank=2,
            total_volume=15_000_000_000,
            price_change_percentage_24h=-2.1,
            price_change_percentage_7d_in_currency=-1.0,
        ),
        build_asset(
            "tether",
            symbol="usdt",
            name="Tether",
            current_price=1.0,
            market_cap=110_000_000_000,
            market_cap_rank=3,
            price_change_percentage_24h=0.0,
        ),
        build_asset(
            "wrapped-bitcoin",
            symbol="wbtc",
            name="Wrapped Bitcoin",
            current_price=64990.0,
            market_cap=10_000_000_000,
            market_cap_rank=4,
        ),
        build_asset(
            "dogecoin",
            symbol="doge",
            name="Dogecoin",
            current_price=0.15,
            market_cap=21_000_000_000,
            market_cap_rank=5,
            price_change_percentage_24h=7.8,
        ),
    ]


@pytest.fixture
def fake_source(sample_assets):
    source = FakeSource(pages={1: sample_assets[:3], 2: sample_assets[3:]})
    source.trending = [
        TrendingEntry(id="dogecoin", name="Dogecoin", symbol="DOGE", thumb="doge.png", price_btc=2.3e-6),
        TrendingEntry(id="pepe-unknown", name="Pepe", symbol="PEPE", thumb="pepe.png", price_btc=1e-10),
        TrendingEntry(id="bitcoin", name="Bitcoin", symbol="BTC", thumb="btc.png", price_btc=1.0),
    ]
    source.categories = [
        Category(name="Layer 1 (L1)", market_cap=2_100_000_000_000, market_cap_change_24h=0.8),
        Category(name="Meme", market_cap=None, market_cap_change_24h=None),
    ]
    return source


@pytest.fixture
def source_factory():
    return FakeSource
