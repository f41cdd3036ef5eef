"""View service tests: feed isolation, catalog retention and view state"""

import httpx
import pytest
import pytest_asyncio

from coinview.ingestion.coingecko import CoinGeckoSource
from coinview.schemas.market import AssetDetail
from coinview.services.load_state import LoadStatus
from coinview.services.view_service import MarketViewService


class TestFeedLoading:
    """Test independent feed workflows"""

    @pytest.fixture
    def service(self, fake_source):
        return MarketViewService(fake_source, catalog_size=5, catalog_page_size=3, page_size=2, debounce_seconds=0)

    @pytest.mark.asyncio
    async def test_initial_state_is_idle(self, service):
        assert service.catalog.status == LoadStatus.IDLE
        assert len(service.catalog.data) == 0
        assert service.current_page().items == []

    @pytest.mark.asyncio
    async def test_refresh_loads_both_feeds(self, service):
        results = await service.refresh()

        assert results == {"catalog": True, "trending": True}
        assert len(service.catalog.data) == 5
        assert len(service.merged_trending()) == 3

    @pytest.mark.asyncio
    async def test_trending_failure_does_not_block_catalog(self, service, fake_source):
        """Test a secondary feed failure leaves its section empty only"""
        fake_source.fail_trending = True
        results = await service.refresh()

        assert results == {"catalog": True, "trending": False}
        assert service.catalog.status == LoadStatus.SUCCESS
        assert service.trending.status == LoadStatus.ERROR
        assert service.merged_trending() == []

    @pytest.mark.asyncio
    async def test_catalog_failure_keeps_trending(self, service, fake_source):
        fake_source.failing_pages = {1}
        results = await service.refresh()

        assert results == {"catalog": False, "trending": True}
        assert service.catalog.error == "Failed to fetch coin data."
        assert not service.catalog.loading
        assert [row.status for row in service.merged_trending()] == ["unmatched"] * 3

    @pytest.mark.asyncio
    async def test_failed_reload_retains_previous_catalog(self, service, fake_source):
        """Test no partial catalog is published after a failed reload"""
        await service.load_catalog()
        first = service.catalog.data

        fake_source.failing_pages = {2}
        ok = await service.load_catalog()

        assert not ok
        assert service.catalog.data is first
        assert service.catalog.status == LoadStatus.ERROR
        assert service.catalog.error == "Failed to fetch coin data."

    @pytest.mark.asyncio
    async def test_error_cleared_by_next_successful_run(self, service, fake_source):
        fake_source.failing_pages = {1}
        await service.load_catalog()
        fake_source.failing_pages = set()
        await service.load_catalog()

        assert service.catalog.error is None
        assert service.catalog.status == LoadStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_categories_load_on_view_switch(self, service, fake_source):
        """Test categories are fetched when the view switches, once"""
        await service.switch_view("highlights")
        assert fake_source.category_calls == 0

        await service.switch_view("categories")
        await service.switch_view("all")
        await service.switch_view("categories")

        assert fake_source.category_calls == 1
        assert [c.name for c in service.categories.data] == ["Layer 1 (L1)", "Meme"]

    @pytest.mark.asyncio
    async def test_categories_failure_is_isolated(self, service, fake_source):
        await service.refresh()
        fake_source.fail_categories = True
        await service.switch_view("categories")

        assert service.categories.status == LoadStatus.ERROR
        assert service.categories.data == []
        assert service.catalog.status == LoadStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_detail_loader_per_asset(self, service, fake_source):
        fake_source.details["bitcoin"] = AssetDetail.model_validate({"id": "bitcoin", "name": "Bitcoin"})

        ok = await service.load_detail("bitcoin")
        missing = await service.load_detail("nope")

        assert ok.data.name == "Bitcoin"
        assert missing.data is None
        assert missing.status == LoadStatus.ERROR

    @pytest.mark.asyncio
    async def test_categories_retry_after_unexpected_error(self, service, fake_source, monkeypatch):
        """Test an unexpected fetch error does not block the next view switch"""

        async def broken():
            raise RuntimeError("boom")

        monkeypatch.setattr(fake_source, "fetch_categories", broken)
        await service.switch_view("categories")
        assert service.categories.status == LoadStatus.ERROR

        monkeypatch.undo()
        await service.switch_view("all")
        await service.switch_view("categories")

        assert service.categories.status == LoadStatus.SUCCESS
        assert fake_source.category_calls == 1

    @pytest.mark.asyncio
    async def test_detail_with_unusable_id(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": "bitcoin"})

        source = CoinGeckoSource(base_url="https://api.example.test/api/v3", transport=httpx.MockTransport(handler))
        service = MarketViewService(source, debounce_seconds=0)

        loader = await service.load_detail("bad\x00id")

        assert loader.status == LoadStatus.ERROR
        assert loader.data is None
        assert "bad\x00id" not in service.details

    @pytest.mark.asyncio
    async def test_detail_cache_is_bounded(self, fake_source):
        service = MarketViewService(fake_source, debounce_seconds=0, detail_cache_size=3)
        for i in range(5):
            fake_source.details[f"coin-{i}"] = AssetDetail.model_validate({"id": f"coin-{i}"})

        for i in range(100):
            await service.load_detail(f"junk-{i}")
        assert len(service.details) == 0

        for i in range(5):
            await service.load_detail(f"coin-{i}")
        await service.load_detail("coin-2")

        assert list(service.details) == ["coin-3", "coin-4", "coin-2"]


class TestViewState:
    """Test search, sort and page transitions"""

    @pytest_asyncio.fixture
    async def service(self, fake_source, scheduler):
        service = MarketViewService(
            fake_source,
            catalog_size=5,
            catalog_page_size=3,
            page_size=2,
            debounce_seconds=500,
            scheduler=scheduler,
        )
        await service.load_catalog()
        return service

    @pytest.mark.asyncio
    async def test_search_applies_after_quiescence(self, service, scheduler):
        service.set_search("b")
        scheduler.advance_to(100)
        service.set_search("bit")

        assert service.state.query == ""
        assert len(service.visible_assets()) == 5

        scheduler.advance_to(600)
        assert service.state.query == "bit"
        assert [a.id for a in service.visible_assets()] == ["bitcoin", "wrapped-bitcoin"]

    @pytest.mark.asyncio
    async def test_search_resets_page(self, service, scheduler):
        service.goto_page(3)
        service.set_search("e")
        scheduler.advance_to(500)

        assert service.state.page == 1

    @pytest.mark.asyncio
    async def test_sort_toggle_and_reset(self, service):
        service.select_sort("price")
        assert service.state.sort.direction == "desc"
        assert service.current_page().items[0].id == "bitcoin"

        service.select_sort("price")
        assert service.state.sort.direction == "asc"
        assert service.current_page().items[0].id == "dogecoin"

        service.select_sort("market_cap")
        assert service.state.sort.direction == "desc"

    @pytest.mark.asyncio
    async def test_navigation_bounds(self, service):
        assert service.prev_page() == 1
        assert service.next_page() == 2
        assert service.next_page() == 3
        assert service.next_page() == 3
        assert service.goto_page(10) == 3
        assert len(service.current_page().items) == 1

    @pytest.mark.asyncio
    async def test_stateless_render_leaves_state(self, service):
        page = service.render_page(search="coin", sort="change_24h", direction="desc", page=1)

        assert [a.id for a in page.items] == ["dogecoin", "bitcoin"]
        assert service.state.query == ""
        assert service.state.sort.key is None

    @pytest.mark.asyncio
    async def test_highlights(self, service):
        await service.load_trending()
        sections = service.highlights(limit=2)

        assert [a.id for a in sections["gainers"]] == ["dogecoin", "bitcoin"]
        assert [a.id for a in sections["losers"]] == ["ethereum", "tether"]
        assert [row.entry.id for row in sections["trending"]] == ["dogecoin", "pepe-unknown"]
