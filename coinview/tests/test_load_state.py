"""Feed loader workflow tests"""

import asyncio

import pytest

from coinview.core.errors import NetworkFetchError
from coinview.services.load_state import FeedLoader, LoadStatus


class TestFeedLoader:
    """Test status transitions on success, failure and cancellation"""

    @pytest.mark.asyncio
    async def test_success_publishes_data(self):
        loader = FeedLoader("prices", [])

        async def fetch():
            return [1, 2]

        assert await loader.run(fetch) is True
        assert loader.data == [1, 2]
        assert loader.status == LoadStatus.SUCCESS
        assert loader.loaded

    @pytest.mark.asyncio
    async def test_market_error_keeps_previous_data(self):
        loader = FeedLoader("prices", [1], error_message="Failed to fetch prices")

        async def fetch():
            raise NetworkFetchError("timeout")

        assert await loader.run(fetch) is False
        assert loader.data == [1]
        assert loader.status == LoadStatus.ERROR
        assert loader.error == "Failed to fetch prices"

    @pytest.mark.asyncio
    async def test_unexpected_error_ends_in_error_state(self):
        """Test a non-provider exception still leaves the loading state"""
        loader = FeedLoader("categories", [])

        async def fetch():
            raise RuntimeError("boom")

        assert await loader.run(fetch) is False
        assert not loader.loading
        assert loader.status == LoadStatus.ERROR
        assert "boom" in loader.error
        assert loader.data == []

    @pytest.mark.asyncio
    async def test_cancelled_run_restores_status(self):
        loader = FeedLoader("trending", [])
        started = asyncio.Event()

        async def fetch():
            started.set()
            await asyncio.sleep(10)
            return ["late"]

        task = asyncio.create_task(loader.run(fetch))
        await started.wait()
        assert loader.loading

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert loader.status == LoadStatus.IDLE
        assert loader.data == []
