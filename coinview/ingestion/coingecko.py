"""CoinGecko source implementation."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from coinview.core.config import settings
from coinview.core.errors import NetworkFetchError, PayloadError
from coinview.core.logging import get_logger
from coinview.schemas.market import Asset, AssetDetail, Category, TrendingEntry, TrendingResponse
from .base import MarketDataSource

log = get_logger("ingestion.coingecko")

_assets_adapter = TypeAdapter(List[Asset])
_categories_adapter = TypeAdapter(List[Category])


class CoinGeckoSource(MarketDataSource):
    """Fetches market data from the CoinGecko REST API."""

    name = "coingecko"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        vs_currency: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.COINGECKO_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.COINGECKO_API_KEY
        self.vs_currency = vs_currency or settings.VS_CURRENCY
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        if self.api_key:
            return {"x-cg-demo-api-key": self.api_key}
        return {}

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        log.debug(f"Making request to: {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                resp = await client.get(url, params=params)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 429:
                log.error("Rate limit exceeded. Please try again later.")
            raise NetworkFetchError(f"GET {path} failed with status {status}") from exc
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            raise NetworkFetchError(f"GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise PayloadError(f"GET {path} returned invalid JSON") from exc

    async def fetch_markets_page(self, page: int, per_page: int) -> List[Asset]:
        params = {
            "vs_currency": self.vs_currency,
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": page,
            "sparkline": "true",
            "price_change_percentage": "24h,7d",
        }
        data = await self._get("/coins/markets", params)
        try:
            assets = _assets_adapter.validate_python(data)
        except ValidationError as exc:
            raise PayloadError(f"Unexpected /coins/markets payload on page {page}") from exc
        log.info(f"Fetched {len(assets)} records from CoinGecko (page={page})")
        return assets

    async def fetch_trending(self) -> List[TrendingEntry]:
        data = await self._get("/search/trending")
        try:
            trending = TrendingResponse.model_validate(data)
        except ValidationError as exc:
            raise PayloadError("Unexpected /search/trending payload") from exc
        return [coin.item for coin in trending.coins]

    async def fetch_asset_detail(self, asset_id: str) -> AssetDetail:
        params = {
            "localization": "false",
            "tickers": "false",
            "market_data": "true",
            "community_data": "false",
            "developer_data": "false",
            "sparkline": "true",
        }
        data = await self._get(f"/coins/{asset_id}", params)
        try:
            return AssetDetail.model_validate(data)
        except ValidationError as exc:
            raise PayloadError(f"Unexpected /coins/{asset_id} payload") from exc

    async def fetch_categories(self) -> List[Category]:
        data = await self._get("/coins/categories")
        try:
            return _categories_adapter.validate_python(data)
        except ValidationError as exc:
            raise PayloadError("Unexpected /coins/categories payload") from exc
