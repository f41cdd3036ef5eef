"""Row rendering: records in, display-ready response models out."""

from __future__ import annotations

from typing import List

from coinview.schemas.api import (
    AssetDetailOut,
    AssetRowOut,
    CategoryOut,
    FeedStatusOut,
    SparkPointOut,
    TrendingRowOut,
)
from coinview.schemas.market import Asset, AssetDetail, Category, MergedTrendingRow
from coinview.services.load_state import FeedLoader
from coinview.services.formatting import (
    format_currency,
    format_magnitude,
    format_percent,
    format_rank,
    sparkline_points,
    summarize,
)


def _spark(record: object) -> List[SparkPointOut]:
    return [SparkPointOut(index=p.index, value=p.value) for p in sparkline_points(record)]


def render_asset_row(asset: Asset) -> AssetRowOut:
    return AssetRowOut(
        id=asset.id,
        symbol=asset.symbol.upper(),
        name=asset.name,
        image=asset.image,
        rank=format_rank(asset.market_cap_rank),
        price=format_currency(asset.current_price, "$"),
        change_24h=format_percent(asset.price_change_percentage_24h),
        change_7d=format_percent(asset.price_change_percentage_7d_in_currency),
        market_cap=format_magnitude(asset.market_cap),
        volume_24h=format_magnitude(asset.total_volume),
        sparkline=_spark(asset),
    )


def render_trending_row(row: MergedTrendingRow) -> TrendingRowOut:
    fields = row.merged_fields()
    symbol = fields.get("symbol")
    return TrendingRowOut(
        rank=row.rank,
        status=row.status,
        id=row.entry.id,
        name=str(fields.get("name") or row.entry.name),
        symbol=str(symbol).upper() if symbol else row.entry.symbol.upper(),
        thumb=row.entry.thumb,
        image=fields.get("image"),  # type: ignore[arg-type]
        price_btc=row.entry.price_btc,
        price=format_currency(fields.get("current_price"), "$"),
        change_24h=format_percent(fields.get("price_change_percentage_24h")),
        market_cap=format_magnitude(fields.get("market_cap")),
        sparkline=_spark(row.asset) if row.asset is not None else [],
    )


def render_category(category: Category) -> CategoryOut:
    return CategoryOut(
        name=category.name,
        market_cap=format_magnitude(category.market_cap),
        market_cap_change_24h=format_percent(category.market_cap_change_24h),
    )


def render_detail(detail: AssetDetail) -> AssetDetailOut:
    market = detail.market_data
    return AssetDetailOut(
        id=detail.id,
        name=detail.name,
        symbol=detail.symbol.upper() if detail.symbol else None,
        rank=format_rank(detail.market_cap_rank),
        price=format_currency(market.current_price.usd if market and market.current_price else None, "$"),
        change_24h=format_percent(market.price_change_percentage_24h if market else None),
        market_cap=format_currency(market.market_cap.usd if market and market.market_cap else None, "$"),
        volume_24h=format_currency(market.total_volume.usd if market and market.total_volume else None, "$"),
        total_supply=format_currency(market.total_supply if market else None),
        description=summarize(detail.description.en if detail.description else None),
        sparkline=_spark(detail),
    )


def feed_status(loader: FeedLoader) -> FeedStatusOut:
    return FeedStatusOut(
        name=loader.name,
        status=loader.status.value,
        error=loader.error,
        updated_at=loader.updated_at,
    )
