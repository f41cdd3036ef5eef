"""Left join of the trending feed onto the asset catalog."""

from __future__ import annotations

from typing import Iterable, List

from coinview.schemas.market import AssetCatalog, MergedTrendingRow, TrendingEntry


def merge_trending(trending: Iterable[TrendingEntry], catalog: AssetCatalog) -> List[MergedTrendingRow]:
    """Return one row per trending entry, in feed order.

    Entries without a catalog match are kept as ``unmatched`` rows.
    """
    by_id = catalog.index()
    rows: List[MergedTrendingRow] = []
    for rank, entry in enumerate(trending, start=1):
        asset = by_id.get(entry.id)
        rows.append(
            MergedTrendingRow(
                status="matched" if asset is not None else "unmatched",
                rank=rank,
                entry=entry,
                asset=asset,
            )
        )
    return rows
