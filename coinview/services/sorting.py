"""Stable numeric sorting of assets with direction toggling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Literal, Optional, Union

from coinview.schemas.market import Asset

Direction = Literal["asc", "desc"]

# Selecting a different key always starts here.
DEFAULT_DIRECTION: Direction = "desc"


class SortKey(str, Enum):
    PRICE = "price"
    CHANGE_24H = "change_24h"
    CHANGE_7D = "change_7d"
    MARKET_CAP = "market_cap"

    @property
    def field(self) -> str:
        return _KEY_FIELDS[self]


_KEY_FIELDS = {
    SortKey.PRICE: "current_price",
    SortKey.CHANGE_24H: "price_change_percentage_24h",
    SortKey.CHANGE_7D: "price_change_percentage_7d_in_currency",
    SortKey.MARKET_CAP: "market_cap",
}

# Generic variant: any numeric Asset field may be used directly.
NUMERIC_FIELDS = frozenset(
    {
        "current_price",
        "market_cap",
        "market_cap_rank",
        "total_volume",
        "price_change_24h",
        "price_change_percentage_24h",
        "price_change_percentage_7d_in_currency",
    }
)


def resolve_field(key: Union[SortKey, str]) -> str:
    """Map a sort key or a numeric Asset field name to the Asset attribute."""
    if isinstance(key, SortKey):
        return key.field
    try:
        return SortKey(key).field
    except ValueError:
        pass
    if key in NUMERIC_FIELDS:
        return key
    raise ValueError(f"Unsupported sort key: {key}")


def numeric_value(value: Any) -> float:
    """Comparison value; missing or non-numeric values count as zero."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if math.isnan(value):
        return 0.0
    return float(value)


def sort_assets(assets: Iterable[Asset], key: Union[SortKey, str], direction: Direction = DEFAULT_DIRECTION) -> List[Asset]:
    """Return a new list ordered by ``key``; equal values keep their input order."""
    field = resolve_field(key)
    return sorted(
        assets,
        key=lambda asset: numeric_value(getattr(asset, field, None)),
        reverse=direction == "desc",
    )


@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    direction: Direction = DEFAULT_DIRECTION

    def select(self, key: Union[SortKey, str]) -> "SortState":
        """Same key toggles direction; a different key resets to the default."""
        name = key.value if isinstance(key, SortKey) else key
        resolve_field(name)
        if self.key == name:
            return SortState(key=name, direction="asc" if self.direction == "desc" else "desc")
        return SortState(key=name, direction=DEFAULT_DIRECTION)

    def apply(self, assets: Iterable[Asset]) -> List[Asset]:
        if self.key is None:
            return list(assets)
        return sort_assets(assets, self.key, self.direction)
