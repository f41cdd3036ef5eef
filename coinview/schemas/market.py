"""Provider record schemas (CoinGecko payloads as consumed by the view)."""

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Sparkline(BaseModel):
    """Seven-day price series attached to a market record."""

    price: List[Optional[float]] = Field(default_factory=list)


class Asset(BaseModel):
    """One tradeable coin from ``/coins/markets``.

    Provider fields not declared here are kept so that a trending merge
    can expose everything the catalog record carries.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: str
    name: str
    image: Optional[str] = None
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    market_cap_rank: Optional[int] = None
    total_volume: Optional[float] = None
    price_change_24h: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    price_change_percentage_7d_in_currency: Optional[float] = None
    sparkline_in_7d: Optional[Sparkline] = None


class TrendingEntry(BaseModel):
    """Inner ``item`` of a ``/search/trending`` coin."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    symbol: str
    thumb: Optional[str] = None
    price_btc: Optional[float] = None
    market_cap_rank: Optional[int] = None


class TrendingCoin(BaseModel):
    item: TrendingEntry


class TrendingResponse(BaseModel):
    coins: List[TrendingCoin] = Field(default_factory=list)


class MergedTrendingRow(BaseModel):
    """Trending entry joined with its catalog asset, if one exists."""

    status: Literal["matched", "unmatched"]
    rank: int
    entry: TrendingEntry
    asset: Optional[Asset] = None

    @property
    def matched(self) -> bool:
        return self.status == "matched"

    def merged_fields(self) -> Dict[str, object]:
        """Overlay of entry fields with every field the asset provided."""
        merged: Dict[str, object] = self.entry.model_dump(exclude_unset=True)
        if self.asset is not None:
            merged.update(self.asset.model_dump(exclude_unset=True))
        return merged

    def get(self, field: str) -> object:
        return self.merged_fields().get(field)


class AssetCatalog(BaseModel):
    """Immutable snapshot of the loaded assets, in provider order."""

    model_config = ConfigDict(frozen=True)

    assets: Tuple[Asset, ...] = ()
    loaded_at: Optional[datetime] = None

    @classmethod
    def build(cls, assets: List[Asset]) -> "AssetCatalog":
        return cls(assets=tuple(assets), loaded_at=datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.assets)

    def index(self) -> Dict[str, Asset]:
        return {asset.id: asset for asset in self.assets}

    def get(self, asset_id: str) -> Optional[Asset]:
        return next((asset for asset in self.assets if asset.id == asset_id), None)


class UsdValue(BaseModel):
    model_config = ConfigDict(extra="allow")

    usd: Optional[float] = None


class Description(BaseModel):
    model_config = ConfigDict(extra="allow")

    en: Optional[str] = None


class MarketData(BaseModel):
    model_config = ConfigDict(extra="allow")

    current_price: Optional[UsdValue] = None
    market_cap: Optional[UsdValue] = None
    total_volume: Optional[UsdValue] = None
    price_change_percentage_24h: Optional[float] = None
    total_supply: Optional[float] = None
    sparkline_7d: Optional[Sparkline] = None


class AssetDetail(BaseModel):
    """Single coin from ``/coins/{id}`` with ``market_data`` included."""

    model_config = ConfigDict(extra="allow")

    id: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    market_cap_rank: Optional[int] = None
    description: Optional[Description] = None
    market_data: Optional[MarketData] = None
    sparkline_in_7d: Optional[Sparkline] = None


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    market_cap: Optional[float] = None
    market_cap_change_24h: Optional[float] = None
