from coinview.ingestion.base import MarketDataSource
from coinview.ingestion.catalog_loader import CatalogLoader
from coinview.ingestion.coingecko import CoinGeckoSource

__all__ = ["MarketDataSource", "CatalogLoader", "CoinGeckoSource"]
