"""Error types raised at the market-data boundary."""


class MarketDataError(RuntimeError):
    """Base class for failures while talking to the market-data provider."""


class NetworkFetchError(MarketDataError):
    """Raised when a request fails or the provider answers with an error status."""


class PayloadError(MarketDataError):
    """Raised when a provider response does not have the expected shape."""
