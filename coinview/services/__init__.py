# Services package
from coinview.services.view_service import (
    MarketViewService,
    ViewState,
    init_view_service,
    get_view_service,
    shutdown_view_service,
)

__all__ = [
    "MarketViewService",
    "ViewState",
    "init_view_service",
    "get_view_service",
    "shutdown_view_service",
]
