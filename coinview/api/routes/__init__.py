from coinview.api.routes.coins import router as coins_router
from coinview.api.routes.health import router as health_router
from coinview.api.routes.view import router as view_router

__all__ = ["coins_router", "health_router", "view_router"]
