from contextlib import asynccontextmanager
import asyncio
from typing import Optional

from fastapi import FastAPI

from coinview.api.routes import coins, health, view
from coinview.core.config import settings
from coinview.core.logging import get_logger
from coinview.ingestion.coingecko import CoinGeckoSource
from coinview.services.view_service import get_view_service, init_view_service, shutdown_view_service


log = get_logger("app")

# Background task handle
_refresh_task: Optional[asyncio.Task] = None


async def initial_refresh() -> None:
    """Load catalog and trending feeds once at startup."""
    service = get_view_service()
    if service is None:
        return
    try:
        await service.refresh()
    except Exception as exc:
        log.exception(f"Initial refresh failed: {exc}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _refresh_task

    log.info(f"Starting application in {settings.ENV.upper()} mode")

    source = CoinGeckoSource()
    init_view_service(source)
    log.info(
        f"View service ready | source={source.name} catalog={settings.CATALOG_SIZE} "
        f"page_size={settings.CATALOG_PAGE_SIZE}"
    )

    if settings.REFRESH_ON_STARTUP:
        _refresh_task = asyncio.create_task(initial_refresh())
    else:
        log.info("Startup refresh is disabled (REFRESH_ON_STARTUP=false)")

    yield

    log.info("Shutting down services...")
    if _refresh_task and not _refresh_task.done():
        _refresh_task.cancel()
        try:
            await _refresh_task
        except asyncio.CancelledError:
            pass

    shutdown_view_service()
    log.info("Application shutdown complete")


app = FastAPI(
    title="Coin Market View",
    description="Sortable, searchable, paginated view over CoinGecko market data",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


app.include_router(coins.router)
app.include_router(view.router)
app.include_router(health.router)
