"""Health routes - Feed status and readiness checks."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from coinview.api.deps import get_service
from coinview.schemas.api import HealthResponse
from coinview.services.rendering import feed_status
from coinview.services.view_service import MarketViewService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(service: MarketViewService = Depends(get_service)):
    """
    Health check endpoint.

    Reports the load state of the catalog and trending feeds. A failed
    secondary feed does not make the service unhealthy.
    """
    return HealthResponse(
        status="healthy",
        catalog=feed_status(service.catalog),
        trending=feed_status(service.trending),
        catalog_size=len(service.catalog.data),
    )


@router.get("/ready")
def readiness(response: Response, service: MarketViewService = Depends(get_service)):
    """
    Readiness probe - ready once a catalog snapshot has been published.

    Returns 200 if ready, 503 otherwise.
    """
    if service.catalog.loaded:
        return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}
    response.status_code = 503
    return {
        "status": "not_ready",
        "error": service.catalog.error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
