"""API dependencies"""

from fastapi import HTTPException

from coinview.services.view_service import MarketViewService, get_view_service


def get_service() -> MarketViewService:
    """View service dependency"""
    service = get_view_service()
    if service is None:
        raise HTTPException(status_code=503, detail="View service not initialized")
    return service
