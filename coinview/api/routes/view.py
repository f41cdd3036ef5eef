"""View routes - Stateful search, sort and page navigation over the shared ViewState."""

import time
from typing import Literal

from fastapi import APIRouter, Body, Depends, HTTPException

from coinview.api.deps import get_service
from coinview.api.routes.coins import build_page_response
from coinview.schemas.api import ViewResponse, ViewStateOut
from coinview.services.view_service import MarketViewService

router = APIRouter(prefix="/view", tags=["view"])


def _view_response(service: MarketViewService, start: float) -> ViewResponse:
    state = service.state
    return ViewResponse(
        **build_page_response(service.current_page(), service, start),
        state=ViewStateOut(
            view=state.view,
            search_text=state.search_text,
            query=state.query,
            search_pending=service.search_pending,
            sort=state.sort.key,
            direction=state.sort.direction,
            page=state.page,
        ),
    )


@router.get("", response_model=ViewResponse)
def get_view(service: MarketViewService = Depends(get_service)):
    """Render the current page for the current view state."""
    return _view_response(service, time.perf_counter())


@router.post("/search", response_model=ViewResponse)
async def set_search(
    text: str = Body("", embed=True),
    service: MarketViewService = Depends(get_service),
):
    """
    Update the raw search text.

    The effective query only changes once the input has been quiet for the
    debounce window; until then ``state.search_pending`` is true.
    """
    start = time.perf_counter()
    service.set_search(text)
    return _view_response(service, start)


@router.post("/sort/{key}", response_model=ViewResponse)
def select_sort(key: str, service: MarketViewService = Depends(get_service)):
    """Sort by ``key``; selecting the current key again flips the direction."""
    start = time.perf_counter()
    try:
        service.select_sort(key)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _view_response(service, start)


@router.post("/page/{page}", response_model=ViewResponse)
def goto_page(page: int, service: MarketViewService = Depends(get_service)):
    start = time.perf_counter()
    service.goto_page(page)
    return _view_response(service, start)


@router.post("/next", response_model=ViewResponse)
def next_page(service: MarketViewService = Depends(get_service)):
    start = time.perf_counter()
    service.next_page()
    return _view_response(service, start)


@router.post("/prev", response_model=ViewResponse)
def prev_page(service: MarketViewService = Depends(get_service)):
    start = time.perf_counter()
    service.prev_page()
    return _view_response(service, start)


@router.post("/mode/{view}", response_model=ViewResponse)
async def switch_view(
    view: Literal["all", "highlights", "categories"],
    service: MarketViewService = Depends(get_service),
):
    """Switch the active view; switching to categories loads them once."""
    start = time.perf_counter()
    await service.switch_view(view)
    return _view_response(service, start)
