"""Search filtering and input debouncing."""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, Iterable, List, Optional, Protocol, TypeVar

from coinview.schemas.market import Asset

T = TypeVar("T")


def matches(asset: Asset, query: str) -> bool:
    needle = query.lower()
    return needle in (asset.name or "").lower() or needle in (asset.symbol or "").lower()


def filter_assets(assets: Iterable[Asset], query: Optional[str]) -> List[Asset]:
    """Case-insensitive substring match on name or symbol. Empty query keeps everything."""
    if not query:
        return list(assets)
    return [asset for asset in assets if matches(asset, query)]


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], ScheduledHandle]


def asyncio_scheduler(delay: float, callback: Callable[[], None]) -> ScheduledHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer(Generic[T]):
    """Single-slot debounced input stream.

    ``submit`` replaces the pending update and restarts the quiescence
    window; ``on_settle`` runs once with the last submitted value after the
    window elapses without a new submission.
    """

    def __init__(
        self,
        window: float,
        on_settle: Callable[[T], None],
        scheduler: Optional[Scheduler] = None,
    ):
        self.window = window
        self.on_settle = on_settle
        self.scheduler = scheduler or asyncio_scheduler
        self._pending: Optional[ScheduledHandle] = None
        self._value: Optional[T] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def submit(self, value: T) -> None:
        if self._pending is not None:
            self._pending.cancel()
        self._value = value
        if self.window <= 0:
            self._pending = None
            self.on_settle(value)
            return
        self._pending = self.scheduler(self.window, self._fire)

    def _fire(self) -> None:
        self._pending = None
        self.on_settle(self._value)  # type: ignore[arg-type]
