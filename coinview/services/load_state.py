"""Explicit load workflow for a single feed: idle -> loading -> success | error."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from coinview.core.errors import MarketDataError
from coinview.core.logging import get_logger

log = get_logger("load_state")

T = TypeVar("T")


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FeedLoader(Generic[T]):
    """Runs one feed's fetch and keeps the last good value.

    A failed run keeps the previously published data and records the error
    message; the next run clears it. A run always leaves ``LOADING``: errors
    end in ``ERROR`` and a cancelled run restores the status it started from.
    """

    def __init__(self, name: str, initial: T, error_message: Optional[str] = None):
        self.name = name
        self.data: T = initial
        self.status = LoadStatus.IDLE
        self.error: Optional[str] = None
        self.error_message = error_message
        self.updated_at: Optional[datetime] = None

    @property
    def loading(self) -> bool:
        return self.status == LoadStatus.LOADING

    @property
    def loaded(self) -> bool:
        return self.updated_at is not None

    def _fail(self, reason: str) -> None:
        self.status = LoadStatus.ERROR
        self.error = self.error_message or reason

    async def run(self, fetch: Callable[[], Awaitable[T]]) -> bool:
        previous = LoadStatus.IDLE if self.status == LoadStatus.LOADING else self.status
        self.status = LoadStatus.LOADING
        self.error = None
        try:
            result = await fetch()
        except MarketDataError as exc:
            self._fail(str(exc))
            log.error(f"Load failed for {self.name}: {exc}")
            return False
        except Exception as exc:
            self._fail(f"Unexpected error: {exc}")
            log.exception(f"Unexpected error loading {self.name}: {exc}")
            return False
        else:
            # Single assignment: readers never see a half-built value.
            self.data = result
            self.status = LoadStatus.SUCCESS
            self.updated_at = datetime.now(timezone.utc)
            return True
        finally:
            if self.status == LoadStatus.LOADING:
                # Cancelled mid-fetch.
                self.status = previous
