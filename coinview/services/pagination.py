"""Deterministic windowing of an ordered sequence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


def total_pages(length: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(length / page_size)


def clamp_page(page: int, length: int, page_size: int) -> int:
    # An empty sequence still renders as a single (empty) page.
    last = max(total_pages(length, page_size), 1)
    return min(max(page, 1), last)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def end(self) -> int:
        return min(self.page * self.page_size, self.total_items)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """Slice ``[(k-1)*P, min(k*P, N))`` for the clamped page ``k``."""
    n = len(items)
    current = clamp_page(page, n, page_size)
    start = (current - 1) * page_size
    return Page(
        items=list(items[start : min(current * page_size, n)]),
        page=current,
        page_size=page_size,
        total_items=n,
        total_pages=total_pages(n, page_size),
    )


def next_page(page: int, length: int, page_size: int) -> int:
    return clamp_page(page + 1, length, page_size)


def prev_page(page: int, length: int, page_size: int) -> int:
    return clamp_page(page - 1, length, page_size)
