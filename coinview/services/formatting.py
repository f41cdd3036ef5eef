"""Sparkline extraction and display formatting.

Nothing in here raises on missing or malformed data: series fall back to an
empty list and formatters fall back to a placeholder string.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

# Tried in order; the detail payload nests its series under market_data.
SERIES_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("market_data", "sparkline_7d", "price"),
    ("sparkline_in_7d", "price"),
)

MAGNITUDE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
)

MAGNITUDE_PLACEHOLDER = "-"
PLACEHOLDER = "N/A"


class SparkPoint(NamedTuple):
    index: int
    value: Any


def _dig(record: Any, path: Sequence[str]) -> Any:
    current = record
    for key in path:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return current


def extract_series(record: Any) -> List[Any]:
    for path in SERIES_PATHS:
        series = _dig(record, path)
        if isinstance(series, (list, tuple)):
            return list(series)
    return []


def to_points(series: Sequence[Any]) -> List[SparkPoint]:
    return [SparkPoint(index=i, value=value) for i, value in enumerate(series, start=1)]


def sparkline_points(record: Any) -> List[SparkPoint]:
    return to_points(extract_series(record))


def _finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def _literal(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_magnitude(value: Any) -> str:
    """Abbreviate with B/M/K using the largest threshold the value exceeds."""
    num = _finite_number(value)
    if num is None:
        return MAGNITUDE_PLACEHOLDER
    for threshold, suffix in MAGNITUDE_THRESHOLDS:
        if num > threshold:
            return f"{num / threshold:.2f}{suffix}"
    return _literal(num)


def format_currency(value: Any, symbol: str = "") -> str:
    num = _finite_number(value)
    if num is None:
        return PLACEHOLDER
    return f"{symbol}{num:,.2f}"


def format_percent(value: Any) -> str:
    num = _finite_number(value)
    if num is None:
        return PLACEHOLDER
    return f"{num:.2f}%"


def format_rank(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        return PLACEHOLDER
    return str(value)


def summarize(text: Optional[str], sentences: int = 2) -> Optional[str]:
    """First ``sentences`` sentences of a provider description."""
    if not text or not text.strip():
        return None
    summary = ". ".join(text.strip().split(". ")[:sentences]).rstrip()
    return summary if summary.endswith(".") else summary + "."
