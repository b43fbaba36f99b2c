"""Tabular views of trend metrics for terminal output and CSV export."""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from trend_engine.models import TrendMetrics

COLUMNS = ["trend_id", "label", "posts", "total_engagement", "wow_growth_pct", "status", "first_seen", "last_seen"]

# Dashboard sort keys -> frame column
SORT_KEYS = {
    "trend": "label",
    "posts": "posts",
    "total_engagement": "total_engagement",
    "wow_growth_pct": "wow_growth_pct",
    "status": "status",
    "first_seen": "first_seen",
    "last_seen": "last_seen",
}


def metrics_frame(metrics: Sequence[TrendMetrics]) -> pd.DataFrame:
    """Return one row per trend metric, in the given order."""
    rows = [
        {
            "trend_id": metric.trend_id,
            "label": metric.trend.label,
            "posts": metric.post_count,
            "total_engagement": metric.total_engagement,
            "wow_growth_pct": metric.wow_growth_pct,
            "status": metric.status.value,
            "first_seen": metric.first_seen,
            "last_seen": metric.last_seen,
        }
        for metric in metrics
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def sort_metrics_frame(df: pd.DataFrame, by: str = "posts", ascending: bool = False) -> pd.DataFrame:
    """Sort *df* by a dashboard sort key (``trend`` sorts by label, ``posts`` by count)."""
    if by not in SORT_KEYS:
        raise ValueError(f"Unknown sort key {by!r}; expected one of {', '.join(SORT_KEYS)}")
    return df.sort_values(by=SORT_KEYS[by], ascending=ascending, kind="mergesort").reset_index(drop=True)


def format_number(num: float) -> str:
    """Compact count: ``1.2M``, ``3.4K`` or the plain number."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1000:
        return f"{num / 1000:.1f}K"
    return f"{num:g}"


def format_percentage(pct: float) -> str:
    """Signed percentage with one decimal, e.g. ``+150.0%``."""
    sign = "+" if pct >= 0 else ""
    return f"{sign}{pct * 100:.1f}%"


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of *df* with human-readable numbers and dates."""
    shown = df.copy()
    shown["total_engagement"] = shown["total_engagement"].map(format_number)
    shown["wow_growth_pct"] = shown["wow_growth_pct"].map(format_percentage)
    for column in ("first_seen", "last_seen"):
        shown[column] = shown[column].map(lambda value: value.date().isoformat())
    return shown
