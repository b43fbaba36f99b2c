"""TrendPulse metrics engine.

Pure functions that turn posts, trends and post-trend links plus a
:class:`~trend_engine.models.DashboardFilters` into per-trend metrics, KPI
counters and sparkline series for the marketing dashboard.
"""

from .browse import Platform, PostSort, browse_posts
from .growth import classify_trend, week_over_week_growth
from .metrics import aggregate_trend_metrics, summarize_kpis, top_posts
from .models import DashboardFilters, KPIData, Post, PostTrendLink, Trend, TrendLink, TrendMetrics, TrendStatus
from .scoring import engagement_score, filter_posts
from .sparkline import generate_series

__all__ = [
    "DashboardFilters",
    "KPIData",
    "Platform",
    "Post",
    "PostSort",
    "PostTrendLink",
    "Trend",
    "TrendLink",
    "TrendMetrics",
    "TrendStatus",
    "aggregate_trend_metrics",
    "browse_posts",
    "classify_trend",
    "engagement_score",
    "filter_posts",
    "generate_series",
    "summarize_kpis",
    "top_posts",
    "week_over_week_growth",
]

__version__ = "0.1.0"
