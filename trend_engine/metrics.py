"""Per-trend aggregation and dashboard KPI summary."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set

from .clock import Clock, fixed_clock, system_clock
from .growth import classify_trend, sort_by_time, split_engagement, week_over_week_growth
from .models import DashboardFilters, KPIData, Post, PostTrendLink, Trend, TrendMetrics, TrendStatus
from .scoring import date_window, engagement_score, filter_posts, total_engagement

logger = logging.getLogger(__name__)

TOP_POSTS_LIMIT = 5


def _post_ids_by_trend(links: Iterable[PostTrendLink]) -> Dict[str, Set[str]]:
    # A set per trend so duplicated links never count a post twice.
    index: Dict[str, Set[str]] = defaultdict(set)
    for link in links:
        index[link.trend_id].add(link.post_id)
    return index


def _empty_metrics(trend: Trend) -> TrendMetrics:
    return TrendMetrics(
        trend_id=trend.trend_id,
        trend=trend,
        posts=[],
        total_engagement=0,
        wow_growth_pct=0,
        status=TrendStatus.STABLE,
        first_seen=trend.created_at,
        last_seen=trend.created_at,
    )


def _trend_metrics(trend: Trend, trend_posts: List[Post], window_days: int) -> TrendMetrics:
    if not trend_posts:
        return _empty_metrics(trend)

    ordered = sort_by_time(trend_posts)
    growth = week_over_week_growth(ordered, window_days)
    prev_score, current_score = split_engagement(ordered)

    return TrendMetrics(
        trend_id=trend.trend_id,
        trend=trend,
        posts=ordered,
        total_engagement=total_engagement(ordered),
        wow_growth_pct=growth,
        status=classify_trend(current_score, prev_score, growth),
        first_seen=ordered[0].created_at,
        last_seen=ordered[-1].created_at,
    )


def aggregate_trend_metrics(
    trends: Sequence[Trend],
    posts: Sequence[Post],
    links: Iterable[PostTrendLink],
    filters: DashboardFilters,
    *,
    clock: Clock = system_clock,
) -> List[TrendMetrics]:
    """Return one :class:`TrendMetrics` per trend, in input order.

    Posts are filtered once; each trend then keeps the filtered posts linked
    to it. Trends without any matching post still get a zero-valued record.
    """
    eligible = filter_posts(posts, filters, clock=clock)
    post_ids = _post_ids_by_trend(links)

    metrics = []
    for trend in trends:
        linked = post_ids.get(trend.trend_id, set())
        trend_posts = [post for post in eligible if post.post_id in linked]
        metrics.append(_trend_metrics(trend, trend_posts, filters.date_preset))

    logger.debug("Aggregated %d trends over %d eligible posts", len(metrics), len(eligible))
    return metrics


def active_trend_metrics(metrics: Iterable[TrendMetrics]) -> List[TrendMetrics]:
    """Keep only records with at least one post."""
    return [metric for metric in metrics if metric.posts]


def available_search_terms(posts: Iterable[Post]) -> List[str]:
    """Return the sorted distinct search terms, used to populate the filter choices."""
    return sorted({post.search_term for post in posts if post.search_term})


def summarize_kpis(
    trends: Sequence[Trend],
    posts: Sequence[Post],
    links: Iterable[PostTrendLink],
    filters: DashboardFilters,
    *,
    clock: Clock = system_clock,
) -> KPIData:
    """Derive the dashboard summary counters. "Now" is read once for every step."""
    pinned = fixed_clock(clock())
    now = pinned()

    active = active_trend_metrics(aggregate_trend_metrics(trends, posts, links, filters, clock=pinned))
    eligible = filter_posts(posts, filters, now=now)
    window_start, _ = date_window(filters.date_preset, now)

    return KPIData(
        active_trends=len(active),
        eligible_posts=len(eligible),
        total_engagement=total_engagement(eligible),
        new_trends=sum(1 for metric in active if metric.first_seen >= window_start),
    )


def top_posts(metric: TrendMetrics, limit: int = TOP_POSTS_LIMIT) -> List[Post]:
    """Return the trend's highest-engagement posts, best first."""
    return sorted(metric.posts, key=engagement_score, reverse=True)[:limit]
