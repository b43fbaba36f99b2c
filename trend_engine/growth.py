"""Week-over-week growth and trend status classification."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

from .models import Post, TrendStatus
from .scoring import engagement_score

logger = logging.getLogger(__name__)

MIN_SPAN_DAYS = 7
GROWTH_FLOOR = -0.9
GROWTH_CEILING = 5.0

EMERGING_MIN_CURRENT = 5000
EMERGING_MIN_GROWTH = 0.30
EMERGING_MAX_PREVIOUS = 10000
DECLINING_MIN_PREVIOUS = 3000
DECLINING_MAX_GROWTH = -0.20
BREAKOUT_MIN_CURRENT = 2000
BREAKOUT_MIN_GROWTH = 0.50

_SECONDS_PER_DAY = 86400


def sort_by_time(posts: Sequence[Post]) -> List[Post]:
    """Return a new list ordered oldest first (stable)."""
    return sorted(posts, key=lambda post: post.created_at)


def split_engagement(posts: Sequence[Post]) -> Tuple[float, float]:
    """Split *posts* at the midpoint of their time span and sum each half's score.

    Posts at exactly the midpoint belong to the first half. Returns
    ``(first_half, second_half)``; both are ``0`` for an empty input.
    """
    if not posts:
        return 0.0, 0.0

    ordered = sort_by_time(posts)
    earliest = ordered[0].created_at
    latest = ordered[-1].created_at
    midpoint = earliest + (latest - earliest) / 2

    first_half = sum(engagement_score(p) for p in ordered if p.created_at <= midpoint)
    second_half = sum(engagement_score(p) for p in ordered if p.created_at > midpoint)
    return first_half, second_half


def week_over_week_growth(posts: Sequence[Post], window_days: int) -> float:
    """Return fractional growth between the two halves of the posts' time span.

    ``0.3`` means +30%. Spans shorter than :data:`MIN_SPAN_DAYS` give ``0``
    whatever *window_days* is; the ratio is clamped to
    ``[GROWTH_FLOOR, GROWTH_CEILING]``.
    """
    if not posts:
        return 0.0

    ordered = sort_by_time(posts)
    span = ordered[-1].created_at - ordered[0].created_at
    span_days = math.ceil(span.total_seconds() / _SECONDS_PER_DAY)
    if span_days < MIN_SPAN_DAYS:
        logger.debug("Span of %d days is too short for WoW (window %d days)", span_days, window_days)
        return 0.0

    first_half, second_half = split_engagement(ordered)
    if first_half == 0:
        return 1.0 if second_half > 0 else 0.0

    growth = (second_half - first_half) / first_half
    return max(GROWTH_FLOOR, min(GROWTH_CEILING, growth))


def classify_trend(current_score: float, prev_score: float, growth_pct: float) -> TrendStatus:
    """Map current/previous engagement and growth to a status. First matching rule wins."""
    if (
        current_score >= EMERGING_MIN_CURRENT
        and growth_pct >= EMERGING_MIN_GROWTH
        and prev_score < EMERGING_MAX_PREVIOUS
    ):
        return TrendStatus.EMERGING

    if prev_score >= DECLINING_MIN_PREVIOUS and growth_pct <= DECLINING_MAX_GROWTH:
        return TrendStatus.DECLINING

    if current_score >= BREAKOUT_MIN_CURRENT and growth_pct >= BREAKOUT_MIN_GROWTH:
        return TrendStatus.EMERGING

    return TrendStatus.STABLE
