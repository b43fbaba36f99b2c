"""Engagement scoring and dashboard filtering."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from .clock import Clock, system_clock
from .models import DashboardFilters, Post

logger = logging.getLogger(__name__)

# Amplification counts most, likes are the cheapest signal.
LIKE_WEIGHT = 1.0
RETWEET_WEIGHT = 3.0
REPLY_WEIGHT = 2.0
BOOKMARK_WEIGHT = 2.5


def engagement_score(post: Post) -> float:
    """Return the precomputed score when positive, otherwise the weighted sum of counts."""
    if post.engagement_score > 0:
        return post.engagement_score

    return (
        (post.like_count or 0) * LIKE_WEIGHT
        + (post.retweet_count or 0) * RETWEET_WEIGHT
        + (post.reply_count or 0) * REPLY_WEIGHT
        + (post.bookmark_count or 0) * BOOKMARK_WEIGHT
    )


def total_engagement(posts: Iterable[Post]) -> float:
    return sum(engagement_score(post) for post in posts)


def date_window(date_preset: int, now: datetime) -> Tuple[datetime, datetime]:
    """Return the inclusive ``(start, end)`` window ending at *now*."""
    return now - timedelta(days=date_preset), now


def filter_posts(
    posts: Iterable[Post],
    filters: DashboardFilters,
    *,
    clock: Clock = system_clock,
    now: Optional[datetime] = None,
) -> List[Post]:
    """Return posts inside the date window, above the engagement floor and matching a search term.

    Parameters
    ----------
    posts:
        Candidate posts; never mutated.
    filters:
        Dashboard filter configuration.
    clock:
        Read once per call when *now* is not given.
    now:
        Pinned instant, used by callers that share one "now" across several steps.
    """
    if now is None:
        now = clock()
    start, end = date_window(filters.date_preset, now)

    eligible = [
        post
        for post in posts
        if start <= post.created_at <= end
        and engagement_score(post) >= filters.min_engagement
        and (not filters.search_terms or post.search_term in filters.search_terms)
    ]
    logger.debug("Filter kept %d posts in [%s, %s]", len(eligible), start.isoformat(), end.isoformat())
    return eligible
