from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from trend_engine.clock import fixed_clock
from trend_engine.models import Post, PostTrendLink, Trend

NOW = datetime(2024, 9, 21, 12, 0, tzinfo=timezone.utc)


def _make_post(
    post_id: str = "p1",
    *,
    days_ago: float = 0,
    score: float = 0,
    likes: int = 0,
    retweets: int = 0,
    replies: int = 0,
    bookmarks: int = 0,
    search_term: str = "ai code",
    text: str = "",
) -> Post:
    return Post(
        post_id=post_id,
        url=f"https://twitter.com/u/status/{post_id}",
        text=text,
        created_at=NOW - timedelta(days=days_ago),
        search_term=search_term,
        like_count=likes,
        retweet_count=retweets,
        reply_count=replies,
        bookmark_count=bookmarks,
        engagement_score=score,
    )


def _make_trend(trend_id: str = "t1", *, label: str = "AI Code Generation", created_days_ago: float = 30, **extra) -> Trend:
    slug = label.lower().replace(" ", "-")
    return Trend(
        trend_id=trend_id,
        slug=slug,
        label=label,
        created_at=NOW - timedelta(days=created_days_ago),
        **extra,
    )


def _link(post_id: str, trend_id: str = "t1") -> PostTrendLink:
    return PostTrendLink(post_id=post_id, trend_id=trend_id, method="keyword_match", confidence=0.9)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def make_post():
    return _make_post


@pytest.fixture
def make_trend():
    return _make_trend


@pytest.fixture
def link():
    return _link
