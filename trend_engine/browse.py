"""Post browser: free-text search, platform filter and ordering."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from .models import Post
from .scoring import engagement_score


class Platform(str, Enum):
    ALL = "all"
    TWITTER = "twitter"
    # Everything without a twitter_url (LinkedIn and the rest)
    OTHER = "other"


class PostSort(str, Enum):
    DATE = "date"
    ENGAGEMENT = "engagement"
    TEXT = "text"


def _matches_platform(post: Post, platform: Platform) -> bool:
    if platform is Platform.TWITTER:
        return post.is_twitter
    if platform is Platform.OTHER:
        return not post.is_twitter
    return True


def browse_posts(
    posts: Iterable[Post],
    query: Optional[str] = None,
    platform: Platform = Platform.ALL,
    sort: PostSort = PostSort.DATE,
) -> List[Post]:
    """Return posts matching *query* and *platform*, ordered by *sort*.

    The query is a case-insensitive substring match on the post text or its
    search term. ``date`` and ``engagement`` sort newest/highest first,
    ``text`` sorts alphabetically.
    """
    platform = Platform(platform)
    sort = PostSort(sort)
    needle = (query or "").lower()

    matched = [
        post
        for post in posts
        if _matches_platform(post, platform)
        and (not needle or needle in post.text.lower() or needle in post.search_term.lower())
    ]

    if sort is PostSort.DATE:
        return sorted(matched, key=lambda post: post.created_at, reverse=True)
    if sort is PostSort.ENGAGEMENT:
        return sorted(matched, key=engagement_score, reverse=True)
    return sorted(matched, key=lambda post: post.text.casefold())
