"""In-memory store backed by the bundled seed rows, for offline use and demos."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from trend_engine.models import Post, PostTrendLink, Trend, TrendLink, parse_rows

from . import seed_data


class SeedStore:
    """Deterministic local substitute for the remote store.

    *data* may override any of ``trends``, ``posts``, ``post_trends`` and
    ``trend_links`` with raw rows; missing keys fall back to the seed fixtures.
    """

    def __init__(self, data: Optional[Mapping[str, Sequence[Dict[str, Any]]]] = None) -> None:
        data = data or {}
        self._trends = parse_rows(Trend, data.get("trends", seed_data.TRENDS))
        self._posts = parse_rows(Post, data.get("posts", seed_data.POSTS))
        self._post_trends = parse_rows(PostTrendLink, data.get("post_trends", seed_data.POST_TRENDS))
        self._trend_links = parse_rows(TrendLink, data.get("trend_links", seed_data.TREND_LINKS))

    def list_trends(self) -> List[Trend]:
        return [trend for trend in self._trends if trend.is_active]

    def list_posts(self) -> List[Post]:
        return list(self._posts)

    def list_post_trend_links(self) -> List[PostTrendLink]:
        return list(self._post_trends)

    def list_trend_links(self, trend_id: Optional[str] = None) -> List[TrendLink]:
        if trend_id is None:
            return list(self._trend_links)
        return [link for link in self._trend_links if link.trend_id == trend_id]
