"""The store capability the dashboard reads from, and the composition root that builds one."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Protocol

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from trend_engine.models import Post, PostTrendLink, Trend, TrendLink

from .errors import StoreConfigError
from .seed_store import SeedStore
from .supabase_store import DEFAULT_TIMEOUT, SupabaseStore

logger = logging.getLogger(__name__)

URL_ENV = "SUPABASE_URL"
KEY_ENV = "SUPABASE_ANON_KEY"
TIMEOUT_ENV = "TRENDPULSE_HTTP_TIMEOUT"


class TrendStore(Protocol):
    """Read-only access to the entity collections."""

    def list_trends(self) -> List[Trend]: ...

    def list_posts(self) -> List[Post]: ...

    def list_post_trend_links(self) -> List[PostTrendLink]: ...

    def list_trend_links(self, trend_id: Optional[str] = None) -> List[TrendLink]: ...


class DashboardData(BaseModel):
    """Everything the dashboard needs for one refresh."""

    trends: List[Trend] = Field(default_factory=list)
    posts: List[Post] = Field(default_factory=list)
    post_trends: List[PostTrendLink] = Field(default_factory=list)
    trend_links: List[TrendLink] = Field(default_factory=list)


def load_dashboard_data(store: TrendStore) -> DashboardData:
    """Fetch all collections from *store*. Store errors propagate to the caller."""
    data = DashboardData(
        trends=store.list_trends(),
        posts=store.list_posts(),
        post_trends=store.list_post_trend_links(),
        trend_links=store.list_trend_links(),
    )
    logger.info(
        "Loaded %d trends, %d posts, %d post-trend links, %d brief links",
        len(data.trends),
        len(data.posts),
        len(data.post_trends),
        len(data.trend_links),
    )
    return data


@dataclass(frozen=True)
class StoreResult:
    store: Optional[TrendStore] = None
    error: Optional[StoreConfigError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_store(env: Optional[Mapping[str, str]] = None) -> StoreResult:
    """Pick a store backend from the environment.

    Both ``SUPABASE_URL`` and ``SUPABASE_ANON_KEY`` set gives a
    :class:`SupabaseStore`; neither set gives the offline :class:`SeedStore`.
    Anything in between is returned as an error, never raised.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    url = (env.get(URL_ENV) or "").strip()
    key = (env.get(KEY_ENV) or "").strip()

    if not url and not key:
        logger.warning("%s/%s not set, using local seed data", URL_ENV, KEY_ENV)
        return StoreResult(store=SeedStore())

    if not url or not key:
        missing = URL_ENV if not url else KEY_ENV
        return StoreResult(error=StoreConfigError(f"{missing} is required when the other Supabase setting is present"))

    raw_timeout = env.get(TIMEOUT_ENV)
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        return StoreResult(error=StoreConfigError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}"))
    if timeout <= 0:
        return StoreResult(error=StoreConfigError(f"{TIMEOUT_ENV} must be positive, got {raw_timeout!r}"))

    logger.info("Using Supabase store at %s", url)
    return StoreResult(store=SupabaseStore(url, key, timeout=timeout))
