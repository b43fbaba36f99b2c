"""Marketing-brief tracking.

A brief is generated outside TrendPulse. Once the external workflow is done a
:class:`~trend_engine.models.TrendLink` row appears for the trend; the
:class:`BriefPoller` turns that notification into a state change on the
:class:`BriefTracker`.

States::

    Idle -> Generating -> Ready(url)
                       -> Failed(error)

``start`` may restart from Idle, Ready or Failed (regeneration).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .clock import Clock, system_clock
from .errors import InvalidBriefTransition, TrendPulseError
from .models import Post, Trend, TrendLink, TrendMetrics

logger = logging.getLogger(__name__)

RELATED_POSTS_LIMIT = 20


def latest_trend_link(trend_id: str, trend_links: Iterable[TrendLink]) -> Optional[TrendLink]:
    candidates = [link for link in trend_links if link.trend_id == trend_id and link.url]
    return max(candidates, key=lambda link: link.created_at, default=None)


def resolve_brief_url(trend: Trend, trend_links: Iterable[TrendLink]) -> Optional[str]:
    """Return the newest linked brief url, falling back to ``trend.brief_url``."""
    link = latest_trend_link(trend.trend_id, trend_links)
    if link is not None:
        return link.url
    return trend.brief_url or None


class BriefPhase(str, Enum):
    IDLE = "Idle"
    GENERATING = "Generating"
    READY = "Ready"
    FAILED = "Failed"


@dataclass(frozen=True)
class BriefState:
    phase: BriefPhase = BriefPhase.IDLE
    url: Optional[str] = None
    error: Optional[str] = None
    started_at: Optional[datetime] = None


class BriefTracker:
    """Per-trend brief state machine."""

    def __init__(self, clock: Clock = system_clock) -> None:
        self._clock = clock
        self._states: Dict[str, BriefState] = {}

    def seed(self, trends: Iterable[Trend], trend_links: Sequence[TrendLink] = ()) -> None:
        """Initialize states from stored data without touching trends already tracked."""
        for trend in trends:
            if trend.trend_id in self._states:
                continue
            url = resolve_brief_url(trend, trend_links)
            self._states[trend.trend_id] = BriefState(BriefPhase.READY, url=url) if url else BriefState()

    def state(self, trend_id: str) -> BriefState:
        return self._states.get(trend_id, BriefState())

    def start(self, trend_id: str) -> BriefState:
        current = self.state(trend_id)
        if current.phase is BriefPhase.GENERATING:
            raise InvalidBriefTransition(f"Brief for trend {trend_id} is already generating")
        return self._set(trend_id, BriefState(BriefPhase.GENERATING, started_at=self._clock()))

    def mark_ready(self, trend_id: str, url: str) -> BriefState:
        self._require_generating(trend_id, BriefPhase.READY)
        if not url:
            raise InvalidBriefTransition(f"Brief for trend {trend_id} cannot be ready without a url")
        return self._set(trend_id, BriefState(BriefPhase.READY, url=url))

    def mark_failed(self, trend_id: str, error: str) -> BriefState:
        self._require_generating(trend_id, BriefPhase.FAILED)
        return self._set(trend_id, BriefState(BriefPhase.FAILED, error=error))

    def _require_generating(self, trend_id: str, target: BriefPhase) -> None:
        current = self.state(trend_id).phase
        if current is not BriefPhase.GENERATING:
            raise InvalidBriefTransition(f"Cannot move brief for trend {trend_id} from {current.value} to {target.value}")

    def _set(self, trend_id: str, state: BriefState) -> BriefState:
        logger.info("Brief for trend %s -> %s", trend_id, state.phase.value)
        self._states[trend_id] = state
        return state


class BriefPoller:
    """Runs single completion checks for generating briefs.

    *fetch_links* is the notification capability: given a trend id it returns
    that trend's :class:`TrendLink` rows (typically ``store.list_trend_links``).
    Scheduling repeated checks is left to the caller.
    """

    def __init__(self, tracker: BriefTracker, fetch_links: Callable[[str], Sequence[TrendLink]]) -> None:
        self.tracker = tracker
        self.fetch_links = fetch_links

    def check(self, trend_id: str) -> BriefState:
        state = self.tracker.state(trend_id)
        if state.phase is not BriefPhase.GENERATING:
            return state

        try:
            links = self.fetch_links(trend_id)
        except TrendPulseError as exc:
            logger.error("Brief status check for trend %s failed: %s", trend_id, exc)
            return self.tracker.mark_failed(trend_id, str(exc))

        link = latest_trend_link(trend_id, links)
        # Links older than this generation belong to a previous brief.
        if link is None or (state.started_at is not None and link.created_at < state.started_at):
            return state
        return self.tracker.mark_ready(trend_id, link.url)


def _trend_keywords(trend: Trend) -> List[str]:
    keywords = [trend.label.lower(), *trend.slug.lower().split("-"), *(name.lower() for name in trend.alt_names)]
    return [keyword for keyword in keywords if keyword]


def find_related_posts(
    metric: TrendMetrics,
    all_posts: Iterable[Post],
    limit: int = RELATED_POSTS_LIMIT,
) -> List[Post]:
    """Return posts outside the trend that mention its label, slug words or alt names."""
    direct_ids = {post.post_id for post in metric.posts}
    keywords = _trend_keywords(metric.trend)

    related: List[Post] = []
    for post in all_posts:
        if len(related) >= limit:
            break
        if post.post_id in direct_ids:
            continue
        text = post.text.lower()
        if any(keyword in text for keyword in keywords):
            related.append(post)
    return related
