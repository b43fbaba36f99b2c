from datetime import timedelta

import pytest

from fetchers.errors import StoreError
from trend_engine.briefs import (
    BriefPhase,
    BriefPoller,
    BriefTracker,
    find_related_posts,
    resolve_brief_url,
)
from trend_engine.errors import InvalidBriefTransition
from trend_engine.metrics import aggregate_trend_metrics
from trend_engine.models import DashboardFilters, TrendLink


def _trend_link(trend_id: str, url: str, created_at) -> TrendLink:
    return TrendLink(trend_id=trend_id, url=url, label="Brief", created_at=created_at)


def test_newest_trend_link_wins_over_stored_url(make_trend, now) -> None:
    trend = make_trend("t1", brief_url="https://example.com/stored.pdf")
    links = [
        _trend_link("t1", "https://example.com/v1.pdf", now - timedelta(days=2)),
        _trend_link("t1", "https://example.com/v2.pdf", now - timedelta(days=1)),
        _trend_link("other", "https://example.com/other.pdf", now),
    ]
    assert resolve_brief_url(trend, links) == "https://example.com/v2.pdf"


def test_stored_url_used_without_links(make_trend) -> None:
    assert resolve_brief_url(make_trend("t1", brief_url="https://example.com/b.pdf"), []) == "https://example.com/b.pdf"
    assert resolve_brief_url(make_trend("t2"), []) is None


def test_seed_sets_ready_or_idle(make_trend, now) -> None:
    tracker = BriefTracker()
    tracker.seed(
        [make_trend("with", label="With Brief"), make_trend("without", label="No Brief")],
        [_trend_link("with", "https://example.com/w.pdf", now)],
    )

    assert tracker.state("with").phase is BriefPhase.READY
    assert tracker.state("with").url == "https://example.com/w.pdf"
    assert tracker.state("without").phase is BriefPhase.IDLE
    assert tracker.state("unknown").phase is BriefPhase.IDLE


def test_seed_keeps_existing_state(make_trend, clock) -> None:
    tracker = BriefTracker(clock=clock)
    tracker.start("t1")
    tracker.seed([make_trend("t1", brief_url="https://example.com/old.pdf")])
    assert tracker.state("t1").phase is BriefPhase.GENERATING


def test_generation_lifecycle(clock, now) -> None:
    tracker = BriefTracker(clock=clock)

    state = tracker.start("t1")
    assert state.phase is BriefPhase.GENERATING
    assert state.started_at == now

    state = tracker.mark_ready("t1", "https://example.com/new.pdf")
    assert state.phase is BriefPhase.READY
    assert state.url == "https://example.com/new.pdf"

    assert tracker.start("t1").url is None


def test_invalid_transitions_raise(clock) -> None:
    tracker = BriefTracker(clock=clock)
    with pytest.raises(InvalidBriefTransition):
        tracker.mark_ready("t1", "https://example.com/x.pdf")
    with pytest.raises(InvalidBriefTransition):
        tracker.mark_failed("t1", "boom")

    tracker.start("t1")
    with pytest.raises(InvalidBriefTransition):
        tracker.start("t1")
    with pytest.raises(InvalidBriefTransition):
        tracker.mark_ready("t1", "")


def test_poller_moves_to_ready_when_new_link_appears(clock, now) -> None:
    tracker = BriefTracker(clock=clock)
    tracker.start("t1")
    links = []
    poller = BriefPoller(tracker, lambda trend_id: links)

    assert poller.check("t1").phase is BriefPhase.GENERATING

    links.append(_trend_link("t1", "https://example.com/fresh.pdf", now + timedelta(minutes=1)))
    state = poller.check("t1")

    assert state.phase is BriefPhase.READY
    assert state.url == "https://example.com/fresh.pdf"


def test_poller_ignores_links_from_previous_generation(clock, now) -> None:
    tracker = BriefTracker(clock=clock)
    tracker.start("t1")
    stale = [_trend_link("t1", "https://example.com/stale.pdf", now - timedelta(days=1))]

    assert BriefPoller(tracker, lambda trend_id: stale).check("t1").phase is BriefPhase.GENERATING


def test_poller_marks_failure_on_store_error(clock) -> None:
    tracker = BriefTracker(clock=clock)
    tracker.start("t1")

    def broken(trend_id):
        raise StoreError("timeout")

    state = BriefPoller(tracker, broken).check("t1")

    assert state.phase is BriefPhase.FAILED
    assert state.error == "timeout"


def test_poller_does_nothing_when_not_generating() -> None:
    def unexpected(trend_id):
        raise AssertionError("should not poll")

    assert BriefPoller(BriefTracker(), unexpected).check("t1").phase is BriefPhase.IDLE


def test_find_related_posts(make_post, make_trend, link, clock) -> None:
    trend = make_trend("t1", label="Customer Support", alt_names=["helpdesk bot"])
    direct = make_post("direct", days_ago=1, score=5, text="customer support with AI")
    (metric,) = aggregate_trend_metrics([trend], [direct], [link("direct")], DashboardFilters(), clock=clock)

    candidates = [
        direct,
        make_post("label", text="Great CUSTOMER SUPPORT today"),
        make_post("alt", text="our helpdesk bot rocks"),
        make_post("slug", text="support tickets piling up"),
        make_post("none", text="unrelated cooking video"),
    ]

    related = find_related_posts(metric, candidates)
    assert [post.post_id for post in related] == ["label", "alt", "slug"]
    assert len(find_related_posts(metric, candidates, limit=1)) == 1
