#!/usr/bin/env python3
"""Console-script entry points.

After an editable install (``pip install -e .``) the following commands become
available:

* ``trendpulse-report``        – KPI summary plus the per-trend metrics table
* ``trendpulse-sparkline``     – daily engagement series for one trend
* ``trendpulse-brief-status``  – show or poll a trend's marketing-brief state
* ``trendpulse-posts``         – search, filter and sort the raw posts

Data comes from Supabase when ``SUPABASE_URL``/``SUPABASE_ANON_KEY`` are set
(``.env`` is honoured) and from the bundled seed rows otherwise.
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional

from fetchers import build_store, load_dashboard_data
from fetchers.trend_store import DashboardData, TrendStore
from trend_engine.briefs import BriefPhase, BriefPoller, BriefState, BriefTracker, find_related_posts
from trend_engine.browse import Platform, PostSort, browse_posts
from trend_engine.clock import fixed_clock, system_clock
from trend_engine.errors import TrendPulseError
from trend_engine.metrics import (
    active_trend_metrics,
    aggregate_trend_metrics,
    available_search_terms,
    summarize_kpis,
    top_posts,
)
from trend_engine.models import DashboardFilters, Post
from trend_engine.scoring import engagement_score
from trend_engine.sparkline import generate_series

from .reports import SORT_KEYS, display_frame, format_number, metrics_frame, sort_metrics_frame

LOGGER = logging.getLogger(__name__)

EXIT_STORE_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def _print_posts(posts: List[Post]) -> None:
    for post in posts:
        text = post.text if len(post.text) <= 70 else post.text[:67] + "..."
        print(f"{post.created_at.date().isoformat()}  {format_number(engagement_score(post)):>8}  {text}")


def _open_store() -> Optional[TrendStore]:
    result = build_store()
    if not result.ok:
        LOGGER.error("Store configuration error: %s", result.error)
        return None
    return result.store


def _filters_from_args(args: argparse.Namespace) -> DashboardFilters:
    return DashboardFilters(
        search_terms=frozenset(args.search_terms or []),
        date_preset=args.days,
        min_engagement=args.min_engagement,
    )


def _run(handler: Callable[[argparse.Namespace, TrendStore], int], args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    store = _open_store()
    if store is None:
        return EXIT_CONFIG_ERROR
    try:
        return handler(args, store)
    except TrendPulseError as exc:
        LOGGER.error("%s: %s", type(exc).__name__, exc)
        return EXIT_STORE_ERROR


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--days", type=_non_negative_int, default=7, help="Date window in days, ending now (default: 7)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


# ---------------------------------------------------------------------------
# trendpulse-report
# ---------------------------------------------------------------------------

def _report(args: argparse.Namespace, store: TrendStore) -> int:
    data: DashboardData = load_dashboard_data(store)
    filters = _filters_from_args(args)

    if args.list_search_terms:
        print("\n".join(available_search_terms(data.posts)))
        return 0

    # One "now" for the table and the KPI block.
    clock = fixed_clock(system_clock())
    metrics = aggregate_trend_metrics(data.trends, data.posts, data.post_trends, filters, clock=clock)
    if not args.include_inactive:
        metrics = active_trend_metrics(metrics)
    kpis = summarize_kpis(data.trends, data.posts, data.post_trends, filters, clock=clock)

    print(f"Active trends:    {kpis.active_trends}")
    print(f"Eligible posts:   {kpis.eligible_posts}")
    print(f"Total engagement: {format_number(kpis.total_engagement)}")
    print(f"New trends:       {kpis.new_trends}")
    print()

    table = sort_metrics_frame(metrics_frame(metrics), by=args.sort_by, ascending=args.ascending)
    if table.empty:
        print("No trends match the current filters.")
    else:
        print(display_frame(table).to_string(index=False))

    if args.csv:
        csv_path = Path(args.csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(csv_path, index=False)
        LOGGER.info("Saved trend metrics to %s", csv_path)
    return 0


def report(argv: Optional[List[str]] = None) -> int:
    """Print dashboard KPIs and the trend metrics table."""
    parser = _base_parser("Trend metrics report")
    parser.add_argument("--min-engagement", type=_non_negative_float, default=0, help="Minimum engagement score per post")
    parser.add_argument(
        "--search-term",
        dest="search_terms",
        action="append",
        help="Only count posts surfaced by this search term (repeatable)",
    )
    parser.add_argument("--sort-by", choices=sorted(SORT_KEYS), default="posts")
    parser.add_argument("--ascending", action="store_true", help="Sort ascending instead of descending")
    parser.add_argument("--include-inactive", action="store_true", help="Keep trends without matching posts")
    parser.add_argument("--csv", help="Also write the table to this CSV file")
    parser.add_argument("--list-search-terms", action="store_true", help="Print the search terms present in the data and exit")
    return _run(_report, parser.parse_args(argv))


# ---------------------------------------------------------------------------
# trendpulse-sparkline
# ---------------------------------------------------------------------------

def _sparkline(args: argparse.Namespace, store: TrendStore) -> int:
    data = load_dashboard_data(store)
    filters = DashboardFilters(date_preset=args.days)
    metrics = aggregate_trend_metrics(data.trends, data.posts, data.post_trends, filters)

    metric = next((m for m in metrics if m.trend_id == args.trend_id), None)
    if metric is None:
        LOGGER.error("Unknown or inactive trend %s", args.trend_id)
        return EXIT_STORE_ERROR

    rng = random.Random(args.seed) if args.seed is not None else None
    series = generate_series(metric.posts, args.days, rng=rng)

    print(f"{metric.trend.label} ({metric.status.value})")
    for point in series:
        marker = " *" if point.synthetic else ""
        print(f"{point.date.isoformat()}  {format_number(point.engagement):>8}{marker}")
    if any(point.synthetic for point in series):
        print("* sparse data: synthesized values")

    best = top_posts(metric, args.top)
    if best:
        print()
        print(f"Top {len(best)} posts")
        _print_posts(best)
    return 0


def sparkline(argv: Optional[List[str]] = None) -> int:
    """Print the daily engagement series for one trend."""
    parser = _base_parser("Trend engagement sparkline")
    parser.add_argument("trend_id")
    parser.add_argument("--seed", type=int, help="Seed for the sparse-data fallback")
    parser.add_argument("--top", type=_non_negative_int, default=5, help="Also list this many top posts (default: 5)")
    return _run(_sparkline, parser.parse_args(argv))


# ---------------------------------------------------------------------------
# trendpulse-brief-status
# ---------------------------------------------------------------------------

def poll_brief(
    poller: BriefPoller,
    trend_id: str,
    attempts: int,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
) -> BriefState:
    """Check a generating brief up to *attempts* times, *interval* seconds apart."""
    state = poller.check(trend_id)
    for _ in range(attempts - 1):
        if state.phase is not BriefPhase.GENERATING:
            break
        sleep(interval)
        state = poller.check(trend_id)
    return state


def _brief_status(args: argparse.Namespace, store: TrendStore) -> int:
    tracker = BriefTracker()
    tracker.seed(store.list_trends(), store.list_trend_links())
    if args.start:
        tracker.start(args.trend_id)

    poller = BriefPoller(tracker, lambda trend_id: store.list_trend_links(trend_id))
    state = poll_brief(poller, args.trend_id, args.attempts, args.interval)

    print(f"Trend {args.trend_id}: {state.phase.value}")
    if state.url:
        print(f"Brief: {state.url}")
    if state.error:
        print(f"Error: {state.error}")

    if args.related:
        data = load_dashboard_data(store)
        metrics = aggregate_trend_metrics(data.trends, data.posts, data.post_trends, DashboardFilters(date_preset=args.days))
        metric = next((m for m in metrics if m.trend_id == args.trend_id), None)
        related = find_related_posts(metric, data.posts) if metric is not None else []
        print(f"Related posts: {len(related)}")
        _print_posts(related)
    return EXIT_STORE_ERROR if state.phase is BriefPhase.FAILED else 0


def brief_status(argv: Optional[List[str]] = None) -> int:
    """Show a trend's brief state, optionally waiting for a new brief to land."""
    parser = argparse.ArgumentParser(description="Marketing brief status")
    parser.add_argument("trend_id")
    parser.add_argument("--start", action="store_true", help="Treat a new brief as requested and wait for it")
    parser.add_argument("--attempts", type=_positive_int, default=20, help="Maximum status checks (default: 20)")
    parser.add_argument("--interval", type=_non_negative_float, default=3.0, help="Seconds between checks (default: 3)")
    parser.add_argument("--related", action="store_true", help="Also list posts that mention the trend but are not linked to it")
    parser.add_argument("--days", type=_non_negative_int, default=7, help="Window for the linked posts excluded from --related (default: 7)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return _run(_brief_status, parser.parse_args(argv))


# ---------------------------------------------------------------------------
# trendpulse-posts
# ---------------------------------------------------------------------------

def _posts(args: argparse.Namespace, store: TrendStore) -> int:
    posts = browse_posts(store.list_posts(), query=args.query, platform=args.platform, sort=args.sort)
    if args.limit:
        posts = posts[: args.limit]
    print(f"{len(posts)} posts")
    _print_posts(posts)
    return 0


def posts(argv: Optional[List[str]] = None) -> int:
    """Search, filter and sort the raw posts."""
    parser = argparse.ArgumentParser(description="Browse posts")
    parser.add_argument("query", nargs="?", help="Case-insensitive match on post text or search term")
    parser.add_argument("--platform", choices=[p.value for p in Platform], default=Platform.ALL.value)
    parser.add_argument("--sort", choices=[s.value for s in PostSort], default=PostSort.DATE.value)
    parser.add_argument("--limit", type=_non_negative_int, default=0, help="Show at most this many posts (0: all)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return _run(_posts, parser.parse_args(argv))


if __name__ == "__main__":
    sys.exit(report())
