import pandas as pd
import pytest

from fetchers.errors import StoreError
from trend_engine.briefs import BriefPhase, BriefState
from trendpulse import cli_entrypoints


@pytest.fixture(autouse=True)
def offline_env(monkeypatch):
    """Force the seed store and keep .env files out of the picture."""
    for name in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "TRENDPULSE_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("fetchers.trend_store.load_dotenv", lambda: None)


def test_report_prints_kpis_and_table(capsys) -> None:
    # Seed data is from 2024, so use a window wide enough to include it.
    exit_code = cli_entrypoints.report(["--days", "100000", "--sort-by", "trend", "--ascending"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Active trends:    3" in out
    assert "Eligible posts:   5" in out
    assert out.index("AI Code Generation") < out.index("AI Customer Support")


def test_report_writes_csv(tmp_path) -> None:
    csv_path = tmp_path / "out" / "trends.csv"

    assert cli_entrypoints.report(["--days", "100000", "--search-term", "codegen", "--csv", str(csv_path)]) == 0

    df = pd.read_csv(csv_path)
    assert list(df["trend_id"].astype(str)) == ["1"]


def test_report_with_narrow_window_has_no_trends(capsys) -> None:
    assert cli_entrypoints.report(["--days", "1"]) == 0
    assert "No trends match" in capsys.readouterr().out


def test_config_error_exit_code(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    assert cli_entrypoints.report([]) == cli_entrypoints.EXIT_CONFIG_ERROR


def test_sparkline_for_known_trend(capsys) -> None:
    assert cli_entrypoints.sparkline(["2", "--days", "7", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("AI Customer Support")
    assert "sparse data" in out


def test_sparkline_for_unknown_trend() -> None:
    assert cli_entrypoints.sparkline(["nope"]) == cli_entrypoints.EXIT_STORE_ERROR


def test_brief_status_reads_seeded_state(capsys) -> None:
    assert cli_entrypoints.brief_status(["1"]) == 0
    out = capsys.readouterr().out
    assert "Trend 1: Ready" in out
    assert "ai-code-generation-brief.pdf" in out


def test_brief_status_start_without_result(capsys) -> None:
    assert cli_entrypoints.brief_status(["3", "--start", "--attempts", "1"]) == 0
    assert "Trend 3: Generating" in capsys.readouterr().out


def test_poll_brief_stops_once_settled() -> None:
    states = iter(
        [
            BriefState(BriefPhase.GENERATING),
            BriefState(BriefPhase.GENERATING),
            BriefState(BriefPhase.READY, url="https://example.com/b.pdf"),
        ]
    )
    sleeps = []

    class FakePoller:
        def check(self, trend_id):
            return next(states)

    state = cli_entrypoints.poll_brief(FakePoller(), "t1", attempts=10, interval=2.5, sleep=sleeps.append)

    assert state.phase is BriefPhase.READY
    assert sleeps == [2.5, 2.5]


@pytest.mark.parametrize(
    "argv",
    [["--days", "-1"], ["--min-engagement", "-5"], ["--days", "soon"]],
)
def test_report_rejects_negative_filters(argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_entrypoints.report(argv)
    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err


@pytest.mark.parametrize("attempts", ["0", "-3"])
def test_brief_status_requires_at_least_one_attempt(attempts) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_entrypoints.brief_status(["1", "--attempts", attempts])
    assert excinfo.value.code == 2


def test_report_reads_the_clock_once(monkeypatch, now) -> None:
    calls = []

    def counting_clock():
        calls.append(1)
        return now

    monkeypatch.setattr(cli_entrypoints, "system_clock", counting_clock)

    assert cli_entrypoints.report(["--days", "100000"]) == 0
    assert len(calls) == 1


def test_report_lists_search_terms(capsys) -> None:
    assert cli_entrypoints.report(["--list-search-terms"]) == 0
    out = capsys.readouterr().out.split()
    assert "codegen" in out
    assert "Active" not in out


def test_sparkline_lists_top_posts(capsys) -> None:
    assert cli_entrypoints.sparkline(["1", "--days", "5000", "--seed", "1", "--top", "1"]) == 0
    out = capsys.readouterr().out
    assert "Top 1 posts" in out
    assert "The future of software development" in out
    assert "Just discovered GitHub Copilot" not in out


def test_brief_status_related_posts(capsys) -> None:
    assert cli_entrypoints.brief_status(["2", "--related", "--days", "100000"]) == 0
    assert "Related posts: 3" in capsys.readouterr().out


def test_posts_command_filters_and_sorts(capsys) -> None:
    assert cli_entrypoints.posts(["support", "--platform", "other", "--sort", "engagement"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("1 posts")
    assert "Our company just implemented AI customer support" in out


def test_posts_command_limit(capsys) -> None:
    assert cli_entrypoints.posts(["--sort", "date", "--limit", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2 posts"
    assert lines[1].startswith("2024-09-20")


def test_store_failure_maps_to_store_exit_code(monkeypatch, caplog) -> None:
    def broken_load(store):
        raise StoreError("Supabase returned 503 for posts")

    monkeypatch.setattr(cli_entrypoints, "load_dashboard_data", broken_load)

    assert cli_entrypoints.report([]) == cli_entrypoints.EXIT_STORE_ERROR
    assert "StoreError: Supabase returned 503 for posts" in caplog.text
