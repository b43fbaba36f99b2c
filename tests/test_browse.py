import pytest

from trend_engine.browse import Platform, PostSort, browse_posts
from trend_engine.models import Post


@pytest.fixture
def posts(make_post):
    twitter = make_post("tw", days_ago=1, score=50, search_term="ai code", text="Copilot writes my tests")
    linkedin = make_post("li", days_ago=3, score=500, search_term="codegen", text="Banking on AI Code review")
    linkedin = linkedin.model_copy(update={"twitter_url": "", "url": "https://linkedin.com/posts/x"})
    twitter = twitter.model_copy(update={"twitter_url": twitter.url})
    other = make_post("ot", days_ago=2, score=5, search_term="chatbot", text="support bots everywhere")
    return [twitter, linkedin, other]


def _ids(posts: list[Post]) -> list[str]:
    return [post.post_id for post in posts]


def test_default_is_everything_newest_first(posts) -> None:
    assert _ids(browse_posts(posts)) == ["tw", "ot", "li"]


def test_query_matches_text_or_search_term_case_insensitively(posts) -> None:
    assert _ids(browse_posts(posts, query="CODE")) == ["tw", "li"]
    assert _ids(browse_posts(posts, query="copilot")) == ["tw"]
    assert browse_posts(posts, query="nothing like this") == []


def test_platform_filter(posts) -> None:
    assert _ids(browse_posts(posts, platform=Platform.TWITTER)) == ["tw"]
    assert _ids(browse_posts(posts, platform="other")) == ["ot", "li"]


def test_sort_orders(posts) -> None:
    assert _ids(browse_posts(posts, sort=PostSort.ENGAGEMENT)) == ["li", "tw", "ot"]
    assert _ids(browse_posts(posts, sort="text")) == ["li", "tw", "ot"]


def test_unknown_sort_is_rejected(posts) -> None:
    with pytest.raises(ValueError):
        browse_posts(posts, sort="random")
