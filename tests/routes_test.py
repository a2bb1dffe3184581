"""HTTP adapter, exercised through Flask's test client with injected collaborators."""
import pytest
from lxml import etree

from statcard.config import CacheConfig
from statcard.errors import (
    GraphQLError,
    MissingToken,
    NetworkError,
    RateLimitExceeded,
    RateLimitProtection,
    UserNotFound,
)
from statcard.github.cache import GitHubCache
from statcard.github.ratelimit import RateLimitGovernor
from statcard.github.types import GitHubStats
from statcard.languages import LanguageStat
from statcard.web import create_app

NS = {"svg": "http://www.w3.org/2000/svg"}
ALL_HIDDEN_BUT_ONE = (
    "stars_count,commits_ytd_count,issues_count,pull_requests_count,"
    "merge_requests_count,reviews_count,started_discussions_count"
)


class FakeApi:
    def __init__(self, error=None):
        self.error = error
        self.stats_calls = []
        self.langs_calls = []

    def fetch_user_stats(self, username):
        self.stats_calls.append(username)
        if self.error:
            raise self.error
        return GitHubStats(
            login=username,
            total_stars=1234,
            total_commits_ytd=567,
            total_issues=89,
            total_prs=123,
            total_merged_prs=45,
            total_reviews=67,
            total_discussions_started=12,
            total_discussions_answered=34,
        )

    def fetch_user_languages(self, username, excluded_repos=()):
        self.langs_calls.append((username, list(excluded_repos)))
        if self.error:
            raise self.error
        return [
            LanguageStat("Rust", 45000, 15),
            LanguageStat("TypeScript", 35000, 12),
            LanguageStat("Go", 10000, 4),
        ]


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def governor():
    return RateLimitGovernor(clock=lambda: 1000)


@pytest.fixture
def client(api, governor):
    app = create_app(api=api, cache=GitHubCache(CacheConfig()), governor=governor)
    return app.test_client()


def svg_root(resp):
    assert resp.status_code == 200
    assert resp.mimetype == "image/svg+xml"
    return etree.fromstring(resp.data)


# ------------------ Stats card ------------------
def test_stats_card_hides_rows(client):
    resp = client.get("/api/stats-card?username=alice&hide=stars_count,pull_requests_count")
    svg_root(resp)
    body = resp.get_data(as_text=True)
    assert "Issues:" in body
    assert "Stars:" not in body
    assert "Pull Requests:" not in body
    assert resp.headers["Cache-Control"] == "public, max-age=900"


def test_stats_card_title(client):
    root = svg_root(client.get("/api/stats-card?username=alice"))
    assert root.find("svg:title", NS).text == "@alice: GitHub Stats"
    assert root.find(".//svg:text[@class='title']", NS).text == "@alice: GitHub Stats"


def test_stats_card_too_many_hidden(client, api):
    resp = client.get(f"/api/stats-card?username=alice&hide={ALL_HIDDEN_BUT_ONE}")
    assert resp.status_code == 400
    assert "at least 2 must remain" in resp.get_json()["error"]
    assert resp.headers["Cache-Control"] == "no-store"
    assert api.stats_calls == []


def test_stats_card_invalid_hide_token(client):
    resp = client.get("/api/stats-card?username=alice&hide=stars_count,nope")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "invalid hide value: nope"}


@pytest.mark.parametrize("query,message", [
    ("", "Username cannot be empty"),
    ("?username=", "Username cannot be empty"),
    ("?username=a%20b", "Username cannot contain spaces"),
    ("?username=-alice", "Username cannot start or end with hyphen"),
])
def test_invalid_username(client, api, query, message):
    resp = client.get(f"/api/stats-card{query}")
    assert resp.status_code == 400
    assert message in resp.get_json()["error"]
    assert api.stats_calls == []


def test_username_checked_before_theme(client):
    resp = client.get("/api/stats-card?username=a%20b&theme=nope")
    assert "spaces" in resp.get_json()["error"]


def test_unknown_theme(client):
    resp = client.get("/api/stats-card?username=alice&theme=nope")
    assert resp.status_code == 400
    error = resp.get_json()["error"]
    assert error.startswith("unknown theme 'nope'")
    assert "transparent_blue" in error


def test_theme_selected(client):
    root = svg_root(client.get("/api/stats-card?username=alice&theme=dracula"))
    assert "#282a36" in root.find("svg:style", NS).text.lower()


def test_frame_flags(client):
    body = client.get(
        "/api/stats-card?username=alice&hide_title=true&hide_background=true"
    ).get_data(as_text=True)
    assert 'class="title"' not in body
    assert 'class="background"' not in body

    root = svg_root(client.get("/api/stats-card?username=alice&hide_background_stroke=true"))
    assert root.find("svg:rect[@class='background']", NS).get("stroke-opacity") == "0"

    # only the exact string "true" enables a flag
    body = client.get("/api/stats-card?username=alice&hide_title=1").get_data(as_text=True)
    assert 'class="title"' in body


def test_offsets(client):
    body = client.get("/api/stats-card?username=alice&offset_x=30&offset_y=25").get_data(as_text=True)
    assert 'transform="translate(30, 43)"' in body
    body = client.get("/api/stats-card?username=alice&offset_x=abc").get_data(as_text=True)
    assert 'transform="translate(12, 30)"' in body


def test_frame_failure_renders_error_card(client):
    root = svg_root(client.get("/api/stats-card?username=alice&offset_x=200"))
    assert root.find("svg:title", NS).text == "Something went wrong"
    assert root[-1].get("class") == "errorCard"


def test_stats_are_cached(client, api):
    client.get("/api/stats-card?username=alice")
    client.get("/api/stats-card?username=alice&theme=nord")
    assert api.stats_calls == ["alice"]


# ------------------ Upstream errors ------------------
@pytest.mark.parametrize("error,status", [
    (UserNotFound("ghost"), 404),
    (RateLimitExceeded(), 429),
    (MissingToken(), 503),
    (NetworkError("boom", status=502), 500),
    (GraphQLError("Something broke"), 500),
])
def test_upstream_error_mapping(error, status, governor):
    api = FakeApi(error=error)
    client = create_app(api=api, cache=GitHubCache(CacheConfig()), governor=governor).test_client()
    for path in ("/api/stats-card?username=ghost", "/api/langs-card?username=ghost"):
        resp = client.get(path)
        assert resp.status_code == status
        assert resp.get_json() == {"error": str(error)}
        assert resp.headers["Cache-Control"] == "no-store"
        assert "Retry-After" not in resp.headers
    # failures are not cached
    client.get("/api/stats-card?username=ghost")
    assert api.stats_calls == ["ghost", "ghost"]


def test_rate_limit_protection(governor):
    api = FakeApi(error=RateLimitProtection(remaining=5, reset=1120))
    client = create_app(api=api, cache=GitHubCache(CacheConfig()), governor=governor).test_client()
    resp = client.get("/api/stats-card?username=alice")
    assert resp.status_code == 429
    assert resp.get_json()["retry_after_seconds"] == 120
    assert resp.headers["Retry-After"] == "120"


# ------------------ Language card ------------------
def test_langs_card_vertical(client):
    resp = client.get("/api/langs-card?username=alice")
    root = svg_root(resp)
    assert root.find("svg:title", NS).text == "Most used languages"
    assert root.find("svg:desc", NS).text == "GitHub top languages"
    labels = [t.text for t in root.findall(".//svg:text[@class='label']", NS)]
    assert labels == ["Rust", "TypeScript", "Go"]
    assert resp.headers["Cache-Control"] == "public, max-age=3600"


def test_langs_card_horizontal(client):
    root = svg_root(client.get("/api/langs-card?username=alice&layout=horizontal&max_languages=2"))
    assert root.find(".//svg:mask", NS) is not None
    assert len(root.findall(".//svg:g[@class='legend-group']/svg:g", NS)) == 2


def test_langs_card_count_weight(client):
    root = svg_root(client.get("/api/langs-card?username=alice&size_weight=0&count_weight=1"))
    values = [t.text for t in root.findall(".//svg:text[@class='value']", NS)]
    assert values == ["48.39%", "38.71%", "12.90%"]


@pytest.mark.parametrize("query", [
    "layout=diagonal",
    "size_weight=-1",
    "size_weight=abc",
    "count_weight=nan",
    "count_weight=inf",
    "count_weight=10.5",
    "max_languages=0",
    "max_languages=21",
    "max_languages=two",
    "theme=nope",
])
def test_langs_card_bad_options(client, api, query):
    resp = client.get(f"/api/langs-card?username=alice&{query}")
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    assert api.langs_calls == []


def test_langs_card_weight_above_bound(client, api):
    resp = client.get("/api/langs-card?username=alice&size_weight=200")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid size_weight: 200; must be a number between 0 and 10"
    assert api.langs_calls == []


def test_langs_card_weight_at_bound(client):
    root = svg_root(client.get("/api/langs-card?username=alice&size_weight=10&count_weight=10"))
    values = [float(t.text.rstrip("%")) for t in root.findall(".//svg:text[@class='value']", NS)]
    assert len(values) == 3
    assert values == sorted(values, reverse=True)
    assert abs(sum(values) - 100.0) < 0.05


def test_langs_card_exclusions_share_cache_key(client, api):
    client.get("/api/langs-card?username=alice&exclude_repo=b,%20a,,")
    client.get("/api/langs-card?username=alice&exclude_repo=a,b")
    client.get("/api/langs-card?username=alice")
    assert api.langs_calls == [("alice", ["b", "a"]), ("alice", [])]


# ------------------ Health ------------------
def test_health(client, monkeypatch, governor):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    governor.update({"x-ratelimit-remaining": "4321"})
    client.get("/api/stats-card?username=alice")
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["token_configured"] is False
    assert "0 days" in data["uptime"]
    assert data["cache"]["stats_cache_entries"] == 1
    assert data["cache"]["languages_cache_entries"] == 0
    assert data["rate_limit"]["remaining"] == 4321
