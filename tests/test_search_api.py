"""
Tests for the search endpoints and the root/health routes.
"""

import httpx
import pytest

from thinksearch.main import app, get_aggregator, history_search_type
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.services.search_aggregator import SOURCE_ORDER, SearchAggregator
from thinksearch.services.summarization_service import SummarizationService
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.gemini import GeminiClient


class CannedNews(SourceAdapter):
    kind = SearchKind.NEWS
    name = "news"
    default_limit = 8

    async def _request(self, query, limit):
        return [{"title": "Chip fab opens", "publishedAt": "2024-05-01T08:30:00Z"}, {"title": "AI rules"}]

    def map_item(self, raw, index):
        return SearchResult(id=f"news-{index}", kind=self.kind, title=raw["title"], source_label="Wire")


@pytest.fixture
def search_client(client):
    """Client whose aggregator uses canned news and no generative key."""
    app.dependency_overrides[get_aggregator] = lambda: SearchAggregator(
        [CannedNews()], SummarizationService(GeminiClient(None))
    )
    return client


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "active"
    assert client.get("/health").json() == {"status": "ok"}


def test_search_returns_camel_case_records(search_client):
    response = search_client.post("/api/search", json={"query": "technology"})

    assert response.status_code == 200
    body = response.json()
    assert [r["title"] for r in body["results"]] == ["Chip fab opens", "AI rules"]
    assert body["results"][0]["sourceLabel"] == "Wire"
    assert "narrativeSummary" in body
    assert "technology" in body["narrativeSummary"]
    assert "technology" in body["termExplanation"]


def test_empty_query(search_client):
    body = search_client.post("/api/search", json={"query": "  "}).json()
    assert body["results"] == []
    assert body["narrativeSummary"] is None


def test_kinds_filter(search_client):
    body = search_client.post("/api/search", json={"query": "technology", "kinds": ["video"]}).json()
    assert body["results"] == []
    assert "technology" in body["narrativeSummary"]


def test_invalid_kinds(search_client):
    response = search_client.post("/api/search", json={"query": "technology", "kinds": "some"})
    assert response.status_code == 422


def test_history_recorded_for_signed_in_user(search_client, auth_headers):
    headers, _ = auth_headers()

    search_client.post("/api/search", json={"query": "technology"}, headers=headers)
    search_client.post("/api/search", json={"query": "anonymous search"})

    response = search_client.get("/api/search/history", headers=headers)

    assert response.status_code == 200
    history = response.json()
    assert [entry["query"] for entry in history] == ["technology"]
    assert history[0]["resultsCount"] == 2
    assert history[0]["searchType"] == "all"


def test_history_search_type(search_client, auth_headers):
    headers, _ = auth_headers()
    every_kind = [kind.value for kind in SOURCE_ORDER]

    search_client.post("/api/search", json={"query": "first", "kinds": every_kind}, headers=headers)
    search_client.post("/api/search", json={"query": "second", "kinds": ["video", "news"]}, headers=headers)

    types = {entry["query"]: entry["searchType"] for entry in search_client.get("/api/search/history", headers=headers).json()}
    assert types == {"first": "all", "second": "news,video"}


def test_history_search_type_values():
    assert history_search_type(None) == "all"
    assert history_search_type(set(SOURCE_ORDER)) == "all"
    assert history_search_type({SearchKind.WEB, SearchKind.BLOG}) == "blog,web"


def test_history_requires_auth(client):
    assert client.get("/api/search/history").status_code == 401


def test_default_aggregator_searches_blogs(client, auth_headers, monkeypatch):
    """The real aggregator folds published posts in even when every API is unreachable."""
    headers, _ = auth_headers()
    client.post(
        "/api/blogs",
        json={"title": "Quantum notes", "content": "qubits", "slug": "quantum", "is_published": True},
        headers=headers,
    )

    def offline(request):
        raise httpx.ConnectError("offline", request=request)

    offline_client = httpx.AsyncClient(transport=httpx.MockTransport(offline))
    original = SearchAggregator.from_settings.__func__

    def from_settings(cls, settings, client=None, session_factory=None):
        return original(cls, settings, client=offline_client, session_factory=session_factory)

    monkeypatch.setattr(SearchAggregator, "from_settings", classmethod(from_settings))

    body = client.post("/api/search", json={"query": "quantum"}).json()

    assert [r["kind"] for r in body["results"]] == ["blog"]
    assert body["results"][0]["url"] == "/blog/quantum"
