"""
Tests for the summarization service and the Gemini client it wraps.
"""

import json

import httpx
import pytest

from thinksearch.errors import GenerationError
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.services.summarization_service import SummarizationService
from thinksearch.tools.gemini import GeminiClient, first_text, joined_text

GEMINI = "https://gemini.test/generate"


@pytest.fixture
def corpus():
    return [
        SearchResult(id="news-1", kind=SearchKind.NEWS, title="Chips", description="New chip fab opens"),
        SearchResult(id="web-0", kind=SearchKind.WEB, title="Tech", description="x" * 900),
    ]


class TestGeminiClient:
    @pytest.mark.asyncio
    async def test_request_shape(self, mock_http, gemini_payload):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=gemini_payload("ok"))

        client = GeminiClient("secret-key", url=GEMINI, client=mock_http(handler))
        text = await client.generate_text("hello", temperature=0.5, max_output_tokens=100)

        body = json.loads(seen[0].content)
        assert text == "ok"
        assert seen[0].url.params["key"] == "secret-key"
        assert body["contents"][0]["parts"][0]["text"] == "hello"
        assert body["generationConfig"] == {"temperature": 0.5, "maxOutputTokens": 100}

    @pytest.mark.asyncio
    async def test_missing_key(self):
        with pytest.raises(GenerationError) as exc_info:
            await GeminiClient(None).generate("hello")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_upstream_error_message_and_status(self, mock_http):
        body = {"error": {"message": "Quota exceeded"}}
        client = GeminiClient("key", url=GEMINI, client=mock_http(lambda r: httpx.Response(429, json=body)))
        with pytest.raises(GenerationError) as exc_info:
            await client.generate("hello")
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "Quota exceeded"

    @pytest.mark.asyncio
    async def test_empty_candidates(self, mock_http):
        client = GeminiClient("key", url=GEMINI, client=mock_http(lambda r: httpx.Response(200, json={"candidates": []})))
        with pytest.raises(GenerationError) as exc_info:
            await client.generate_text("hello")
        assert exc_info.value.status_code == 502

    def test_text_helpers(self):
        payload = {"candidates": [{"content": {"parts": [{"text": " a "}, {"text": "b"}]}}]}
        assert first_text(payload) == "a"
        assert joined_text(payload) == "a \nb"
        assert first_text({"candidates": [{}]}) == ""
        assert joined_text(None) == ""


class TestSummarize:
    @pytest.mark.asyncio
    async def test_returns_generated_summary(self, mock_http, gemini_payload, corpus):
        prompts = []

        def handler(request):
            prompts.append(json.loads(request.content)["contents"][0]["parts"][0]["text"])
            return httpx.Response(200, json=gemini_payload("Chips are booming."))

        service = SummarizationService(GeminiClient("key", url=GEMINI, client=mock_http(handler)))
        summary = await service.summarize("technology", corpus)

        assert summary == "Chips are booming."
        assert '"technology"' in prompts[0]
        assert "[news] Chips: New chip fab opens" in prompts[0]
        # long descriptions are truncated in the prompt
        assert "x" * 501 not in prompts[0]

    @pytest.mark.asyncio
    async def test_failure_falls_back_with_query_and_count(self, mock_http, corpus):
        service = SummarizationService(
            GeminiClient("key", url=GEMINI, client=mock_http(lambda r: httpx.Response(500)))
        )
        summary = await service.summarize("technology", corpus)
        assert summary
        assert "technology" in summary
        assert "2" in summary

    @pytest.mark.asyncio
    async def test_empty_generation_falls_back(self, mock_http, corpus):
        service = SummarizationService(
            GeminiClient("key", url=GEMINI, client=mock_http(lambda r: httpx.Response(200, json={})))
        )
        summary = await service.summarize("technology", corpus)
        assert summary == SummarizationService.summary_fallback("technology", 2)


class TestExplain:
    @pytest.mark.asyncio
    async def test_explain_success(self, mock_http, gemini_payload):
        service = SummarizationService(
            GeminiClient("key", url=GEMINI, client=mock_http(lambda r: httpx.Response(200, json=gemini_payload("A definition."))))
        )
        assert await service.explain("entropy") == "A definition."
        assert await service.try_explain("entropy") == "A definition."

    @pytest.mark.asyncio
    async def test_explain_fallback(self):
        service = SummarizationService(GeminiClient(None))
        explanation = await service.explain("entropy")
        assert "entropy" in explanation
        assert await service.try_explain("entropy") is None
