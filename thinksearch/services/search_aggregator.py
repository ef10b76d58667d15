"""
Search Aggregator - Multi-source search orchestration

Fans one query out to every configured source adapter, merges whatever
comes back in the declared source order, and attaches the AI narrative.

Flow:
1. Empty/whitespace query -> empty response, no external calls
2. Term explanation first; on success it is prepended as a synthesized record
3. Adapter calls joined with asyncio.gather, each independently guarded
4. Records concatenated in declared adapter order, ids made unique
5. Narrative summary over all source records, or a "no sources" message

Nothing escapes `aggregate`: every failure path ends in a valid response.
"""

import asyncio
from typing import Callable, Iterable, List, Optional, Sequence

import httpx
import logfire
from sqlalchemy.orm import Session

from thinksearch.config import Settings
from thinksearch.models.search_schemas import AggregationResponse, SearchKind, SearchResult
from thinksearch.prompts import AGGREGATION_FALLBACK, NO_RESULTS_MESSAGE
from thinksearch.services.summarization_service import SummarizationService
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.blog_search import BlogSearchAdapter
from thinksearch.tools.dictionary import DictionaryAdapter
from thinksearch.tools.encyclopedia import EncyclopediaAdapter
from thinksearch.tools.gemini import GeminiClient
from thinksearch.tools.media_search import ImageAdapter, NewsAdapter, VideoAdapter
from thinksearch.tools.music_search import MusicAdapter
from thinksearch.tools.normalizer import ensure_unique_ids
from thinksearch.tools.web_search import WebSearchAdapter

SOURCE_ORDER = (
    SearchKind.ENCYCLOPEDIA,
    SearchKind.WEB,
    SearchKind.DICTIONARY,
    SearchKind.NEWS,
    SearchKind.IMAGE,
    SearchKind.VIDEO,
    SearchKind.MUSIC,
    SearchKind.BLOG,
)


class SearchAggregator:
    """Runs one query across all sources and merges the results."""

    def __init__(self, adapters: Sequence[SourceAdapter], summarizer: SummarizationService):
        self.adapters = list(adapters)
        self.summarizer = summarizer

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        session_factory: Optional[Callable[[], Session]] = None,
    ) -> "SearchAggregator":
        """Build the standard source line-up in declared order."""
        gemini = GeminiClient(settings.gemini_api_key, url=settings.gemini_url, client=client)
        adapters: List[SourceAdapter] = [
            EncyclopediaAdapter(settings.wikipedia_url, client=client),
            WebSearchAdapter(settings.duckduckgo_url, client=client),
            DictionaryAdapter(settings.dictionary_url, client=client),
            NewsAdapter(settings.nexus_url, settings.nexus_api_key, client=client),
            ImageAdapter(settings.nexus_url, settings.nexus_api_key, client=client),
            VideoAdapter(settings.nexus_url, settings.nexus_api_key, client=client),
            MusicAdapter(gemini),
        ]
        if session_factory is not None:
            adapters.append(BlogSearchAdapter(session_factory))
        return cls(adapters, SummarizationService(gemini))

    async def aggregate(self, query: str, kinds: Optional[Iterable[SearchKind]] = None) -> AggregationResponse:
        """
        Search every selected source for `query`.

        Args:
            query: Free-text query
            kinds: Source kinds to include; None means all configured sources

        Returns:
            AggregationResponse, never raises
        """
        if not query or not query.strip():
            return AggregationResponse()

        query = query.strip()
        with logfire.span("aggregate search {query}", query=query):
            try:
                return await self._aggregate(query, kinds)
            except Exception as exc:
                logfire.exception("Aggregation failed for {query}: {error}", query=query, error=str(exc))
                return AggregationResponse(
                    results=[],
                    narrative_summary=AGGREGATION_FALLBACK.format(query=query),
                    term_explanation=SummarizationService.explain_fallback(query),
                )

    async def _aggregate(self, query: str, kinds: Optional[Iterable[SearchKind]]) -> AggregationResponse:
        results: List[SearchResult] = []

        explanation = await self.summarizer.try_explain(query)
        if explanation is not None:
            results.append(synthesized_result(query, explanation))

        selected = self._select(kinds)
        # A source searched on its own may return up to its larger cap
        limits = [adapter.limit_cap if len(selected) == 1 else adapter.default_limit for adapter in selected]
        batches = await asyncio.gather(
            *(self._guarded_fetch(adapter, query, limit) for adapter, limit in zip(selected, limits))
        )
        for batch, limit in zip(batches, limits):
            results.extend(batch[:limit])

        results = ensure_unique_ids(results)
        sources = [result for result in results if result.kind != SearchKind.SYNTHESIZED]

        if sources:
            narrative = await self.summarizer.summarize(query, sources)
        else:
            narrative = NO_RESULTS_MESSAGE.format(query=query)

        logfire.info(
            "Aggregated {count} results for {query}",
            count=len(sources),
            query=query,
            kinds=sorted({result.kind.value for result in sources}),
        )
        return AggregationResponse(
            results=results,
            narrative_summary=narrative,
            term_explanation=explanation or SummarizationService.explain_fallback(query),
        )

    def _select(self, kinds: Optional[Iterable[SearchKind]]) -> List[SourceAdapter]:
        if kinds is None:
            return list(self.adapters)
        wanted = set(kinds)
        return [adapter for adapter in self.adapters if adapter.kind in wanted]

    async def _guarded_fetch(self, adapter: SourceAdapter, query: str, limit: int) -> List[SearchResult]:
        try:
            return await adapter.fetch(query, limit)
        except Exception as exc:
            logfire.warn("{source} adapter raised: {error}", source=adapter.name, error=str(exc))
            return []


def synthesized_result(query: str, explanation: str) -> SearchResult:
    """The AI explanation as a pseudo-record shown before source results."""
    return SearchResult(
        id="synthesized-0",
        kind=SearchKind.SYNTHESIZED,
        title=f"What is {query}?",
        description=explanation,
        source_label="AI Overview",
        url="",
    )
