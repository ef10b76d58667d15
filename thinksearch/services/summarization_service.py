"""
Summarization Service - Narrative summaries and term explanations

Turns aggregated search results into a short narrative using the
generative text service, and separately asks for a general definition of
the query term.

Key Features:
- Corpus built from title + description of every result
- First text part of the first candidate is the answer
- Never raises: any failure becomes a templated fallback that names the
  query and the corpus size, so the summary slot always has content
"""

from typing import Optional, Sequence

import logfire

from thinksearch.models.search_schemas import SearchResult
from thinksearch.prompts import EXPLAIN_FALLBACK, EXPLAIN_PROMPT, SUMMARY_FALLBACK, SUMMARY_PROMPT
from thinksearch.tools.gemini import GeminiClient

# Per-record description cap to keep the prompt bounded
MAX_DESCRIPTION_LENGTH = 500


class SummarizationService:
    """Service for AI summaries over search results."""

    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini

    async def summarize(self, query: str, corpus: Sequence[SearchResult]) -> str:
        """
        Generate a narrative summary of the search results.

        Args:
            query: User's search query
            corpus: Results to summarize, in display order

        Returns:
            Summary text, or a fallback mentioning the query and result count
        """
        prompt = SUMMARY_PROMPT.format(
            query=query,
            count=len(corpus),
            corpus=self._format_corpus(corpus),
        )
        try:
            return await self.gemini.generate_text(prompt)
        except Exception as exc:
            logfire.warn("Summary generation failed for {query}: {error}", query=query, error=str(exc))
            return self.summary_fallback(query, len(corpus))

    async def explain(self, query: str) -> str:
        """General-knowledge explanation of the query term (fallback on failure)."""
        explanation = await self.try_explain(query)
        return explanation if explanation is not None else self.explain_fallback(query)

    async def try_explain(self, query: str) -> Optional[str]:
        """Like explain, but None instead of the fallback text."""
        try:
            return await self.gemini.generate_text(EXPLAIN_PROMPT.format(query=query))
        except Exception as exc:
            logfire.warn("Explanation failed for {query}: {error}", query=query, error=str(exc))
            return None

    @staticmethod
    def summary_fallback(query: str, count: int) -> str:
        return SUMMARY_FALLBACK.format(query=query, count=count)

    @staticmethod
    def explain_fallback(query: str) -> str:
        return EXPLAIN_FALLBACK.format(query=query)

    def _format_corpus(self, corpus: Sequence[SearchResult]) -> str:
        """One line per result: "[kind] title: description"."""
        return "\n".join(
            f"[{result.kind.value}] {result.title}: {_truncate(result.description)}"
            for result in corpus
        )


def _truncate(text: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
