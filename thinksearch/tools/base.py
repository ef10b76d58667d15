"""
Source Adapter Base - Uniform, failure-proof wrapper around one search API

Subclasses describe how to request their API (`_request`), where the
records live in its response (`_extract`) and how one raw record maps to a
SearchResult (`map_item`). `fetch` glues those together and guarantees:

- never raises: any error degrades to an empty list plus a diagnostic log
- at most `limit` records, capped at the source's `max_limit` (its default
  limit unless the source allows more)
- invalid individual records are skipped, not fatal
"""

from typing import Any, Dict, List, Optional

import httpx
import logfire

from thinksearch.errors import SourceError
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.tools.normalizer import unwrap_items


class SourceAdapter:
    """Base class for all external search sources."""

    kind: SearchKind
    name: str = "source"
    default_limit: int = 10
    # Upper bound for an explicit limit; None means default_limit
    max_limit: Optional[int] = None

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    @property
    def limit_cap(self) -> int:
        return self.max_limit or self.default_limit

    async def fetch(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """Search this source and return normalized records (empty on any failure)."""
        limit = self.default_limit if limit is None else max(0, min(limit, self.limit_cap))
        if limit == 0 or not query or not query.strip():
            return []

        try:
            payload = await self._request(query.strip(), limit)
            raw_items = self._extract(payload)
        except Exception as exc:
            logfire.warn(
                "{source} search failed: {error}",
                source=self.name,
                error=str(exc),
                error_class=type(exc).__name__,
                query=query,
            )
            return []

        results = []
        for index, raw in enumerate(raw_items):
            if len(results) >= limit:
                break
            try:
                results.append(self.map_item(raw, index))
            except Exception as exc:
                logfire.warn("Skipping invalid {source} record: {error}", source=self.name, error=str(exc))
                continue

        logfire.debug("{source} returned {count} results", source=self.name, count=len(results))
        return results

    async def _request(self, query: str, limit: int) -> Any:
        raise NotImplementedError

    def _extract(self, payload: Any) -> List[Dict[str, Any]]:
        return unwrap_items(payload)

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        raise NotImplementedError

    async def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET a JSON document; non-2xx and bad bodies raise SourceError."""
        if self._client is not None:
            response = await self._client.get(url, params=params, headers=headers)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(url, params=params, headers=headers)

        if not response.is_success:
            raise SourceError(self.name, f"HTTP {response.status_code}", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError(self.name, "response body is not JSON") from exc
