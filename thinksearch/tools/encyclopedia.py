"""
Encyclopedia Tool - Wikipedia page summary lookup

One record per query: the REST summary endpoint answers with a single
object for the best-matching page, or 404 when there is none.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from thinksearch.config import ENCYCLOPEDIA_LIMIT, WIKIPEDIA_URL
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.normalizer import DEFAULT_TITLE, parse_timestamp, text_field


class EncyclopediaAdapter(SourceAdapter):
    kind = SearchKind.ENCYCLOPEDIA
    name = "encyclopedia"
    default_limit = ENCYCLOPEDIA_LIMIT

    def __init__(self, base_url: str = WIKIPEDIA_URL, client: Optional[httpx.AsyncClient] = None):
        super().__init__(client)
        self.base_url = base_url.rstrip("/")

    async def _request(self, query: str, limit: int) -> Any:
        return await self._get_json(f"{self.base_url}/{quote(query, safe='')}")

    def _extract(self, payload: Any) -> List[Dict[str, Any]]:
        # Disambiguation pages carry no usable extract
        if not isinstance(payload, dict) or payload.get("type") == "disambiguation":
            return []
        return [payload] if text_field(payload, "extract", "title") else []

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_encyclopedia_item(raw, index)


def map_encyclopedia_item(raw: Dict[str, Any], index: int) -> SearchResult:
    urls = raw.get("content_urls") if isinstance(raw.get("content_urls"), dict) else {}
    desktop = urls.get("desktop") if isinstance(urls.get("desktop"), dict) else {}
    thumbnail = raw.get("thumbnail") if isinstance(raw.get("thumbnail"), dict) else {}
    page_id = text_field(raw, "pageid", default=str(index))
    return SearchResult(
        id=f"encyclopedia-{page_id}",
        kind=SearchKind.ENCYCLOPEDIA,
        title=text_field(raw, "title", "displaytitle", default=DEFAULT_TITLE),
        description=text_field(raw, "extract", "description"),
        source_label="Wikipedia",
        url=text_field(desktop, "page"),
        published_at=parse_timestamp(raw.get("timestamp")),
        thumbnail_url=text_field(thumbnail, "source") or None,
    )
