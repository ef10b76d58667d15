"""
Web Search Tool - DuckDuckGo Instant Answer Integration

Searches the web through the DuckDuckGo Instant Answer API. The abstract
(when present) comes first, followed by related topics; topic groups are
flattened in order.

Response shape:
    {"Heading", "AbstractText", "AbstractURL", "AbstractSource", "Image",
     "RelatedTopics": [{"Text", "FirstURL", "Icon": {"URL"}} |
                       {"Name", "Topics": [...]}]}
"""

from typing import Any, Dict, List, Optional
from urllib.parse import unquote, urlparse

import httpx

from thinksearch.config import DUCKDUCKGO_URL, WEB_LIMIT
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.normalizer import DEFAULT_TITLE, text_field

DUCKDUCKGO_HOST = "https://duckduckgo.com"


class WebSearchAdapter(SourceAdapter):
    """General web results from DuckDuckGo."""

    kind = SearchKind.WEB
    name = "web"
    default_limit = WEB_LIMIT

    def __init__(self, base_url: str = DUCKDUCKGO_URL, client: Optional[httpx.AsyncClient] = None):
        super().__init__(client)
        self.base_url = base_url

    async def _request(self, query: str, limit: int) -> Any:
        return await self._get_json(
            self.base_url,
            params={"q": query, "format": "json", "no_html": 1, "skip_disambig": 1},
        )

    def _extract(self, payload: Any) -> List[Dict[str, Any]]:
        if not isinstance(payload, dict):
            return []

        items = []
        if text_field(payload, "AbstractText") and text_field(payload, "AbstractURL"):
            items.append({
                "Text": payload.get("AbstractText"),
                "FirstURL": payload.get("AbstractURL"),
                "Heading": payload.get("Heading"),
                "Source": payload.get("AbstractSource"),
                "Icon": {"URL": payload.get("Image")},
            })
        items.extend(_flatten_topics(payload.get("RelatedTopics")))
        return items

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_web_item(raw, index)


def map_web_item(raw: Dict[str, Any], index: int) -> SearchResult:
    url = text_field(raw, "FirstURL")
    text = text_field(raw, "Text")
    title = text_field(raw, "Heading") or _title_from_url(url) or text[:80] or DEFAULT_TITLE
    icon = raw.get("Icon") if isinstance(raw.get("Icon"), dict) else {}
    return SearchResult(
        id=f"web-{index}",
        kind=SearchKind.WEB,
        title=title,
        description=text,
        source_label=text_field(raw, "Source", default="DuckDuckGo"),
        url=url,
        thumbnail_url=_absolute_icon(text_field(icon, "URL")),
    )


def _flatten_topics(topics: Any) -> List[Dict[str, Any]]:
    flattened = []
    for topic in topics if isinstance(topics, list) else []:
        if not isinstance(topic, dict):
            continue
        if isinstance(topic.get("Topics"), list):
            flattened.extend(_flatten_topics(topic["Topics"]))
        elif topic.get("FirstURL"):
            flattened.append(topic)
    return flattened


def _title_from_url(url: str) -> str:
    if not url:
        return ""
    segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    return unquote(segment).replace("_", " ").strip()


def _absolute_icon(icon: str) -> Optional[str]:
    if not icon:
        return None
    return f"{DUCKDUCKGO_HOST}{icon}" if icon.startswith("/") else icon
