"""
Media Search Tools - News, image and video search via the Nexus API

All three endpoints take `?query=&limit=` and answer with either a bare
array or `{"results": [...]}`. They differ only in path, default limit and
which fields they carry, so each is a small subclass with its own mapping
function.
"""

from typing import Any, Dict, Optional

import httpx

from thinksearch.config import IMAGE_LIMIT, NEWS_LIMIT, NEXUS_URL, VIDEO_LIMIT
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.normalizer import (
    DEFAULT_TITLE,
    optional_text,
    parse_duration,
    parse_timestamp,
    text_field,
)


class NexusAdapter(SourceAdapter):
    """Shared request logic for the Nexus search endpoints."""

    path = ""

    def __init__(
        self,
        base_url: str = NEXUS_URL,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client)
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    async def _request(self, query: str, limit: int) -> Any:
        headers = {"x-api-key": self.api_key} if self.api_key else None
        return await self._get_json(
            f"{self.base_url}/{self.path}",
            params={"query": query, "limit": limit},
            headers=headers,
        )


class NewsAdapter(NexusAdapter):
    kind = SearchKind.NEWS
    name = "news"
    path = "searchNews"
    default_limit = NEWS_LIMIT

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_news_item(raw, index)


class ImageAdapter(NexusAdapter):
    kind = SearchKind.IMAGE
    name = "images"
    path = "searchImages"
    default_limit = IMAGE_LIMIT

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_image_item(raw, index)


class VideoAdapter(NexusAdapter):
    kind = SearchKind.VIDEO
    name = "videos"
    path = "youtube/search"
    default_limit = VIDEO_LIMIT

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_video_item(raw, index)


def map_news_item(raw: Dict[str, Any], index: int) -> SearchResult:
    return SearchResult(
        id=f"news-{text_field(raw, 'id', default=str(index))}",
        kind=SearchKind.NEWS,
        title=text_field(raw, "title", default=DEFAULT_TITLE),
        description=text_field(raw, "description", "summary", "content"),
        source_label=text_field(raw, "source", default="News API"),
        url=text_field(raw, "url", "link"),
        published_at=parse_timestamp(raw.get("publishedAt")),
        thumbnail_url=optional_text(raw, "thumbnail", "image", "urlToImage"),
    )


def map_image_item(raw: Dict[str, Any], index: int) -> SearchResult:
    photographer = text_field(raw, "photographer", "author")
    description = text_field(raw, "description", "alt")
    if not description and photographer:
        description = f"Photo by {photographer}"
    return SearchResult(
        id=f"image-{text_field(raw, 'id', default=str(index))}",
        kind=SearchKind.IMAGE,
        title=text_field(raw, "title", default=DEFAULT_TITLE),
        description=description,
        source_label=text_field(raw, "source", default="Images API"),
        url=text_field(raw, "url", "link"),
        thumbnail_url=optional_text(raw, "thumbnail", "url"),
    )


def map_video_item(raw: Dict[str, Any], index: int) -> SearchResult:
    return SearchResult(
        id=f"video-{text_field(raw, 'id', 'videoId', default=str(index))}",
        kind=SearchKind.VIDEO,
        title=text_field(raw, "title", default=DEFAULT_TITLE),
        description=text_field(raw, "description"),
        source_label=text_field(raw, "source", "channel", default="YouTube API"),
        url=text_field(raw, "url", "link"),
        published_at=parse_timestamp(raw.get("publishedAt")),
        duration_seconds=parse_duration(raw.get("duration")),
        thumbnail_url=optional_text(raw, "thumbnail"),
    )
