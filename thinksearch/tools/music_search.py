"""
Music Search Tool - Track suggestions through the generative text service

There is no dedicated music API behind this source: the generative text
service is asked for a JSON array of tracks. Its answer is a normal
generateContent response whose text part is itself JSON (often wrapped in
code fences), so the body is parsed twice.
"""

from typing import Any, Dict, List

from thinksearch.config import MUSIC_LIMIT
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.prompts import MUSIC_PROMPT
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.gemini import GeminiClient, first_text
from thinksearch.tools.normalizer import (
    DEFAULT_TITLE,
    extract_json_array,
    optional_text,
    parse_duration,
    parse_timestamp,
    text_field,
)


class MusicAdapter(SourceAdapter):
    kind = SearchKind.MUSIC
    name = "music"
    default_limit = MUSIC_LIMIT

    def __init__(self, gemini: GeminiClient):
        super().__init__()
        self.gemini = gemini

    async def _request(self, query: str, limit: int) -> Any:
        return await self.gemini.generate(MUSIC_PROMPT.format(query=query, limit=limit), temperature=0.7)

    def _extract(self, payload: Any) -> List[Dict[str, Any]]:
        tracks = extract_json_array(first_text(payload))
        return [track for track in tracks if isinstance(track, dict)]

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_music_item(raw, index)


def map_music_item(raw: Dict[str, Any], index: int) -> SearchResult:
    artist = text_field(raw, "artist", default="Unknown artist")
    album = text_field(raw, "album")
    return SearchResult(
        id=f"music-{text_field(raw, 'id', default=str(index))}",
        kind=SearchKind.MUSIC,
        title=text_field(raw, "title", default=DEFAULT_TITLE),
        description=f"{artist} - {album}" if album else artist,
        source_label=text_field(raw, "source", default="Music API"),
        url=text_field(raw, "url"),
        published_at=parse_timestamp(raw.get("publishedAt")),
        duration_seconds=parse_duration(raw.get("duration")),
        thumbnail_url=optional_text(raw, "thumbnail"),
    )
