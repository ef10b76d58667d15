"""
Dictionary Tool - Free Dictionary API lookup

The API answers with a bare array of entries, each with meanings and
definitions. Every definition becomes one "sense" record, in the order
the API lists them.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from thinksearch.config import DICTIONARY_LIMIT, DICTIONARY_URL
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.normalizer import DEFAULT_TITLE, text_field


class DictionaryAdapter(SourceAdapter):
    kind = SearchKind.DICTIONARY
    name = "dictionary"
    default_limit = DICTIONARY_LIMIT

    def __init__(self, base_url: str = DICTIONARY_URL, client: Optional[httpx.AsyncClient] = None):
        super().__init__(client)
        self.base_url = base_url.rstrip("/")

    async def _request(self, query: str, limit: int) -> Any:
        return await self._get_json(f"{self.base_url}/{quote(query.lower(), safe='')}")

    def _extract(self, payload: Any) -> List[Dict[str, Any]]:
        senses = []
        for entry in payload if isinstance(payload, list) else []:
            if not isinstance(entry, dict):
                continue
            source_urls = entry.get("sourceUrls") or []
            for meaning in entry.get("meanings") or []:
                if not isinstance(meaning, dict):
                    continue
                for definition in meaning.get("definitions") or []:
                    if not isinstance(definition, dict):
                        continue
                    senses.append({
                        "word": entry.get("word"),
                        "phonetic": entry.get("phonetic"),
                        "partOfSpeech": meaning.get("partOfSpeech"),
                        "definition": definition.get("definition"),
                        "example": definition.get("example"),
                        "url": source_urls[0] if source_urls else None,
                    })
        return senses

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_dictionary_sense(raw, index)


def map_dictionary_sense(raw: Dict[str, Any], index: int) -> SearchResult:
    word = text_field(raw, "word", default=DEFAULT_TITLE)
    part_of_speech = text_field(raw, "partOfSpeech")
    description = text_field(raw, "definition", default="No definition available")
    example = text_field(raw, "example")
    if example:
        description = f'{description} Example: "{example}"'
    return SearchResult(
        id=f"dictionary-{index}",
        kind=SearchKind.DICTIONARY,
        title=f"{word} ({part_of_speech})" if part_of_speech else word,
        description=description,
        source_label="Free Dictionary",
        url=text_field(raw, "url"),
    )
