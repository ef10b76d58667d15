"""
Search Schemas - Pydantic Models for Multi-Source Search

Defines the data structures for search aggregation:
- SearchKind: Which external source (or the synthesized explanation) a record came from
- SearchResult: One normalized record, identical in shape for every source
- AggregationRequest: Query plus the kinds the caller wants
- AggregationResponse: Merged results with the optional AI narrative

Records serialize with camelCase keys (sourceLabel, publishedAt, ...).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SearchKind(str, Enum):
    """Source kind tag carried by every SearchResult."""

    ENCYCLOPEDIA = "encyclopedia"
    WEB = "web"
    DICTIONARY = "dictionary"
    NEWS = "news"
    IMAGE = "image"
    VIDEO = "video"
    MUSIC = "music"
    BLOG = "blog"
    SYNTHESIZED = "synthesized"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResult(CamelModel):
    """Single normalized search record."""

    id: str = Field(..., description="Unique within one aggregated response")
    kind: SearchKind = Field(..., description="Source kind")
    title: str = Field("No title", description="Display title")
    description: str = Field("", description="Snippet, definition or summary text")
    source_label: str = Field("Unknown source", description="Human readable origin")
    url: str = Field("", description="Link to the original content")
    published_at: Optional[datetime] = Field(None, description="Publication time if known")
    duration_seconds: Optional[int] = Field(None, description="Media length", ge=0)
    thumbnail_url: Optional[str] = Field(None, description="Preview image")


class AggregationRequest(CamelModel):
    """API request for a multi-source search."""

    query: str = Field(..., description="Free-text query", examples=["technology"])
    kinds: Union[Set[SearchKind], str] = Field(
        "all",
        description="Kinds to search, or 'all'",
    )

    @field_validator("kinds")
    @classmethod
    def validate_kinds(cls, kinds):
        if isinstance(kinds, str) and kinds != "all":
            raise ValueError("kinds must be 'all' or a list of source kinds")
        return kinds

    def requested_kinds(self) -> Optional[Set[SearchKind]]:
        """None means every configured source."""
        return None if self.kinds == "all" else set(self.kinds)


class AggregationResponse(CamelModel):
    """Merged search results in declared source order."""

    results: List[SearchResult] = Field(default_factory=list)
    narrative_summary: Optional[str] = Field(None, description="AI synthesis of all results")
    term_explanation: Optional[str] = Field(None, description="AI definition of the query term")


class SearchHistoryEntry(CamelModel):
    """A previously executed search for the signed-in user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    query: str
    search_type: str
    results_count: int
    created_at: datetime
