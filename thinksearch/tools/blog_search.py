"""
Blog Search Tool - Published posts from the local store

Folds the platform's own published blog posts into search results. Matches
title, excerpt or content case-insensitively, newest first.
"""

import asyncio
from typing import Any, Callable, Dict, List

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from thinksearch.config import BLOG_LIMIT, BLOG_SOLO_LIMIT
from thinksearch.db.models import Blog
from thinksearch.models.search_schemas import SearchKind, SearchResult
from thinksearch.tools.base import SourceAdapter
from thinksearch.tools.normalizer import DEFAULT_TITLE, text_field

BLOG_SOURCE_LABEL = "Think Search Blogs"


class BlogSearchAdapter(SourceAdapter):
    kind = SearchKind.BLOG
    name = "blogs"
    default_limit = BLOG_LIMIT
    max_limit = BLOG_SOLO_LIMIT

    def __init__(self, session_factory: Callable[[], Session]):
        super().__init__()
        self.session_factory = session_factory

    async def _request(self, query: str, limit: int) -> Any:
        return await asyncio.to_thread(self._query, query, limit)

    def _query(self, query: str, limit: int) -> List[Dict[str, Any]]:
        pattern = f"%{query}%"
        statement = (
            select(Blog)
            .where(Blog.is_published.is_(True))
            .where(or_(Blog.title.ilike(pattern), Blog.excerpt.ilike(pattern), Blog.content.ilike(pattern)))
            .order_by(Blog.published_at.desc(), Blog.created_at.desc())
            .limit(limit)
        )
        with self.session_factory() as session:
            return [
                {
                    "id": blog.id,
                    "title": blog.title,
                    "excerpt": blog.excerpt,
                    "slug": blog.slug,
                    "cover_image_url": blog.cover_image_url,
                    "published_at": blog.published_at,
                }
                for blog in session.scalars(statement)
            ]

    def map_item(self, raw: Dict[str, Any], index: int) -> SearchResult:
        return map_blog_row(raw, index)


def map_blog_row(raw: Dict[str, Any], index: int) -> SearchResult:
    return SearchResult(
        id=f"blog-{text_field(raw, 'id', default=str(index))}",
        kind=SearchKind.BLOG,
        title=text_field(raw, "title", default=DEFAULT_TITLE),
        description=text_field(raw, "excerpt"),
        source_label=BLOG_SOURCE_LABEL,
        url=f"/blog/{text_field(raw, 'slug')}",
        published_at=raw.get("published_at"),
        thumbnail_url=text_field(raw, "cover_image_url") or None,
    )
