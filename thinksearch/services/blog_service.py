"""
Blog Service - CRUD for blog posts with ownership checks
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from thinksearch.db.database import session_scope
from thinksearch.db.models import Blog
from thinksearch.models.schema import BlogCreate, BlogUpdate

# Non-nullable columns; an explicit null in an update leaves them unchanged
REQUIRED_FIELDS = ("title", "content", "slug", "tags", "reading_time", "is_published", "is_featured")


class DuplicateSlugError(ValueError):
    def __init__(self):
        super().__init__("A blog with this slug already exists")


class BlogService:
    """Service for reading and writing blog posts."""

    def __init__(self, session: Session):
        self.session = session

    def list_published(
        self,
        limit: int = 12,
        offset: int = 0,
        featured: bool = False,
        search: Optional[str] = None,
    ) -> List[Blog]:
        statement = select(Blog).where(Blog.is_published.is_(True))
        if featured:
            statement = statement.where(Blog.is_featured.is_(True))
        if search:
            pattern = f"%{search}%"
            statement = statement.where(
                or_(Blog.title.ilike(pattern), Blog.excerpt.ilike(pattern), Blog.content.ilike(pattern))
            )
        statement = (
            statement.order_by(Blog.published_at.desc(), Blog.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(statement))

    def list_for_user(self, user_id: str, status: str = "all") -> List[Blog]:
        """User's own posts; status is 'all', 'published' or 'drafts'."""
        statement = select(Blog).where(Blog.user_id == user_id)
        if status == "published":
            statement = statement.where(Blog.is_published.is_(True))
        elif status == "drafts":
            statement = statement.where(Blog.is_published.is_(False))
        return list(self.session.scalars(statement.order_by(Blog.updated_at.desc())))

    def get_published_by_slug(self, slug: str) -> Optional[Blog]:
        """Published post by slug; each read counts one view."""
        blog = self.session.scalar(select(Blog).where(Blog.slug == slug, Blog.is_published.is_(True)))
        if blog is None:
            return blog

        with session_scope(self.session):
            self.session.execute(
                update(Blog).where(Blog.id == blog.id).values(view_count=Blog.view_count + 1)
            )
        self.session.refresh(blog)
        return blog

    def get_owned(self, blog_id: str, user_id: str) -> Optional[Blog]:
        return self.session.scalar(select(Blog).where(Blog.id == blog_id, Blog.user_id == user_id))

    def create(self, user_id: str, data: BlogCreate) -> Blog:
        blog = Blog(
            user_id=user_id,
            title=data.title,
            content=data.content,
            excerpt=(data.excerpt or "").strip() or None,
            slug=data.slug,
            tags=list(data.tags),
            cover_image_url=data.cover_image_url or None,
            reading_time=data.reading_time,
            is_published=data.is_published,
            published_at=_now() if data.is_published else None,
        )
        self._commit(blog)
        return blog

    def update(self, blog: Blog, data: BlogUpdate) -> Blog:
        """Apply only the fields present in the request."""
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in REQUIRED_FIELDS
        }
        for field in ("title", "content"):
            if field in changes:
                changes[field] = changes[field].strip()
        if "excerpt" in changes:
            changes["excerpt"] = (changes["excerpt"] or "").strip() or None
        if "cover_image_url" in changes:
            changes["cover_image_url"] = changes["cover_image_url"] or None
        if "is_published" in changes and changes["is_published"] != blog.is_published:
            changes["published_at"] = _now() if changes["is_published"] else None

        for key, value in changes.items():
            setattr(blog, key, value)
        blog.updated_at = _now()
        self._commit(blog)
        return blog

    def delete(self, blog: Blog) -> None:
        with session_scope(self.session):
            self.session.delete(blog)

    def _commit(self, blog: Blog) -> None:
        try:
            with session_scope(self.session):
                self.session.add(blog)
        except IntegrityError as exc:
            raise DuplicateSlugError() from exc
        self.session.refresh(blog)


def _now() -> datetime:
    return datetime.now(timezone.utc)
