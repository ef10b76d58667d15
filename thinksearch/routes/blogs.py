"""
Blog Routes

- GET    /api/blogs         : Published posts (limit, offset, featured, search)
- GET    /api/blogs/my      : Current user's posts (status=all|published|drafts)
- GET    /api/blogs/{slug}  : One published post, counts a view
- POST   /api/blogs         : Create post (auth)
- PUT    /api/blogs/{id}    : Partial update, owner only (auth)
- DELETE /api/blogs/{id}    : Delete, owner only (auth)
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from thinksearch.db.database import get_session
from thinksearch.models.schema import BlogCreate, BlogOut, BlogSummary, BlogUpdate, MessageResponse
from thinksearch.services.auth_service import require_user_id
from thinksearch.services.blog_service import BlogService, DuplicateSlugError

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


@router.get("", response_model=List[BlogSummary])
def list_blogs(
    limit: int = Query(12, ge=1, le=100),
    offset: int = Query(0, ge=0),
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session),
):
    """Published posts, newest first."""
    return BlogService(session).list_published(limit=limit, offset=offset, featured=bool(featured), search=search)


@router.get("/my", response_model=List[BlogSummary])
def my_blogs(
    status: Literal["all", "published", "drafts"] = "all",
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    return BlogService(session).list_for_user(user_id, status=status)


@router.get("/{slug}", response_model=BlogOut)
def get_blog(slug: str, session: Session = Depends(get_session)):
    blog = BlogService(session).get_published_by_slug(slug)
    if blog is None:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


@router.post("", response_model=BlogSummary, status_code=201)
def create_blog(
    data: BlogCreate,
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    try:
        return BlogService(session).create(user_id, data)
    except DuplicateSlugError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/{blog_id}", response_model=BlogSummary)
def update_blog(
    blog_id: str,
    data: BlogUpdate,
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    service = BlogService(session)
    blog = service.get_owned(blog_id, user_id)
    if blog is None:
        raise HTTPException(status_code=404, detail="Blog not found or unauthorized")
    try:
        return service.update(blog, data)
    except DuplicateSlugError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: str,
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session),
):
    service = BlogService(session)
    blog = service.get_owned(blog_id, user_id)
    if blog is None:
        raise HTTPException(status_code=404, detail="Blog not found or unauthorized")
    service.delete(blog)
    return MessageResponse(message="Blog deleted successfully")
