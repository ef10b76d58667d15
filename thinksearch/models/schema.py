"""
Pydantic Schemas - API Request/Response Models

Schema definitions for the non-search part of the application.

Schema Categories:
- Auth: Sign-up / sign-in requests and the user payload
- Blogs: Create, update and read models for blog posts
- AI: Generative text proxy
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from thinksearch.config import DEFAULT_MAX_OUTPUT_TOKENS, DEFAULT_TEMPERATURE


# ============================================================================
# AUTH SCHEMAS
# ============================================================================

class SignUpRequest(BaseModel):
    """API request to create an account."""

    email: str = Field(..., description="Login email", min_length=3, max_length=255)
    password: str = Field(..., description="Plain password", min_length=6)
    display_name: Optional[str] = Field(None, alias="displayName", max_length=255)
    username: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, email: str) -> str:
        email = email.strip().lower()
        if "@" not in email:
            raise ValueError("email must be a valid address")
        return email


class SignInRequest(BaseModel):
    """API request to sign in."""

    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Plain password")


class UserOut(BaseModel):
    """Public user payload (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None
    username: Optional[str] = None


class AuthResponse(BaseModel):
    """Signed-in user plus bearer token."""

    user: UserOut
    token: str


class MeResponse(BaseModel):
    user: UserOut


# ============================================================================
# BLOG SCHEMAS
# ============================================================================

class BlogCreate(BaseModel):
    """API request for creating a blog post."""

    title: str = Field(..., description="Post title", max_length=500)
    content: str = Field(..., description="Post body")
    excerpt: Optional[str] = Field(None, description="Short teaser")
    slug: str = Field(..., description="URL slug, unique", min_length=1, max_length=500)
    tags: List[str] = Field(default_factory=list)
    cover_image_url: Optional[str] = None
    reading_time: int = Field(0, ge=0, description="Minutes")
    is_published: bool = False

    @field_validator("title", "content")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Title and content are required")
        return value.strip()


class BlogUpdate(BaseModel):
    """Partial update; only fields that are sent get written."""

    title: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    slug: Optional[str] = Field(None, min_length=1, max_length=500)
    tags: Optional[List[str]] = None
    cover_image_url: Optional[str] = None
    reading_time: Optional[int] = Field(None, ge=0)
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None


class BlogSummary(BaseModel):
    """Blog post as listed by the API (no body)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    excerpt: Optional[str] = None
    slug: str
    tags: List[str] = Field(default_factory=list)
    is_published: bool
    is_featured: bool
    view_count: int
    like_count: int
    comment_count: int
    reading_time: int
    cover_image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class BlogOut(BlogSummary):
    """Single blog post including its body."""

    content: str


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# AI PROXY SCHEMAS
# ============================================================================

class GenerateRequest(BaseModel):
    """Prompt forwarded to the generative text service."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = Field(None, description="Prompt text")
    temperature: float = Field(DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_output_tokens: int = Field(DEFAULT_MAX_OUTPUT_TOKENS, alias="maxOutputTokens", ge=1)


class GenerateResponse(BaseModel):
    text: str
