"""
Configuration - Search limits, upstream endpoints and runtime settings

Constants live at module level; anything that is a credential or an
environment-specific URL is read from the environment (.env supported)
and exposed through the Settings model.
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Per-source result caps
ENCYCLOPEDIA_LIMIT = 1
WEB_LIMIT = 5
DICTIONARY_LIMIT = 3
NEWS_LIMIT = 8
IMAGE_LIMIT = 12
VIDEO_LIMIT = 6
MUSIC_LIMIT = 8
BLOG_LIMIT = 5
# Blogs get a larger cap when they are the only kind searched
BLOG_SOLO_LIMIT = 20

# Upstream endpoints
WIKIPEDIA_URL = "https://en.wikipedia.org/api/rest_v1/page/summary"
DUCKDUCKGO_URL = "https://api.duckduckgo.com/"
DICTIONARY_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"
NEXUS_URL = "https://nexus-search.onrender.com/api"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"

# Generation defaults
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_OUTPUT_TOKENS = 768

# Auth
TOKEN_TTL_DAYS = 7
JWT_ALGORITHM = "HS256"


class Settings(BaseModel):
    """Runtime settings sourced from the environment."""

    gemini_api_key: Optional[str] = Field(None, description="Generative text API key")
    gemini_url: str = Field(GEMINI_URL, description="generateContent endpoint")
    nexus_url: str = Field(NEXUS_URL, description="News/image/video search base URL")
    nexus_api_key: Optional[str] = Field(None, description="Optional Nexus API key")
    wikipedia_url: str = WIKIPEDIA_URL
    duckduckgo_url: str = DUCKDUCKGO_URL
    dictionary_url: str = DICTIONARY_URL
    database_url: str = Field("sqlite:///./thinksearch.db", description="SQLAlchemy URL")
    jwt_secret: str = Field("dev-secret-change-me", description="Token signing secret")
    frontend_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_url=os.getenv("GEMINI_URL", GEMINI_URL),
            nexus_url=os.getenv("NEXUS_URL", NEXUS_URL),
            nexus_api_key=os.getenv("NEXUS_API_KEY") or None,
            wikipedia_url=os.getenv("WIKIPEDIA_URL", WIKIPEDIA_URL),
            duckduckgo_url=os.getenv("DUCKDUCKGO_URL", DUCKDUCKGO_URL),
            dictionary_url=os.getenv("DICTIONARY_URL", DICTIONARY_URL),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./thinksearch.db"),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change-me"),
            frontend_url=os.getenv("FRONTEND_URL") or None,
        )


@lru_cache
def get_settings() -> Settings:
    """Settings singleton, built once per process."""
    return Settings.from_env()
