"""
Main Application - Think Search

Single entry point for the FastAPI application: a blogging platform with
multi-source search and AI summaries.

Architecture:
1. User submits a query via POST /api/search
2. SearchAggregator asks the generative service to explain the term
3. Source adapters (encyclopedia, web, dictionary, news, images, videos,
   music, blogs) are queried and their records normalized and merged
4. The merged corpus is summarized into a narrative
5. Response returned to user; signed-in users get a search history entry

Other surfaces: /api/auth (accounts), /api/blogs (posts), /api/ai/generate
(generative text proxy).
"""

import asyncio
from contextlib import asynccontextmanager
from typing import List, Optional, Set

import logfire
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from thinksearch.config import get_settings
from thinksearch.db.database import SessionLocal, get_session, init_db
from thinksearch.errors import GenerationError
from thinksearch.models.schema import GenerateRequest, GenerateResponse
from thinksearch.models.search_schemas import AggregationRequest, AggregationResponse, SearchHistoryEntry, SearchKind
from thinksearch.routes import auth, blogs
from thinksearch.services.auth_service import get_current_user_id, require_user_id
from thinksearch.services.history_service import SearchHistoryService
from thinksearch.services.search_aggregator import SOURCE_ORDER, SearchAggregator
from thinksearch.tools.gemini import GeminiClient, joined_text

# Configure Logfire for tracing (exports only when a token is present)
logfire.configure(send_to_logfire="if-token-present", service_name="thinksearch")
logfire.instrument_httpx()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI
app = FastAPI(
    title="Think Search",
    description="Blogging platform with multi-source search and AI summaries",
    version="1.0.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
logfire.instrument_fastapi(app)

frontend_url = get_settings().frontend_url
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_url] if frontend_url else [],
    allow_origin_regex=None if frontend_url else r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(blogs.router)


def get_aggregator() -> SearchAggregator:
    """A fresh aggregator per request; no state is shared between searches."""
    return SearchAggregator.from_settings(get_settings(), session_factory=SessionLocal)


def get_gemini() -> GeminiClient:
    settings = get_settings()
    return GeminiClient(settings.gemini_api_key, url=settings.gemini_url)


@app.get("/")
async def root():
    """Health check and API information."""
    return {
        "status": "active",
        "service": "Think Search",
        "version": "1.0.0",
        "endpoints": {
            "search": "/api/search",
            "search_history": "/api/search/history",
            "generate": "/api/ai/generate",
            "auth": "/api/auth",
            "blogs": "/api/blogs",
        },
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/search", response_model=AggregationResponse)
async def search(
    request: AggregationRequest,
    aggregator: SearchAggregator = Depends(get_aggregator),
    user_id: Optional[str] = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """Search every source for a query and summarize the results.

    An empty query returns an empty response. Source failures only remove
    that source's results; this endpoint does not fail because of them.
    """
    response = await aggregator.aggregate(request.query, request.requested_kinds())

    if user_id and request.query.strip():
        await asyncio.to_thread(
            SearchHistoryService(session).record,
            user_id=user_id,
            query=request.query.strip(),
            search_type=history_search_type(request.requested_kinds()),
            results_count=len(response.results),
        )

    return response


def history_search_type(kinds: Optional[Set[SearchKind]]) -> str:
    """'all', or the requested source kinds comma-joined."""
    if kinds is None or kinds >= set(SOURCE_ORDER):
        return "all"
    return ",".join(sorted(kind.value for kind in kinds))


@app.get("/api/search/history", response_model=List[SearchHistoryEntry])
def search_history(user_id: str = Depends(require_user_id), session: Session = Depends(get_session)):
    """Ten most recent searches of the signed-in user."""
    return SearchHistoryService(session).recent(user_id)


@app.post("/api/ai/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest, gemini: GeminiClient = Depends(get_gemini)):
    """Forward a prompt to the generative text service and return its text."""
    if not request.prompt or not request.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required.")

    try:
        payload = await gemini.generate(
            request.prompt,
            temperature=request.temperature,
            max_output_tokens=request.max_output_tokens,
        )
    except GenerationError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    except Exception as exc:
        logfire.exception("Gemini proxy error: {error}", error=str(exc))
        raise HTTPException(status_code=500, detail="Failed to generate AI output.") from exc

    text = joined_text(payload)
    if not text:
        raise HTTPException(status_code=502, detail="Gemini response was empty.")

    return GenerateResponse(text=text)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
