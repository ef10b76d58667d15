"""
Search History Service - Per-user record of executed searches
"""

from typing import List

import logfire
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thinksearch.db.database import session_scope
from thinksearch.db.models import SearchHistory

HISTORY_LIMIT = 10


class SearchHistoryService:
    def __init__(self, session: Session):
        self.session = session

    def record(self, user_id: str, query: str, search_type: str, results_count: int) -> None:
        """Store one search; a storage failure is logged, not raised."""
        entry = SearchHistory(
            user_id=user_id,
            query=query,
            search_type=search_type,
            results_count=results_count,
        )
        try:
            with session_scope(self.session):
                self.session.add(entry)
        except SQLAlchemyError as exc:
            logfire.warn("Could not save search history: {error}", error=str(exc), user_id=user_id)

    def recent(self, user_id: str, limit: int = HISTORY_LIMIT) -> List[SearchHistory]:
        statement = (
            select(SearchHistory)
            .where(SearchHistory.user_id == user_id)
            .order_by(SearchHistory.created_at.desc())
            .limit(limit)
        )
        return list(self.session.scalars(statement))
