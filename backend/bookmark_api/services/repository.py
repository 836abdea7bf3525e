"""
Bookmarks API — Bookmark Repository (Persistence Gateway)
==========================================================

What:  Abstract storage contract for bookmarks plus its SQLAlchemy implementation.
Why:   BookmarkService depends on the contract only. Tests inject an in-memory
       fake; production injects SQLAlchemyBookmarkRepository bound to the
       request's session.
How:   Five async operations. Missing rows are reported as None / False,
       never as exceptions; storage failures are wrapped in DatabaseError.
Who:   Built per request by get_bookmark_repository() and handed to
       BookmarkService through FastAPI's Depends().

Contract:
    list_all()           → every bookmark, ordered by id
    get_by_id(id)        → the bookmark, or None
    insert(fields)       → the stored bookmark with its assigned id
    update(id, fields)   → True if a row was changed, False if none matched
    delete(id)           → True if a row was removed, False if none matched

    update() and delete() report the affected-row count so the service can
    answer 404 for ids that do not exist without a racy pre-check.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.database import get_db_session
from bookmark_api.exceptions import DatabaseError
from bookmark_api.models.bookmark import Bookmark

logger = logging.getLogger(__name__)


class BookmarkRepository(ABC):
    """Storage contract consumed by BookmarkService."""

    @abstractmethod
    async def list_all(self) -> List[Bookmark]:
        ...

    @abstractmethod
    async def get_by_id(self, bookmark_id: int) -> Optional[Bookmark]:
        ...

    @abstractmethod
    async def insert(self, fields: Dict[str, Any]) -> Bookmark:
        """
        Store a new bookmark.

        Args:
            fields: title, url, rating and description, already validated.

        Returns:
            The stored bookmark with `id` populated.
        """
        ...

    @abstractmethod
    async def update(self, bookmark_id: int, fields: Dict[str, Any]) -> bool:
        """Overwrite only the given columns of one bookmark."""
        ...

    @abstractmethod
    async def delete(self, bookmark_id: int) -> bool:
        ...


class SQLAlchemyBookmarkRepository(BookmarkRepository):
    """
    BookmarkRepository backed by an AsyncSession.

    Writes are flushed, not committed: get_db_session() commits once the
    request handler returns, or rolls back if it raised.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_all(self) -> List[Bookmark]:
        try:
            result = await self._session.execute(
                select(Bookmark).order_by(Bookmark.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing bookmarks: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve bookmarks. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_by_id(self, bookmark_id: int) -> Optional[Bookmark]:
        try:
            result = await self._session.execute(
                select(Bookmark).where(Bookmark.id == bookmark_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id},
            )

    async def insert(self, fields: Dict[str, Any]) -> Bookmark:
        bookmark = Bookmark(**fields)
        try:
            self._session.add(bookmark)
            await self._session.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error inserting bookmark: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the bookmark. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Bookmark %s inserted", bookmark.id)
        return bookmark

    async def update(self, bookmark_id: int, fields: Dict[str, Any]) -> bool:
        try:
            result = await self._session.execute(
                update(Bookmark)
                .where(Bookmark.id == bookmark_id)
                .values(**fields)
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not update the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id, "fields": sorted(fields)},
            )
        return result.rowcount > 0

    async def delete(self, bookmark_id: int) -> bool:
        try:
            result = await self._session.execute(
                delete(Bookmark).where(Bookmark.id == bookmark_id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting bookmark %s: %s", bookmark_id, str(e))
            raise DatabaseError(
                message="Could not delete the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id},
            )
        return result.rowcount > 0


# ── Dependency ────────────────────────────────────────────────────────────
def get_bookmark_repository(
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkRepository:
    """One repository per request, bound to that request's session."""
    return SQLAlchemyBookmarkRepository(db)
