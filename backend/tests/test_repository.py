"""
Bookmarks API — SQLAlchemy Repository Tests
============================================

What:  Tests for SQLAlchemyBookmarkRepository against a real (SQLite) database.
How:   The sqlite_session fixture provides an AsyncSession on an in-memory
       database; failure paths use a mocked session.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from bookmark_api.exceptions import DatabaseError
from bookmark_api.services.repository import SQLAlchemyBookmarkRepository


def _fields(n: int) -> dict:
    return {
        "title": f"Bookmark {n}",
        "url": f"https://example{n}.com",
        "rating": n % 6,
        "description": f"description {n}",
    }


class TestSQLAlchemyBookmarkRepository:

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)

        bookmark = await repo.insert(_fields(1))

        assert bookmark.id is not None
        fetched = await repo.get_by_id(bookmark.id)
        assert fetched.title == "Bookmark 1"
        assert fetched.rating == 1

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)
        assert await repo.get_by_id(12345) is None

    @pytest.mark.asyncio
    async def test_list_all_orders_by_id(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)
        for n in (1, 2, 3):
            await repo.insert(_fields(n))

        result = await repo.list_all()

        ids = [b.id for b in result]
        assert ids == sorted(ids)
        assert [b.title for b in result] == ["Bookmark 1", "Bookmark 2", "Bookmark 3"]

    @pytest.mark.asyncio
    async def test_update_touches_only_given_columns(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)
        bookmark = await repo.insert(_fields(2))

        changed = await repo.update(bookmark.id, {"title": "Renamed"})

        assert changed is True
        fetched = await repo.get_by_id(bookmark.id)
        assert fetched.title == "Renamed"
        assert fetched.url == "https://example2.com"
        assert fetched.rating == 2

    @pytest.mark.asyncio
    async def test_update_unknown_returns_false(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)
        assert await repo.update(12345, {"title": "x"}) is False

    @pytest.mark.asyncio
    async def test_delete(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)
        bookmark = await repo.insert(_fields(3))

        assert await repo.delete(bookmark.id) is True
        assert await repo.get_by_id(bookmark.id) is None
        assert await repo.delete(bookmark.id) is False

    @pytest.mark.asyncio
    async def test_deleted_id_is_not_reused(self, sqlite_session):
        repo = SQLAlchemyBookmarkRepository(sqlite_session)
        first = await repo.insert(_fields(1))
        first_id = first.id
        await repo.delete(first_id)

        second = await repo.insert(_fields(2))

        assert second.id != first_id
        assert second.id > first_id


class TestRepositoryFailures:
    """SQLAlchemy errors surface as DatabaseError with a safe message."""

    @staticmethod
    def _broken_session():
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )
        session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection lost"))
        )
        return session

    @pytest.mark.asyncio
    async def test_list_all_wraps_error(self):
        repo = SQLAlchemyBookmarkRepository(self._broken_session())

        with pytest.raises(DatabaseError) as exc_info:
            await repo.list_all()

        assert "connection lost" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_insert_wraps_error(self):
        repo = SQLAlchemyBookmarkRepository(self._broken_session())

        with pytest.raises(DatabaseError, match="Could not save the bookmark"):
            await repo.insert(_fields(1))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation, args", [
        ("get_by_id", (1,)),
        ("update", (1, {"title": "x"})),
        ("delete", (1,)),
    ])
    async def test_single_row_operations_wrap_error(self, operation, args):
        repo = SQLAlchemyBookmarkRepository(self._broken_session())

        with pytest.raises(DatabaseError) as exc_info:
            await getattr(repo, operation)(*args)

        assert exc_info.value.context["bookmark_id"] == 1
