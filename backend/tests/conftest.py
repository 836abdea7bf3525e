"""
Bookmarks API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (fake repository, API client,
       SQLite-backed session, sample data).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── sample_bookmarks: Four valid stored bookmarks
    ├── fake_repository: In-memory BookmarkRepository preloaded with nothing
    ├── seeded_repository: fake_repository preloaded with sample_bookmarks
    ├── auth_headers: Authorization header carrying the test token
    ├── test_client: HTTPX AsyncClient talking to the app, repository swapped
    └── sqlite_session: AsyncSession on an in-memory SQLite database
"""

import os

# Override settings for testing BEFORE any bookmark_api import
# Why: settings and the engine are built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["API_TOKEN"] = "test-api-token"
os.environ["BOOKMARKS_PREFIX"] = "/api/bookmarks"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, AsyncGenerator, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bookmark_api.database import Base  # noqa: E402
from bookmark_api.models.bookmark import Bookmark  # noqa: E402
from bookmark_api.services.repository import BookmarkRepository, get_bookmark_repository  # noqa: E402

TEST_TOKEN = "test-api-token"
BOOKMARKS_URL = "/api/bookmarks"


class FakeBookmarkRepository(BookmarkRepository):
    """
    In-memory BookmarkRepository.

    Ids come from a counter that never goes backwards, matching a database
    sequence: a deleted id is not reused. `calls` records every operation so
    tests can assert that nothing reached storage.
    """

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self._next_id = 1
        for row in rows or []:
            self.rows[row["id"]] = dict(row)
            self._next_id = max(self._next_id, row["id"] + 1)

    @staticmethod
    def _to_model(row: Dict[str, Any]) -> Bookmark:
        return Bookmark(**row)

    async def list_all(self) -> List[Bookmark]:
        self.calls.append("list_all")
        return [self._to_model(self.rows[key]) for key in sorted(self.rows)]

    async def get_by_id(self, bookmark_id: int) -> Optional[Bookmark]:
        self.calls.append("get_by_id")
        row = self.rows.get(bookmark_id)
        return self._to_model(row) if row else None

    async def insert(self, fields: Dict[str, Any]) -> Bookmark:
        self.calls.append("insert")
        row = {"id": self._next_id, **fields}
        self.rows[self._next_id] = row
        self._next_id += 1
        return self._to_model(row)

    async def update(self, bookmark_id: int, fields: Dict[str, Any]) -> bool:
        self.calls.append("update")
        if bookmark_id not in self.rows:
            return False
        self.rows[bookmark_id].update(fields)
        return True

    async def delete(self, bookmark_id: int) -> bool:
        self.calls.append("delete")
        return self.rows.pop(bookmark_id, None) is not None


def make_bookmarks_array() -> List[Dict[str, Any]]:
    return [
        {
            "id": i,
            "title": f"Test Bookmark {i}",
            "url": f"http://www.testbookmark{i}.com",
            "rating": 5,
            "description": f"test bookmark {i} desc",
        }
        for i in range(1, 5)
    ]


def make_malicious_bookmark() -> Dict[str, Any]:
    """A stored bookmark whose title and description carry markup."""
    return {
        "id": 911,
        "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "url": "https://www.hackers.com",
        "rating": 1,
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
    }


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_bookmarks() -> List[Dict[str, Any]]:
    return make_bookmarks_array()


@pytest.fixture
def new_bookmark() -> Dict[str, Any]:
    """A valid create payload."""
    return {
        "title": "Test new bookmark",
        "url": "https://www.example.com/new",
        "rating": 4,
        "description": "Test new bookmark description",
    }


@pytest.fixture
def fake_repository() -> FakeBookmarkRepository:
    return FakeBookmarkRepository()


@pytest.fixture
def seeded_repository(sample_bookmarks) -> FakeBookmarkRepository:
    return FakeBookmarkRepository(sample_bookmarks)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def repository(fake_repository) -> FakeBookmarkRepository:
    """
    The repository the test_client serves from.

    Override this fixture in a test module (or request seeded_repository
    through it) to start from a different data set.
    """
    return fake_repository


@pytest_asyncio.fixture
async def test_client(repository) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.
    How:     get_bookmark_repository is overridden to return `repository`,
             so no database is touched.

    Usage:
        async def test_list(test_client, auth_headers):
            response = await test_client.get("/api/bookmarks", headers=auth_headers)
            assert response.status_code == 200
    """
    from bookmark_api.main import app

    app.dependency_overrides[get_bookmark_repository] = lambda: repository
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def sqlite_session() -> AsyncGenerator[AsyncSession, None]:
    """
    AsyncSession on a fresh in-memory SQLite database with the schema created.

    StaticPool keeps the single in-memory connection alive across the
    session's checkouts.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()
