"""
Bookmarks API — Application Package Initializer
================================================

What: Marks the `bookmark_api` directory as a Python package.
Why:  Enables module imports like `from bookmark_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │        Access Gate (auth.py)        │  ← Bearer token check, before anything else
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validation, Sanitize,   │  ← Business rules, no HTTP
    │            BookmarkService)         │
    ├─────────────────────────────────────┤
    │  Repository (Persistence Gateway)   │  ← The only code that issues SQL
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Each layer receives the one below it through FastAPI's Depends(), so
    tests can swap the repository for an in-memory fake.
"""

__version__ = "1.0.0"
