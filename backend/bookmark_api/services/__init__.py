# Services package init
"""
Bookmarks API — Services Layer
===============================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - validation: pure field rules (presence, rating range, URL shape)
    - sanitizer: output-time markup cleaning for title and description
    - repository: BookmarkRepository contract + SQLAlchemy implementation
    - bookmark_service: BookmarkService, orchestrating the three above

Services receive their collaborators through FastAPI's Depends(), which is
what lets tests run them against an in-memory repository.
"""
