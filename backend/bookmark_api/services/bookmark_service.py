"""
Bookmarks API — Bookmark Service (Business Logic Orchestrator)
===============================================================

What:  Applies the bookmark rules for every operation on the collection.
Why:   Keeps validation order, 404 handling and output sanitization in one
       place, independent of HTTP concerns.
How:   Composes the validation rules, a BookmarkRepository and the sanitizer.
Who:   Called by the route handlers in routes/bookmarks.py.

Orchestration Flow:
    write:  candidate ──▶ validation ──▶ repository
    read:   repository ──▶ sanitizer ──▶ BookmarkResponse

    Create:  missing field → bad rating → bad url → insert
    Update:  nothing provided → not found → bad rating → bad url → write

Design Decision:
    The repository is passed in, never looked up from a module global. The
    route layer builds one service per request via get_bookmark_service().
"""

import logging
from typing import List

from fastapi import Depends

from bookmark_api.exceptions import (
    EmptyUpdateError,
    InvalidRatingError,
    InvalidUrlError,
    MissingFieldError,
    NotFoundError,
)
from bookmark_api.models.bookmark import Bookmark
from bookmark_api.schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from bookmark_api.services import validation
from bookmark_api.services.repository import BookmarkRepository, get_bookmark_repository
from bookmark_api.services.sanitizer import sanitize

logger = logging.getLogger(__name__)


class BookmarkService:
    """
    Business logic for the bookmarks collection.

    Responsibilities:
        - list_bookmarks(): every bookmark, sanitized
        - get_bookmark(): one bookmark or NotFoundError
        - create_bookmark(): full validation, then insert
        - update_bookmark(): merge of the provided fields only
        - delete_bookmark(): removal or NotFoundError

    Error Handling Strategy:
        Rule violations raise the matching ValidationError subclass and are
        logged here, where they are detected. DatabaseError from the
        repository propagates untouched.
    """

    def __init__(self, repository: BookmarkRepository):
        self.repository = repository

    async def list_bookmarks(self) -> List[BookmarkResponse]:
        bookmarks = await self.repository.list_all()
        return [self._to_response(bookmark) for bookmark in bookmarks]

    async def get_bookmark(self, bookmark_id: int) -> BookmarkResponse:
        """
        Retrieve a single bookmark by id.

        Raises:
            NotFoundError: No bookmark with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        bookmark = await self.repository.get_by_id(bookmark_id)
        if bookmark is None:
            raise NotFoundError(resource_id=bookmark_id)
        return self._to_response(bookmark)

    async def create_bookmark(self, candidate: BookmarkCreate) -> BookmarkResponse:
        """
        Validate a full candidate and store it.

        Checks run in a fixed order and the first failure wins, so a client
        fixing errors one at a time always sees a deterministic sequence.

        Raises:
            MissingFieldError: First required field that was not provided
            InvalidRatingError: Rating outside 0..5 or not a whole number
            InvalidUrlError: URL is not an absolute http(s) URL
            DatabaseError: Insert failed
        """
        supplied = candidate.supplied()

        missing = validation.require_fields(supplied)
        if missing:
            error = MissingFieldError(missing[0])
            logger.warning(error.message)
            raise error

        self._check_rating(supplied["rating"])
        self._check_url(supplied["url"])

        fields = validation.provided_fields(supplied)
        fields["rating"] = validation.normalize_rating(fields["rating"])

        bookmark = await self.repository.insert(fields)
        logger.info("Bookmark with id %s created", bookmark.id)
        return self._to_response(bookmark)

    async def update_bookmark(self, bookmark_id: int, candidate: BookmarkUpdate) -> None:
        """
        Merge the provided fields into an existing bookmark.

        Fields that were omitted, null or blank keep their stored values;
        `rating: 0` is a real update.

        Raises:
            EmptyUpdateError: No updatable field was provided
            NotFoundError: No bookmark with that id
            InvalidRatingError / InvalidUrlError: Provided value breaks a rule
        """
        supplied = candidate.supplied()
        if not validation.require_at_least_one_updatable_field(supplied):
            logger.warning("Empty update for bookmark %s", bookmark_id)
            raise EmptyUpdateError()

        fields = validation.provided_fields(supplied)
        if await self.repository.get_by_id(bookmark_id) is None:
            raise NotFoundError(resource_id=bookmark_id)

        if "rating" in fields:
            self._check_rating(fields["rating"])
            fields["rating"] = validation.normalize_rating(fields["rating"])
        if "url" in fields:
            self._check_url(fields["url"])

        # The row may have been deleted between the lookup and the write
        if not await self.repository.update(bookmark_id, fields):
            raise NotFoundError(resource_id=bookmark_id)
        logger.info("Bookmark %s updated: %s", bookmark_id, ", ".join(fields))

    async def delete_bookmark(self, bookmark_id: int) -> None:
        if not await self.repository.delete(bookmark_id):
            raise NotFoundError(resource_id=bookmark_id)
        logger.info("Bookmark with id %s deleted", bookmark_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _check_rating(value) -> None:
        if not validation.validate_rating(value):
            logger.warning("Invalid rating: %r", value)
            raise InvalidRatingError(value)

    @staticmethod
    def _check_url(value) -> None:
        if not validation.validate_url(value):
            logger.warning("Invalid url: %r", value)
            raise InvalidUrlError(value)

    @staticmethod
    def _to_response(bookmark: Bookmark) -> BookmarkResponse:
        return BookmarkResponse(
            id=bookmark.id,
            title=sanitize(bookmark.title),
            url=bookmark.url,
            rating=bookmark.rating,
            description=sanitize(bookmark.description),
        )


# ── Dependency ────────────────────────────────────────────────────────────
def get_bookmark_service(
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> BookmarkService:
    return BookmarkService(repository)
