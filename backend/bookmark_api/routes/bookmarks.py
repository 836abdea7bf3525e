"""
Bookmarks API — Bookmark Route Handlers
========================================

What:  The five operations on the bookmarks collection.
Why:   Thin HTTP layer: status codes, headers, and request-to-service plumbing.
How:   Each handler receives a BookmarkService built for this request and
       delegates; errors are raised by the service and formatted by the
       global exception handlers in main.py.

Routes (relative to settings.bookmarks_prefix):
    GET    ""               list all bookmarks              200
    POST   ""               create a bookmark               201 + Location
    GET    "/{bookmark_id}" fetch one bookmark              200
    DELETE "/{bookmark_id}" delete one bookmark             204
    PATCH  "/{bookmark_id}" update some fields of one       204

Every route sits behind require_api_token (router-level dependency), which
FastAPI resolves before the service dependency, so an unauthenticated
request never opens a database session.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status

from bookmark_api.auth import require_api_token
from bookmark_api.schemas.bookmark import (
    BookmarkCreate,
    BookmarkResponse,
    BookmarkUpdate,
    ErrorResponse,
)
from bookmark_api.services.bookmark_service import BookmarkService, get_bookmark_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
# No prefix here: main.py mounts the router at settings.bookmarks_prefix
router = APIRouter(
    tags=["Bookmarks"],
    dependencies=[Depends(require_api_token)],
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
)

_TEXT_400 = {
    "description": "Missing field, invalid rating or invalid url (plain text)",
    "content": {"text/plain": {"example": "Title is required"}},
}


def _empty_body(request: Request, model):
    """A request without a body is judged by the same rules as `{}`."""
    logger.debug("No body on %s %s, treating it as {}", request.method, request.url.path)
    return model()


@router.get(
    "",
    response_model=List[BookmarkResponse],
    summary="List all bookmarks",
)
async def list_bookmarks(
    service: BookmarkService = Depends(get_bookmark_service),
) -> List[BookmarkResponse]:
    return await service.list_bookmarks()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookmarkResponse,
    responses={400: _TEXT_400},
    summary="Create a bookmark",
    description=(
        "All of title, url, rating and description are required. The response "
        "carries a Location header pointing at the new bookmark."
    ),
)
async def create_bookmark(
    request: Request,
    response: Response,
    candidate: Optional[BookmarkCreate] = Body(default=None),
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """
    Create a bookmark and point the client at it.

    Location is built from the path this request actually arrived on, so
    it stays correct under whatever prefix the collection is mounted at.
    """
    if candidate is None:
        candidate = _empty_body(request, BookmarkCreate)
    bookmark = await service.create_bookmark(candidate)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{bookmark.id}"
    return bookmark


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Get a single bookmark by id",
)
async def get_bookmark(
    bookmark_id: int,
    service: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    return await service.get_bookmark(bookmark_id)


@router.delete(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Delete a bookmark",
)
async def delete_bookmark(
    bookmark_id: int,
    service: BookmarkService = Depends(get_bookmark_service),
) -> Response:
    await service.delete_bookmark(bookmark_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Empty update, invalid rating or invalid url"},
        404: {"description": "Bookmark not found", "model": ErrorResponse},
    },
    summary="Update some fields of a bookmark",
    description="Only the fields present in the body are changed.",
)
async def update_bookmark(
    bookmark_id: int,
    request: Request,
    candidate: Optional[BookmarkUpdate] = Body(default=None),
    service: BookmarkService = Depends(get_bookmark_service),
) -> Response:
    if candidate is None:
        candidate = _empty_body(request, BookmarkUpdate)
    await service.update_bookmark(bookmark_id, candidate)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
