"""
Bookmarks API — Custom Exception Hierarchy
===========================================

What:  Defines application-specific exceptions for each error scenario.
Why:   Services raise typed exceptions; global handlers in main.py turn them
       into the exact status code and body each client-facing case needs.
How:   Each exception class carries a message and optional context dict.
       The message is safe to show to clients; the context is logged only.
Who:   Raised by services, the repository and the access gate.
When:  During request processing.

Exception Hierarchy:
    BookmarkAPIError (base)
    ├── ValidationError          → 400 Bad Request
    │   ├── MissingFieldError    → 400, plain text "<Field> is required"
    │   ├── InvalidRatingError   → 400, plain text
    │   ├── InvalidUrlError      → 400, plain text
    │   └── EmptyUpdateError     → 400, JSON {"error": {"message": ...}}
    ├── NotFoundError            → 404, JSON {"error": {"message": ...}}
    ├── UnauthorizedError        → 401, JSON {"error": {"message": ...}}
    └── DatabaseError            → 500, generic message
"""

from typing import Any, Dict, Optional


# Display names used in "<Field> is required" messages
FIELD_LABELS = {
    "title": "Title",
    "url": "URL",
    "rating": "Rating",
    "description": "Description",
}


class BookmarkAPIError(Exception):
    """
    Base exception for all Bookmarks API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookmarkAPIError):
    """
    Raised when client input fails a business rule.

    HTTP: 400 Bad Request

    Shape errors (unknown keys, a list where a string belongs) never get
    here; FastAPI rejects them with 422 while parsing the candidate model.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingFieldError(ValidationError):
    """A required field was absent from a create payload."""

    def __init__(self, field: str):
        label = FIELD_LABELS.get(field, field)
        super().__init__(message=f"{label} is required", field=field)


class InvalidRatingError(ValidationError):
    """Rating is not an integer in [0, 5]."""

    def __init__(self, value: Any):
        super().__init__(
            message="Rating must be a number between 0 and 5.",
            field="rating",
            context={"value": repr(value)},
        )


class InvalidUrlError(ValidationError):
    """URL is not an absolute http(s) URL."""

    def __init__(self, value: Any):
        super().__init__(
            message="url must be a valid URL",
            field="url",
            context={"value": repr(value)},
        )


class EmptyUpdateError(ValidationError):
    """
    A partial update named none of the updatable fields.

    Unlike its siblings this one answers with a JSON error envelope, since
    the message lists the fields the client can send.
    """

    def __init__(self):
        super().__init__(
            message=(
                "Request body must contain either 'title', 'url', 'rating' or 'description'"
            ),
        )


class NotFoundError(BookmarkAPIError):
    """
    Raised when a requested bookmark does not exist.

    HTTP: 404 Not Found

    The repository returns None / False for missing rows; the service
    converts that into this exception so routes stay free of status logic.
    """

    def __init__(
        self,
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message="Bookmark doesn't exist", context=ctx)


class UnauthorizedError(BookmarkAPIError):
    """
    Raised by the access gate when the bearer token is missing or wrong.

    HTTP: 401 Unauthorized. The response never says which of the two it was.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Unauthorized request", context=context)


class DatabaseError(BookmarkAPIError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The SQL error
        is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
