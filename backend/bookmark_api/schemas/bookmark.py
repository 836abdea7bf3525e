"""
Bookmarks API — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract for the bookmarks collection.
Why:   Request bodies become explicit typed candidates the moment they are
       parsed; nothing downstream touches the raw JSON.
How:   FastAPI validates request bodies against the candidate models,
       serializes responses through BookmarkResponse, and generates the
       OpenAPI docs from both.

Candidate design:
    Every candidate field is optional at the schema level. Which fields are
    required is a business rule (create needs all four, update needs at least
    one), and it must answer with 400 and a specific message, not FastAPI's
    generic 422. The schema only guarantees shape:

    - extra="forbid": unknown keys (including `id`) are rejected with 422
    - strict text fields: `"title": 5` is rejected with 422
    - `rating` accepts any JSON scalar so that `"rating": "five"` or `4.5`
      reaches the rating rule and gets its 400 message
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

# Any JSON scalar. Order matters: bool before int, since bool is an int subclass.
JsonScalar = Union[StrictBool, StrictInt, StrictFloat, StrictStr]


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class BookmarkCandidate(BaseModel):
    """Shared shape of create and update payloads."""

    title: Optional[StrictStr] = Field(default=None, description="Display title")
    url: Optional[StrictStr] = Field(default=None, description="Absolute http(s) URL")
    rating: Optional[JsonScalar] = Field(default=None, description="Integer from 0 to 5")
    description: Optional[StrictStr] = Field(default=None, description="Free-text notes")

    model_config = ConfigDict(extra="forbid")

    def supplied(self) -> Dict[str, Any]:
        """
        Fields the client actually sent, explicit nulls included.

        Omitted keys are absent from the result, which is what lets the
        validation layer tell "not sent" apart from "sent as 0".
        """
        return self.model_dump(exclude_unset=True)


class BookmarkCreate(BookmarkCandidate):
    """
    Body of POST on the collection.

    All four fields must be provided; checked by the validation layer.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "title": "Python docs",
                "url": "https://docs.python.org/3/",
                "rating": 5,
                "description": "The <strong>official</strong> reference",
            }
        },
    )


class BookmarkUpdate(BookmarkCandidate):
    """
    Body of PATCH on a single bookmark.

    Any non-empty subset of the four fields; the rest keep their stored values.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"rating": 4}},
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class BookmarkResponse(BaseModel):
    """
    What:  Representation of a stored bookmark.
    Who:   Returned by list, get and create.

    `title` and `description` have already been passed through the
    sanitizer; `id`, `url` and `rating` are returned as stored.
    """
    id: int = Field(description="Bookmark identifier")
    title: str = Field(description="Sanitized title")
    url: str = Field(description="Stored URL")
    rating: int = Field(description="Rating from 0 to 5")
    description: str = Field(description="Sanitized description")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class ErrorResponse(BaseModel):
    """
    JSON error envelope: {"error": {"message": "..."}}

    Used for 401, 404, the empty-update 400 and 5xx responses. The other
    400s (missing field, bad rating, bad url) answer in plain text.
    """
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
