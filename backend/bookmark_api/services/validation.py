"""
Bookmarks API — Validation Rules
=================================

What:  Pure checks applied to bookmark candidates before they are written.
Why:   Keeping the rules free of I/O and exceptions makes them trivial to test
       and lets the service pick the exact user-facing error for each case.
How:   Every function takes plain values (or the mapping returned by
       BookmarkCandidate.supplied()) and returns data; none of them raise.
Who:   Called by BookmarkService on create and update.

Presence rule (same for create and update):
    A field is provided when its key was sent, its value is not null and,
    for the text fields, the value is not blank. So `"rating": 0` is
    provided while `"title": ""` is not.
"""

import math
from typing import Any, Dict, List, Mapping

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

# Checked in this order; the first missing one is reported
REQUIRED_FIELDS = ("title", "url", "rating", "description")
UPDATABLE_FIELDS = REQUIRED_FIELDS
TEXT_FIELDS = {"title", "url", "description"}

MIN_RATING = 0
MAX_RATING = 5

_http_url = TypeAdapter(HttpUrl)


def is_provided(field: str, value: Any) -> bool:
    if value is None:
        return False
    if field in TEXT_FIELDS and isinstance(value, str) and not value.strip():
        return False
    return True


def provided_fields(candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Subset of the updatable fields that count as provided, in field order."""
    return {
        field: candidate[field]
        for field in UPDATABLE_FIELDS
        if field in candidate and is_provided(field, candidate[field])
    }


def require_fields(candidate: Mapping[str, Any]) -> List[str]:
    """
    Names of required fields that are not provided.

    Returns an empty list when the candidate is complete.
    """
    return [
        field for field in REQUIRED_FIELDS
        if not is_provided(field, candidate.get(field))
    ]


def require_at_least_one_updatable_field(candidate: Mapping[str, Any]) -> bool:
    return bool(provided_fields(candidate))


def validate_rating(value: Any) -> bool:
    """
    True iff value is a whole number between 0 and 5 inclusive.

    JSON has a single number type, so 3.0 counts as the integer 3. Booleans
    and numeric strings do not count.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return False
    elif not isinstance(value, int):
        return False
    return MIN_RATING <= value <= MAX_RATING


def normalize_rating(value: Any) -> int:
    """Integer form of a rating that already passed validate_rating()."""
    return int(value)


def validate_url(value: Any) -> bool:
    """True iff value is an absolute http(s) URL with a host."""
    if not isinstance(value, str) or value != value.strip():
        return False
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        return False
    return True
