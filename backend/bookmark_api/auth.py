"""
Bookmarks API — Access Gate
============================

What:  FastAPI dependency that rejects requests without the configured bearer token.
Why:   Every bookmark route is private; unauthenticated callers must learn
       nothing about the collection, including whether an id exists.
How:   HTTPBearer extracts `Authorization: Bearer <token>`; the token is
       compared in constant time with settings.api_token.
Who:   Attached to the bookmarks router as a router-level dependency, so it
       is resolved before the repository dependency and the route body.
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookmark_api.config import settings
from bookmark_api.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our 401 envelope, not
# FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


async def require_api_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> None:
    """
    Raises:
        UnauthorizedError: Header missing, not a bearer token, or wrong token.
            Also raised for every request when API_TOKEN is unset.
    """
    expected = settings.api_token
    if not expected or credentials is None or not hmac.compare_digest(
        credentials.credentials.encode(), expected.encode()
    ):
        logger.warning(
            "Unauthorized request to %s %s", request.method, request.url.path
        )
        raise UnauthorizedError(context={"path": request.url.path})
