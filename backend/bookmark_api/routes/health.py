"""
Bookmarks API — Health Check Route
===================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   A process that cannot reach its database cannot serve bookmarks;
       load balancers need to know that.
How:   Runs SELECT 1 against the engine and reports the outcome.
Who:   Docker health checks, load balancers, monitoring systems.

Not behind the access gate: probes carry no credentials, and the response
reveals nothing about stored bookmarks.
"""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text

from bookmark_api import __version__
from bookmark_api.database import engine
from bookmark_api.schemas.bookmark import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level so uptime counts from first import
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Returns:
        HealthResponse; HTTP 503 when the database check fails.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
