"""
Poker Study Backend — Health Check Route
=========================================

What:  GET /health for container health checks and load balancers.
How:   Runs `SELECT 1` against the database. The service is "healthy" only
       when that succeeds; otherwise it answers 503 so traffic is routed away.
"""

import logging
import time

from fastapi import APIRouter, Response, status

from pokerstudy import __version__
from pokerstudy.database import ping_database
from pokerstudy.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"
    try:
        await ping_database()
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
