"""
Employee API - Root & Health Check Routes
==========================================

What:  GET / (plain-text liveness line) and GET /health (dependency check).
Why:   Container health checks and load balancers need a cheap probe, and a
       human pointing a browser at the server wants to see that it is up.
How:   /health pings MongoDB; the service is only "Healthy" if the database
       answers, because every other route depends on it.

Status levels:
    - Healthy:    MongoDB reachable (HTTP 200)
    - Unhealthy:  MongoDB unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse

from employee_api import __version__
from employee_api.database import check_db_connection
from employee_api.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness line",
)
async def root() -> str:
    return "MongoDB, FastAPI, and Python are working!"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "MongoDB unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Check the health of the service and its database.

    Check details:
        Database: `ping` admin command (essentially free for the server)
    """
    if await check_db_connection():
        db_status = "connected"
        overall = "Healthy"
    else:
        db_status = "disconnected"
        overall = "Unhealthy"
        response.status_code = 503
        logger.warning("Health check: MongoDB unreachable")

    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
