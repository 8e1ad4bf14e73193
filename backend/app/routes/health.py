"""
Agora Backend — Health Check Routes
=====================================

What:  Liveness banner at `/` and a dependency-aware check at `/health`.
Who:   Called by Docker health checks, load balancers and monitoring.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)

Neither path is rate-limited or access-logged.
"""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from app.database import engine
from app.schemas.common import ApiResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_model=ApiResponse[None], summary="Service banner")
async def root() -> ApiResponse[None]:
    return ApiResponse(message="Agora API is running")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Runs SELECT 1 against the database and reports uptime.",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
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
