"""
Showcase Backend — Health Check Route
======================================

What:  GET /api/health for uptime checks and the admin panel status badge.
How:   Always answers 200 while the process is up. Database reachability is
       reported as an informational field and never changes the status code.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from showcase import __version__
from showcase.database import Database
from showcase.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

# Module load time, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    database: Database = request.app.state.database
    connected = await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="Server is running",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
