"""
Space Facts API - Service Routes
=================================

What:  The root banner and the health check endpoint.
Who:   `/` is for humans poking the API; `/health` is for Docker health checks
       and load balancer probes.

Health status levels:
    - healthy:   database answers SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from spacefacts import __version__
from spacefacts.database import Database, get_database
from spacefacts.schemas.planet import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Service"])

# Initialized once when the module loads; used for uptime reporting
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="API banner")
async def index() -> str:
    return "This is the Space Facts API!"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)):
    """
    Probe the database with SELECT 1 and report aggregate status.

    Returns:
        HealthResponse; HTTP 503 when the database cannot be reached.
    """
    connected = await database.health_check()
    health = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not connected:
        return JSONResponse(status_code=503, content=health.model_dump())
    return health
