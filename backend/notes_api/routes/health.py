"""
Notes API — Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 on a pooled connection and reports the result.

Status levels:
    - healthy:   Store reachable (HTTP 200)
    - unhealthy: Store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.database import PersistenceGateway, get_gateway
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    gateway: PersistenceGateway = Depends(get_gateway),
):
    connected = await gateway.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if connected else 503,
        content=body.model_dump(),
    )
