"""
Blog Backend - Health Check Route
===================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the store with SELECT 1 and reports the result.
Who:   Called by container health checks and load balancers.

Status levels:
    - healthy:   store reachable
    - unhealthy: store unreachable (still HTTP 200; the body carries the state)
"""

import logging

from fastapi import APIRouter, Depends

from app import __version__
from app.dependencies import get_store
from app.schemas.blog import HealthResponse
from app.services.store import BlogStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: BlogStore = Depends(get_store)) -> HealthResponse:
    if await store.ping():
        return HealthResponse(status="healthy", version=__version__, database="connected")

    logger.warning("Health check: database unreachable")
    return HealthResponse(status="unhealthy", version=__version__, database="disconnected")
