"""
Storefront API - Health Check Route
===================================

What:  GET /health for container health checks and load balancer polling.
How:   Asks the document store for a lightweight reachability check.

Status levels:
    - healthy:   store reachable
    - unhealthy: store unreachable (listing requests would all fail)
"""

import logging
import time

from fastapi import APIRouter, Depends

from storefront import __version__
from storefront.config import settings
from storefront.database import get_store
from storefront.schemas.catalog import HealthResponse
from storefront.services.store_base import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    store_status = "connected"
    overall = "healthy"

    if not await store.health_check():
        store_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: %s store unreachable", store.name)

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        backend=settings.store_backend,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
