# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from typing import Callable, Dict

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_cache_coordinator, get_connection_checks
from api.schemas.health import HealthResponse
from cache.CacheCoordinator import CacheCoordinator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health_check(
    deep: bool = Query(False, description="Also check Firestore and the embedding provider"),
    coordinator: CacheCoordinator = Depends(get_cache_coordinator),
    checks: Dict[str, Callable[[], bool]] = Depends(get_connection_checks),
) -> HealthResponse:
    stats = coordinator.stats()
    status = "ok" if stats["cacheReady"] else "initializing"

    connections = None
    if deep:
        connections = {name: bool(check()) for name, check in checks.items()}
        logger.info("GET /health deep checks: %s", connections)

    logger.debug("GET /health status=%s", status)
    return HealthResponse(status=status, connections=connections, **stats)
