# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: cache router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_cache_coordinator
from api.schemas.errors import ErrorResponse
from api.schemas.stats import CacheStatsResponse, RefreshResponse
from cache.CacheCoordinator import CacheCoordinator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["cache"])


@router.post(
    "/refresh-cache",
    response_model=RefreshResponse,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def post_refresh_cache(
    coordinator: CacheCoordinator = Depends(get_cache_coordinator),
) -> RefreshResponse:
    logger.info("POST /api/refresh-cache (start)")

    # RefreshFailure / ReloadInProgress are translated by the app exception handlers
    coordinator.refresh()

    logger.info("POST /api/refresh-cache (done)")
    return RefreshResponse(
        success=True,
        message="Cache refreshed successfully",
        stats=CacheStatsResponse(**coordinator.stats()),
    )


@router.get("/stats", response_model=CacheStatsResponse)
def get_stats(
    coordinator: CacheCoordinator = Depends(get_cache_coordinator),
) -> CacheStatsResponse:
    return CacheStatsResponse(**coordinator.stats())
