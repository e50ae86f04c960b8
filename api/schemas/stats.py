# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-04
# Description: stats.py
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CacheStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_embeddings: int = Field(..., alias="totalEmbeddings")
    total_products: int = Field(..., alias="totalProducts")
    last_update: Optional[str] = Field(None, alias="lastUpdate")
    cache_ready: bool = Field(..., alias="cacheReady")
    last_load_duration_ms: Optional[float] = Field(None, alias="lastLoadDurationMs")
    last_error: Optional[str] = Field(None, alias="lastError")
    memory_usage_mb: Optional[int] = Field(None, alias="memoryUsageMB")


class RefreshResponse(BaseModel):
    success: bool
    message: str
    stats: CacheStatsResponse
