# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict, Literal, Optional

from api.schemas.stats import CacheStatsResponse


class HealthResponse(CacheStatsResponse):
    status: Literal["ok", "initializing"]
    # Only filled for ?deep=true
    connections: Optional[Dict[str, bool]] = None
