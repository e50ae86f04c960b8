# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-04
# Description: search router
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_search_orchestrator
from api.schemas.errors import ErrorResponse
from api.schemas.search import SearchRequest, SearchResponse
from services.SearchOrchestrator import SearchOrchestrator
from utility.errors import ProductSearchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


@router.post(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def post_search(
    req: SearchRequest,
    svc: SearchOrchestrator = Depends(get_search_orchestrator),
) -> SearchResponse:
    query_text = (req.query or "").strip()
    logger.info("POST /api/search (start) query_len=%d top_k=%s", len(query_text), req.top_k)

    try:
        out: Dict[str, Any] = svc.search(
            query_text,
            top_k=req.top_k,
            threshold=req.threshold,
        )
    except ProductSearchError:
        raise
    except Exception as e:
        logger.exception("Search failed: %s", e)
        raise ProductSearchError(f"Search failed: {e}") from e

    logger.info("POST /api/search (done) results=%d", out["metadata"]["totalResults"])
    return SearchResponse(query=query_text, **out)
