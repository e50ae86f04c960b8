# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-04
# Description: search.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Blank queries are rejected by the service with 400, not by validation
    query: Optional[str] = None
    top_k: Optional[int] = Field(None, alias="topK", ge=1, le=1000)
    threshold: Optional[float] = Field(None, ge=-1.0, le=1.0)


class SearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    price: float = 0.0
    sku: str = ""
    stock_quantity: int = Field(0, alias="stockQuantity")
    image_url: str = Field("", alias="imageUrl")
    description: str = ""
    match_score: int = Field(..., alias="matchScore")
    match_percentage: str = Field(..., alias="matchPercentage")


class SearchMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_time: float = Field(..., alias="totalTime")
    embedding_time: float = Field(..., alias="embeddingTime")
    search_time: float = Field(..., alias="searchTime")
    total_results: int = Field(..., alias="totalResults")


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResult]
    metadata: SearchMetadata
