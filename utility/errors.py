# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: errors.py
# -----------------------------------------------------------------------------
from typing import Optional


class ProductSearchError(Exception):
    """Base class for every error the search service reports."""

    # HTTP translation used by api/main.py exception handlers
    status_code: int = 500
    error: str = "Internal server error"


class LoadFailure(ProductSearchError):
    """A count or page fetch against the document source failed."""

    error = "Cache load failed"

    def __init__(self, collection: str, message: str = "") -> None:
        self.collection = collection
        super().__init__(message or f"Failed to load collection '{collection}'")


class InitialLoadFailure(LoadFailure):
    """First load failed and there is no snapshot to fall back to."""


class RefreshFailure(LoadFailure):
    """A later reload failed; the previous snapshot keeps serving."""


class ReloadInProgress(ProductSearchError):
    status_code = 409
    error = "Cache refresh already in progress"


class EmptyQuery(ProductSearchError):
    status_code = 400
    error = "Query is required"


class InvalidRequest(ProductSearchError):
    """Request body failed validation (bad topK, threshold, ...)."""

    status_code = 422
    error = "Invalid request"


class EmbeddingFailure(ProductSearchError):
    error = "Query embedding failed"


class NotReady(ProductSearchError):
    status_code = 503
    error = "Cache is not ready yet, try again in a few seconds"


class DimensionMismatch(ProductSearchError):
    error = "Vector dimension mismatch"

    def __init__(self, expected: int, actual: int, record_id: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        self.record_id = record_id
        where = f" (record '{record_id}')" if record_id else ""
        super().__init__(f"Expected vector of length {expected}, got {actual}{where}")
