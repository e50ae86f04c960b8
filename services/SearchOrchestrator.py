# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: SearchOrchestrator.py
# -----------------------------------------------------------------------------
import logging
import math
import numbers
import time
from typing import Any, Callable, Dict, List, Sequence

from cache.Snapshot import Snapshot, SnapshotHandle
from search.SimilarityRanker import RankedHit, rank
from utility.errors import EmbeddingFailure, EmptyQuery, NotReady
from utility.logging_utils import get_class_logger

EmbedFn = Callable[[str], Sequence[float]]


def match_score(score: float) -> int:
    """score in [-1, 1] -> integer percentage in [0, 100], rounding halves up."""
    return min(100, max(0, int(math.floor(score * 100 + 0.5))))


def _elapsed_ms(since: float) -> float:
    return round((time.perf_counter() - since) * 1000, 2)


class SearchOrchestrator:
    """
    Search Service:
        - validates the query text
        - captures the published snapshot once
        - embeds the query (single call)
        - ranks cached vectors and joins hits with product records
        - reports per-phase timings
    """

    def __init__(
        self,
        *,
        handle: SnapshotHandle,
        embed: EmbedFn,
        default_top_k: int = 20,
        default_threshold: float = 0.3,
        logger: logging.Logger | None = None,
    ) -> None:
        self.handle = handle
        self.embed = embed
        self.default_top_k = default_top_k
        self.default_threshold = default_threshold
        self.logger = logger or get_class_logger(self.__class__)

    def search(
        self,
        query_text: str,
        top_k: int | None = None,
        threshold: float | None = None,
    ) -> Dict[str, Any]:
        q = (query_text or "").strip() if isinstance(query_text, str) else ""
        if not q:
            raise EmptyQuery("query must not be empty")

        top_k = self.default_top_k if top_k is None else top_k
        threshold = self.default_threshold if threshold is None else threshold

        # One reference for the whole search, whatever a concurrent reload publishes
        snapshot = self.handle.current()
        if snapshot is None:
            raise NotReady("no cache snapshot has been published yet")

        start = time.perf_counter()
        query_vector = self._embed_query(q)
        embedding_time = _elapsed_ms(start)

        rank_start = time.perf_counter()
        hits = rank(
            query_vector,
            snapshot,
            top_k=top_k,
            threshold=threshold,
            keep=snapshot.products.__contains__,
        )
        search_time = _elapsed_ms(rank_start)

        results = self._join(hits, snapshot)
        total_time = _elapsed_ms(start)

        self.logger.info(
            "search: query='%s' embedding=%.2fms ranking=%.2fms total=%.2fms results=%d",
            q[:120],
            embedding_time,
            search_time,
            total_time,
            len(results),
        )

        return {
            "results": results,
            "metadata": {
                "totalTime": total_time,
                "embeddingTime": embedding_time,
                "searchTime": search_time,
                "totalResults": len(results),
            },
        }

    def _embed_query(self, q: str) -> List[float]:
        try:
            vector = self.embed(q)
        except EmbeddingFailure:
            raise
        except Exception as e:
            self.logger.error("search: embedding call failed: %s", e)
            raise EmbeddingFailure(f"Embedding provider error: {e}") from e

        if hasattr(vector, "tolist"):
            vector = vector.tolist()
        if isinstance(vector, (str, bytes)) or not isinstance(vector, Sequence) or not vector:
            raise EmbeddingFailure("Embedding provider returned a malformed vector")
        if not all(
            isinstance(x, numbers.Real) and not isinstance(x, bool) and math.isfinite(x)
            for x in vector
        ):
            raise EmbeddingFailure("Embedding vector contains non-numeric values")
        return list(vector)

    @staticmethod
    def _join(hits: List[RankedHit], snapshot: Snapshot) -> List[Dict[str, Any]]:
        results: List[Dict[str, Any]] = []
        for item_id, score in hits:
            product = snapshot.products.get(item_id)
            if product is None:
                continue
            pct = match_score(score)
            results.append({
                **product.to_result_fields(),
                "matchScore": pct,
                "matchPercentage": f"{pct}%",
            })
        return results
