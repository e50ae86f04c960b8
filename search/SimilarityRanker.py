# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: SimilarityRanker
# -----------------------------------------------------------------------------
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from cache.Snapshot import Snapshot
from utility.errors import DimensionMismatch

RankedHit = Tuple[str, float]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (|a| * |b|). Returns nan when either vector has zero norm.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise DimensionMismatch(va.size, vb.size)

    denominator = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denominator == 0.0:
        return float("nan")
    return float(np.dot(va, vb) / denominator)


def score_all(query_vector: Sequence[float], snapshot: Snapshot) -> np.ndarray:
    """Cosine score of the query against every scorable vector, in snapshot order."""
    if not snapshot.scored_ids:
        return np.empty(0, dtype=np.float64)

    query = np.asarray(query_vector, dtype=np.float64)
    if query.ndim != 1 or query.size != snapshot.dimension:
        raise DimensionMismatch(snapshot.dimension, query.size)

    with np.errstate(divide="ignore", invalid="ignore"):
        return (snapshot.matrix @ query) / (snapshot.norms * np.linalg.norm(query))


def rank(
        query_vector: Sequence[float],
        snapshot: Snapshot,
        top_k: int,
        threshold: float,
        keep: Optional[Callable[[str], bool]] = None,
) -> List[RankedHit]:
    """
    Rank cached items by cosine similarity to query_vector.

    Non-finite scores (zero-norm vectors) never match. Sorting is stable, so
    equal scores keep load order. Threshold and `keep` are applied before
    truncating to top_k.
    """
    if top_k <= 0:
        return []

    scores = score_all(query_vector, snapshot)
    if scores.size == 0:
        return []

    with np.errstate(invalid="ignore"):
        candidates = np.flatnonzero(np.isfinite(scores) & (scores >= threshold))
    order = candidates[np.argsort(-scores[candidates], kind="stable")]

    hits: List[RankedHit] = []
    for idx in order:
        item_id = snapshot.scored_ids[idx]
        if keep is not None and not keep(item_id):
            continue
        hits.append((item_id, float(scores[idx])))
        if len(hits) == top_k:
            break
    return hits
