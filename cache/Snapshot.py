# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Snapshot
# -----------------------------------------------------------------------------
from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

import numpy as np

from catalog.ProductRecord import ProductRecord
from embedding.EmbeddingRecord import EmbeddingRecord
from utility.errors import DimensionMismatch


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    One immutable generation of the cache: embeddings (in load order),
    products by id and the load timestamp.

    The scoring matrix is built once here so that each search only does a
    matrix-vector product. Scorable records are re-pointed at their matrix
    row, so each vector is held once. Records without a vector stay in
    `embeddings` but are left out of the matrix.
    """
    embeddings: Tuple[EmbeddingRecord, ...]
    products: Mapping[str, ProductRecord]
    loaded_at: datetime

    scored_ids: Tuple[str, ...] = field(init=False, repr=False)
    matrix: np.ndarray = field(init=False, repr=False, compare=False)
    norms: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        scorable = [rec for rec in self.embeddings if rec.is_scorable]
        dimension = len(scorable[0].vector) if scorable else 0

        for rec in scorable:
            if len(rec.vector) != dimension:
                raise DimensionMismatch(dimension, len(rec.vector), record_id=rec.id)

        matrix = np.empty((len(scorable), dimension), dtype=np.float64)
        for row, rec in enumerate(scorable):
            matrix[row] = rec.vector
        norms = np.linalg.norm(matrix, axis=1)
        matrix.setflags(write=False)
        norms.setflags(write=False)

        rows = iter(matrix)
        embeddings = tuple(
            replace(rec, vector=next(rows)) if rec.is_scorable else rec
            for rec in self.embeddings
        )

        object.__setattr__(self, "embeddings", embeddings)
        object.__setattr__(self, "scored_ids", tuple(rec.id for rec in scorable))
        object.__setattr__(self, "matrix", matrix)
        object.__setattr__(self, "norms", norms)

    @classmethod
    def build(
            cls,
            embeddings: Iterable[EmbeddingRecord],
            products: Iterable[ProductRecord],
            loaded_at: Optional[datetime] = None,
    ) -> "Snapshot":
        return cls(
            embeddings=tuple(embeddings),
            products=MappingProxyType({p.id: p for p in products}),
            loaded_at=loaded_at or datetime.now(timezone.utc),
        )

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls.build((), ())

    @property
    def dimension(self) -> int:
        return self.matrix.shape[1] if self.scored_ids else 0


class SnapshotHandle:
    """
    The one shared mutable reference: the currently published Snapshot.

    Readers call current() once and keep the result for the whole search;
    publish() swaps the reference in a single assignment.
    """

    def __init__(self, initial: Optional[Snapshot] = None) -> None:
        self._snapshot = initial
        self._publish_lock = threading.Lock()

    def current(self) -> Optional[Snapshot]:
        return self._snapshot

    def publish(self, snapshot: Snapshot) -> Optional[Snapshot]:
        """Replace the published snapshot and return the one it superseded."""
        with self._publish_lock:
            previous = self._snapshot
            self._snapshot = snapshot
        return previous
