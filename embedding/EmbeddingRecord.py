# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-02-09
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class EmbeddingRecord:
    """Precomputed product embedding + the text it was computed from (diagnostic only)."""
    id: str
    vector: np.ndarray
    source_text: str = ""

    def __post_init__(self) -> None:
        # 1-d read-only float64; an ndarray that already is one is not copied
        vector = np.asarray(self.vector, dtype=np.float64).reshape(-1)
        vector.setflags(write=False)
        object.__setattr__(self, "vector", vector)

    @property
    def is_scorable(self) -> bool:
        return self.vector.size > 0
