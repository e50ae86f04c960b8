# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: test_snapshot.py
# -----------------------------------------------------------------------------
import dataclasses

import numpy as np
import pytest

from cache.Snapshot import Snapshot, SnapshotHandle
from catalog.ProductRecord import ProductRecord
from embedding.EmbeddingRecord import EmbeddingRecord
from utility.errors import DimensionMismatch


def test_build_keeps_load_order_and_indexes_products():
    snap = Snapshot.build(
        [EmbeddingRecord("b", (0.0, 1.0)), EmbeddingRecord("a", (1.0, 0.0))],
        [ProductRecord("a", name="A"), ProductRecord("b", name="B")],
    )

    assert [e.id for e in snap.embeddings] == ["b", "a"]
    assert snap.scored_ids == ("b", "a")
    assert snap.products["a"].name == "A"
    assert snap.dimension == 2
    assert snap.loaded_at.tzinfo is not None


def test_snapshot_is_immutable():
    snap = Snapshot.build([EmbeddingRecord("a", (1.0,))], [ProductRecord("a")])

    with pytest.raises(TypeError):
        snap.products["x"] = ProductRecord("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.loaded_at = None
    with pytest.raises(ValueError):
        snap.matrix[0, 0] = 5.0


def test_heterogeneous_dimensions_fail_fast():
    with pytest.raises(DimensionMismatch) as exc_info:
        Snapshot.build(
            [EmbeddingRecord("a", (1.0, 0.0)), EmbeddingRecord("b", (1.0, 0.0, 0.0))],
            [],
        )
    assert exc_info.value.record_id == "b"


def test_empty_snapshot():
    snap = Snapshot.empty()

    assert snap.embeddings == ()
    assert len(snap.products) == 0
    assert snap.dimension == 0


def test_handle_publish_swaps_reference():
    first = Snapshot.empty()
    second = Snapshot.empty()
    handle = SnapshotHandle()

    assert handle.current() is None
    assert handle.publish(first) is None
    captured = handle.current()
    assert handle.publish(second) is first

    assert handle.current() is second
    assert captured is first


def test_vectors_are_stored_once_as_matrix_rows():
    loaded = [
        EmbeddingRecord("a", [1.0, 0.0]),
        EmbeddingRecord("none", ()),
        EmbeddingRecord("b", [0.0, 2.0]),
    ]
    snap = Snapshot.build(loaded, [])

    a, none, b = snap.embeddings
    assert np.shares_memory(a.vector, snap.matrix)
    assert np.shares_memory(b.vector, snap.matrix)
    assert b.vector.tolist() == [0.0, 2.0]
    assert none.vector.size == 0
    # Loader-side arrays are no longer referenced by the snapshot
    assert not np.shares_memory(loaded[0].vector, snap.matrix)
    assert not a.vector.flags.writeable
