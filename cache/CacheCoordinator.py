# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: CacheCoordinator.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import psutil

from cache.Snapshot import Snapshot, SnapshotHandle
from catalog.ProductRecord import ProductRecord
from embedding.EmbeddingRecord import EmbeddingRecord
from loader.BatchLoader import BatchLoader
from utility.errors import InitialLoadFailure, RefreshFailure, ReloadInProgress
from utility.logging_utils import get_class_logger


class CacheCoordinator:
    """
    Owns full cache reloads:
      - runs the embeddings and products BatchLoaders
      - builds a new Snapshot off to the side
      - publishes it through the SnapshotHandle in one swap
      - tracks readiness and load stats

    Only one reload runs at a time; a second request is rejected.
    """

    def __init__(
        self,
        *,
        handle: SnapshotHandle,
        embeddings_loader: BatchLoader[EmbeddingRecord],
        products_loader: BatchLoader[ProductRecord],
        parallel: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self.handle = handle
        self.embeddings_loader = embeddings_loader
        self.products_loader = products_loader
        self.parallel = parallel
        self.logger = logger or get_class_logger(self.__class__)

        self._reload_lock = threading.Lock()
        self._ready = handle.current() is not None
        self._last_duration_ms: Optional[float] = None
        self._last_error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def is_reloading(self) -> bool:
        return self._reload_lock.locked()

    def snapshot(self) -> Optional[Snapshot]:
        return self.handle.current()

    def initialize(self) -> Snapshot:
        """Startup load. InitialLoadFailure here means there is nothing to serve."""
        self.logger.info("Initialising cache from document source")
        return self.reload()

    def refresh(self) -> Snapshot:
        """Scheduled/manual refresh; a RefreshFailure leaves the last-good snapshot serving."""
        self.logger.info("Cache refresh requested")
        return self.reload()

    def reload(self) -> Snapshot:
        if not self._reload_lock.acquire(blocking=False):
            self.logger.warning("reload rejected: another reload is in progress")
            raise ReloadInProgress("A cache reload is already running")

        previous_ready = self._ready
        had_snapshot = self.handle.current() is not None
        start = time.perf_counter()
        try:
            self._ready = False
            try:
                embeddings, products = self._load_all()
                snapshot = Snapshot.build(
                    embeddings, products, loaded_at=datetime.now(timezone.utc)
                )
            except Exception as e:
                self._ready = previous_ready
                self._last_error = str(e)
                failure = RefreshFailure if had_snapshot else InitialLoadFailure
                collection = getattr(e, "collection", "")
                self.logger.exception(
                    "reload failed (%s); previous snapshot %s: %s",
                    failure.__name__,
                    "kept" if had_snapshot else "absent",
                    e,
                )
                raise failure(collection, f"Cache reload failed: {e}") from e

            self.handle.publish(snapshot)
            self._ready = True
            self._last_error = None
            self._last_duration_ms = round((time.perf_counter() - start) * 1000, 2)

            self.logger.info(
                "Cache published: embeddings=%d products=%d in %.2f ms, memory=%dMB",
                len(snapshot.embeddings),
                len(snapshot.products),
                self._last_duration_ms,
                _memory_usage_mb(),
            )
            return snapshot
        finally:
            self._reload_lock.release()

    def _load_all(self) -> Tuple[List[EmbeddingRecord], List[ProductRecord]]:
        if not self.parallel:
            return self.embeddings_loader.load(), self.products_loader.load()

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="cache-load") as pool:
            embeddings_future = pool.submit(self.embeddings_loader.load)
            products_future = pool.submit(self.products_loader.load)
            return embeddings_future.result(), products_future.result()

    def stats(self) -> Dict[str, Any]:
        snapshot = self.handle.current()
        return {
            "totalEmbeddings": len(snapshot.embeddings) if snapshot else 0,
            "totalProducts": len(snapshot.products) if snapshot else 0,
            "lastUpdate": snapshot.loaded_at.isoformat() if snapshot else None,
            "cacheReady": self._ready,
            "lastLoadDurationMs": self._last_duration_ms,
            "lastError": self._last_error,
            "memoryUsageMB": _memory_usage_mb(),
        }


def _memory_usage_mb() -> int:
    return round(psutil.Process().memory_info().rss / 1024 / 1024)
