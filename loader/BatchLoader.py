# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: BatchLoader.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import gc
import logging
import time
from typing import Callable, Generic, List, Optional, Set, TypeVar

from source.DocumentSource import DocumentSource, SourceDocument
from utility.errors import LoadFailure
from utility.logging_utils import get_class_logger

T = TypeVar("T")


class BatchLoader(Generic[T]):
    """
    Pulls every document of one collection into memory, page by page.

    Pages are requested in document-id order using the last id of the
    previous page as cursor. Loading stops at the first of:
      - a short page
      - the pre-counted total has been fetched
      - the source reports the last page
    Any source error aborts the whole load with LoadFailure.
    """

    def __init__(
        self,
        *,
        source: DocumentSource,
        collection: str,
        mapper: Callable[[SourceDocument], Optional[T]],
        page_size: int = 500,
        reclaim_every: int = 2000,
        logger: logging.Logger | None = None,
    ) -> None:
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.source = source
        self.collection = collection
        self.mapper = mapper
        self.page_size = page_size
        self.reclaim_every = reclaim_every
        self.logger = logger or get_class_logger(self.__class__)

    def load(self) -> List[T]:
        start = time.perf_counter()
        total = self._count()
        self.logger.info(
            "load: collection='%s' total=%d page_size=%d (start)",
            self.collection,
            total,
            self.page_size,
        )

        records: List[T] = []
        seen: Set[str] = set()
        fetched = 0
        pages = 0
        cursor: Optional[str] = None
        next_reclaim = self.reclaim_every

        while fetched < total:
            try:
                page = self.source.page(self.collection, self.page_size, after=cursor)
            except Exception as e:
                self.logger.error(
                    "load: page %d of '%s' failed after %d documents: %s",
                    pages + 1,
                    self.collection,
                    fetched,
                    e,
                )
                raise LoadFailure(
                    self.collection,
                    f"Page fetch failed for '{self.collection}' after {fetched} documents: {e}",
                ) from e

            pages += 1
            fetched += len(page.documents)

            for doc in page.documents:
                if doc.id in seen:
                    self.logger.warning(
                        "load: duplicate id '%s' in '%s' skipped", doc.id, self.collection
                    )
                    continue
                seen.add(doc.id)
                record = self.mapper(doc)
                if record is not None:
                    records.append(record)

            if self.reclaim_every > 0 and fetched >= next_reclaim:
                self._reclaim(fetched, total)
                next_reclaim = (fetched // self.reclaim_every + 1) * self.reclaim_every

            if len(page.documents) < self.page_size or page.is_last_page:
                break
            cursor = page.last_cursor or page.documents[-1].id

        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        self.logger.info(
            "load: collection='%s' records=%d pages=%d in %.2f ms (done)",
            self.collection,
            len(records),
            pages,
            elapsed_ms,
        )
        return records

    def _count(self) -> int:
        try:
            return int(self.source.count(self.collection))
        except Exception as e:
            self.logger.error("load: count of '%s' failed: %s", self.collection, e)
            raise LoadFailure(
                self.collection, f"Count failed for '{self.collection}': {e}"
            ) from e

    def _reclaim(self, fetched: int, total: int) -> None:
        # gen-0 only
        gc.collect(0)
        time.sleep(0)
        self.logger.info(
            "load: collection='%s' progress %d/%d", self.collection, fetched, total
        )
