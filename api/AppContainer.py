# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-04
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from functools import lru_cache

import settings
from cache.CacheCoordinator import CacheCoordinator
from cache.RefreshScheduler import RefreshScheduler
from cache.Snapshot import SnapshotHandle
from config.Config import Config
from embedding.QueryEmbedder import QueryEmbedder
from loader.BatchLoader import BatchLoader
from mapping.FieldMapping import map_embedding, map_product
from services.SearchOrchestrator import SearchOrchestrator
from source.FirestoreDocumentSource import FirestoreDocumentSource
from utility.logging_utils import get_class_logger


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Config: %s", self.cfg.summary())

        # External collaborators
        self.source = FirestoreDocumentSource(cfg=self.cfg)
        self.embedder = QueryEmbedder(cfg=self.cfg)

        # The only shared mutable state: the published snapshot
        self.handle = SnapshotHandle()

        self.embeddings_loader = BatchLoader(
            source=self.source,
            collection=settings.EMBEDDINGS_COLLECTION,
            mapper=map_embedding,
            page_size=settings.PAGE_SIZE,
            reclaim_every=settings.RECLAIM_EVERY,
        )
        self.products_loader = BatchLoader(
            source=self.source,
            collection=settings.PRODUCTS_COLLECTION,
            mapper=map_product,
            page_size=settings.PAGE_SIZE,
            reclaim_every=settings.RECLAIM_EVERY,
        )

        self.coordinator = CacheCoordinator(
            handle=self.handle,
            embeddings_loader=self.embeddings_loader,
            products_loader=self.products_loader,
            parallel=settings.PARALLEL_LOAD,
        )

        self.search_orchestrator = SearchOrchestrator(
            handle=self.handle,
            embed=self.embedder.embed,
            default_top_k=settings.SEARCH_DEFAULTS["top_k"],
            default_threshold=settings.SEARCH_DEFAULTS["threshold"],
        )

        self.scheduler = RefreshScheduler(
            coordinator=self.coordinator,
            weekday=settings.REFRESH_WEEKDAY,
            hour=settings.REFRESH_HOUR,
            minute=settings.REFRESH_MINUTE,
        )


@lru_cache
def get_app_container() -> AppContainer:
    # Built on first use so importing the API does not require credentials
    return AppContainer()
