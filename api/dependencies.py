# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: dependencies.py
# -----------------------------------------------------------------------------
from typing import Callable, Dict

from api.AppContainer import get_app_container
from cache.CacheCoordinator import CacheCoordinator
from services.SearchOrchestrator import SearchOrchestrator


def get_cache_coordinator() -> CacheCoordinator:
    # use the singleton coordinator from the container
    return get_app_container().coordinator


def get_search_orchestrator() -> SearchOrchestrator:
    # use the singleton service from the container
    return get_app_container().search_orchestrator


def get_connection_checks() -> Dict[str, Callable[[], bool]]:
    # live reachability probes for GET /health?deep=true
    container = get_app_container()
    return {
        "firestore": container.source.test_connection,
        "embeddings": container.embedder.test_connection,
    }
