# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-02-05
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from source.DocumentSource import SourceDocument, SourcePage  # noqa: E402


class InMemoryDocumentSource:
    """
    DocumentSource double: collections of dicts keyed by id, paged in id order.
    Records every page call so tests can assert on fetch counts and cursors.
    """

    def __init__(self, collections: Dict[str, Dict[str, Dict[str, Any]]]):
        self.collections = collections
        self.page_calls: List[Dict[str, Any]] = []
        self.count_calls: List[str] = []
        self.count_override: Optional[int] = None
        self.fail_on_page: Optional[int] = None

    def count(self, collection: str) -> int:
        self.count_calls.append(collection)
        if self.count_override is not None:
            return self.count_override
        return len(self.collections.get(collection, {}))

    def page(self, collection: str, page_size: int, after: Optional[str] = None) -> SourcePage:
        self.page_calls.append({"collection": collection, "page_size": page_size, "after": after})
        if self.fail_on_page is not None and len(self.page_calls) == self.fail_on_page:
            raise ConnectionError("simulated page fetch failure")

        ids = sorted(self.collections.get(collection, {}))
        if after is not None:
            ids = [i for i in ids if i > after]
        chunk = ids[:page_size]
        docs = [SourceDocument(id=i, data=self.collections[collection][i]) for i in chunk]
        return SourcePage(
            documents=docs,
            last_cursor=docs[-1].id if docs else after,
            is_last_page=len(docs) < page_size,
        )


@pytest.fixture
def make_source():
    return InMemoryDocumentSource


@pytest.fixture
def catalog_source():
    """Three 2-d embeddings (p1 and p3 close, p2 orthogonal) + matching products."""
    return InMemoryDocumentSource({
        "productos_embeddings": {
            "p1": {"embedding": [1.0, 0.0], "text_embedded": "red shoes"},
            "p2": {"embedding": [0.0, 1.0], "text_embedded": "blue hat"},
            "p3": {"embedding": [0.9, 0.1], "text_embedded": "red boots"},
        },
        "productos": {
            "p1": {"name": "Red Shoes", "price": 59.9, "sku": "RS-1", "stock_quantity": 4},
            "p2": {"name": "Blue Hat", "price": 15, "sku": "BH-2", "stock": 10},
            "p3": {"nombre": "Red Boots", "precio": "120.5", "sku": "RB-3", "image_url": "http://img/rb3.png"},
        },
    })
