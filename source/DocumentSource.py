# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: DocumentSource
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class SourceDocument:
    """One raw document as returned by the remote collection."""
    id: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SourcePage:
    documents: List[SourceDocument]
    last_cursor: Optional[str]
    is_last_page: bool


@runtime_checkable
class DocumentSource(Protocol):
    """
    Paginated read access to a named collection, ordered by document id.
    The cursor is the id of the last document of the previous page.
    """

    def count(self, collection: str) -> int:
        ...

    def page(
            self,
            collection: str,
            page_size: int,
            after: Optional[str] = None,
    ) -> SourcePage:
        ...
