# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: FirestoreDocumentSource
# -----------------------------------------------------------------------------
import json
import logging
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1.field_path import FieldPath

from config.Config import Config
from source.DocumentSource import SourceDocument, SourcePage
from utility.logging_utils import get_class_logger


class FirestoreDocumentSource:
    """
    DocumentSource backed by Cloud Firestore (firebase-admin).

    Pages are ordered by document id and continued with start_after(<last id>),
    so a load never re-scans earlier pages.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Any = None,
            logger: logging.Logger | None = None,
    ) -> None:
        self.cfg = cfg
        self.logger = logger or get_class_logger(self.__class__)
        self.client = client or self._init_client()

    def _init_client(self) -> Any:
        """Initialise the default Firebase app once per process."""
        if not firebase_admin._apps:
            try:
                service_account = json.loads(self.cfg.firebase_service_account)
            except json.JSONDecodeError as e:
                raise ValueError("FIREBASE_SERVICE_ACCOUNT is not valid JSON") from e

            firebase_admin.initialize_app(credentials.Certificate(service_account))
            self.logger.info(
                "Firebase app initialised (project_id=%s)",
                service_account.get("project_id"),
            )

        return firestore.client()

    def test_connection(self) -> bool:
        """
        Simple health check: can we list at least one collection?
        """
        try:
            next(iter(self.client.collections()), None)
            return True
        except Exception as e:
            self.logger.error("Firestore connection failed: %s", e)
            return False

    def count(self, collection: str) -> int:
        # select([]) streams identities only, no payloads
        query = self.client.collection(collection).select([])
        total = sum(1 for _ in query.stream())
        self.logger.info("Collection '%s' holds %d documents", collection, total)
        return total

    def page(
            self,
            collection: str,
            page_size: int,
            after: Optional[str] = None,
    ) -> SourcePage:
        query = self.client.collection(collection).order_by(FieldPath.document_id())
        if after is not None:
            query = query.start_after({FieldPath.document_id(): after})
        query = query.limit(page_size)

        documents = [
            SourceDocument(id=snap.id, data=snap.to_dict() or {})
            for snap in query.stream()
        ]
        last_cursor = documents[-1].id if documents else after

        self.logger.debug(
            "Fetched page of %d documents from '%s' (after=%s)",
            len(documents),
            collection,
            after,
        )
        return SourcePage(
            documents=documents,
            last_cursor=last_cursor,
            is_last_page=len(documents) < page_size,
        )
