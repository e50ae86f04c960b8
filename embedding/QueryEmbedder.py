# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-02-03
# Description: QueryEmbedder
# -----------------------------------------------------------------------------
import time
from typing import Any, List, Optional

from openai import AzureOpenAI, OpenAI, OpenAIError

from config.Config import Config
from utility.errors import EmbeddingFailure
from utility.logging_utils import get_class_logger


class QueryEmbedder:
    """
    Turns one query string into one embedding vector.

    Single call, no retry: a failed or malformed response raises
    EmbeddingFailure and the search fails with it.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Any = None,
            logger=None,
    ):
        self.cfg = cfg
        self.logger = logger or get_class_logger(self.__class__)
        self.model = cfg.openai_embed_model or "text-embedding-3-small"
        self.client = client or self._init_client()
        self.logger.info(
            "QueryEmbedder initialised (model='%s', azure=%s)", self.model, cfg.use_azure
        )

    def _init_client(self) -> Any:
        if self.cfg.use_azure:
            return AzureOpenAI(
                api_key=self.cfg.openai_api_key,
                azure_endpoint=self.cfg.openai_azure_endpoint.rstrip("/"),
                api_version=self.cfg.openai_azure_api_version,
            )
        return OpenAI(
            api_key=self.cfg.openai_api_key,
            base_url=self.cfg.openai_base_url or None,
        )

    def embed(self, text: str) -> List[float]:
        start = time.perf_counter()
        try:
            resp = self.client.embeddings.create(model=self.model, input=text)
        except OpenAIError as e:
            self.logger.error("Embedding request failed: %s", e)
            raise EmbeddingFailure(f"Embedding provider error: {e}") from e

        vector = self._first_vector(resp)
        self.logger.debug(
            "Embedded query in %.1f ms (dim=%d)",
            (time.perf_counter() - start) * 1000.0,
            len(vector),
        )
        return vector

    @staticmethod
    def _first_vector(resp: Any) -> List[float]:
        data = getattr(resp, "data", None)
        if not data:
            raise EmbeddingFailure("Embedding provider returned no data")

        embedding: Optional[List[float]] = getattr(data[0], "embedding", None)
        if not embedding:
            raise EmbeddingFailure("Embedding provider returned an empty vector")
        return list(embedding)

    def test_connection(self) -> bool:
        try:
            return len(self.embed("connection test")) > 0
        except EmbeddingFailure as e:
            self.logger.error("Embedding connection test failed: %s", e)
            return False
