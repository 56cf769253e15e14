import logging
from typing import Optional

import httpx

from ..core.config import DEFAULT_MATCH_THRESHOLD, DEFAULT_MATCH_COUNT
from ..core.errors import SemanticSearchError, ConfigurationError
from ..schemas.content import ErrorDetail, OperationResult
from .content_store import ContentStore
from .embedding_client import EmbeddingGenerator


def _failure(error: SemanticSearchError) -> OperationResult:
    return OperationResult(status="error", error=ErrorDetail(**error.to_detail()))


class SemanticSearch:
    """
    Entry points for the presentation layer.

    - add: embed the text, then store it
    - search: embed the query, then rank stored content against it

    Per-call failures come back as an error OperationResult with their kind
    intact. ConfigurationError is raised instead, since no later call can succeed.
    """

    def __init__(
        self,
        embedder: EmbeddingGenerator,
        store: ContentStore,
        default_threshold: float = DEFAULT_MATCH_THRESHOLD,
        default_match_count: int = DEFAULT_MATCH_COUNT,
    ):
        self.embedder = embedder
        self.store = store
        self.default_threshold = default_threshold
        self.default_match_count = default_match_count

    @classmethod
    def from_config(cls, client: httpx.AsyncClient) -> "SemanticSearch":
        """Wire the generator and the store around one shared HTTP client."""
        embedder = EmbeddingGenerator(client)
        return cls(embedder, ContentStore(client, embedder))

    async def add(self, text: str) -> OperationResult:
        try:
            embedding = await self.embedder.generate_embedding(text)
            await self.store.insert_content(text, embedding)
        except ConfigurationError:
            raise
        except SemanticSearchError as e:
            logging.error(f"[Pipeline] Failed to add content: {e.kind}: {e}")
            return _failure(e)

        return OperationResult(status="success", message="Content added successfully!")

    async def search(
        self,
        query: str,
        threshold: Optional[float] = None,
        match_count: Optional[int] = None,
    ) -> OperationResult:
        threshold = self.default_threshold if threshold is None else threshold
        match_count = self.default_match_count if match_count is None else match_count

        try:
            results = await self.store.search_by_meaning(
                query, threshold=threshold, match_count=match_count
            )
        except ConfigurationError:
            raise
        except SemanticSearchError as e:
            logging.error(f"[Pipeline] Search failed: {e.kind}: {e}")
            return _failure(e)

        message = None if results else "No matching contents found"
        return OperationResult(status="success", data=results, message=message)
