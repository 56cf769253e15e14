"""
Semantic Search Application.

Stores free-text content with its embedding and retrieves it by meaning.

Main components:
- main: FastAPI application setup and lifespan
- core: Configuration and error types
- schemas: Pydantic request/response and remote-response models
- services: Embedding generator, content store and the add/search pipeline
- api: Route handlers for the presentation layer
"""

from .core.errors import SemanticSearchError
from .schemas.content import SearchResult, OperationResult
from .services import EmbeddingGenerator, ContentStore, SemanticSearch

__all__ = [
    "SemanticSearchError",
    "SearchResult",
    "OperationResult",
    "EmbeddingGenerator",
    "ContentStore",
    "SemanticSearch",
]
