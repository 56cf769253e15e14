"""
Services module for the semantic search application.

This module contains the pipeline and its external service integrations:
- embedding_client: Generates embeddings through the Gemini embedding API
- content_store: Stores content and runs similarity search in Supabase
- pipeline: Composes both into the add/search entry points
- utils: Small text and response helpers
"""

from .embedding_client import EmbeddingGenerator
from .content_store import ContentStore
from .pipeline import SemanticSearch
from .utils import clean_user_text

__all__ = [
    "EmbeddingGenerator",
    "ContentStore",
    "SemanticSearch",
    "clean_user_text",
]
