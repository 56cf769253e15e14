"""
Core configuration and shared error types.

This module contains application-wide settings and the error taxonomy:
- config: Environment variables and their defaults
- errors: Typed failures raised by the embedding and storage layers
"""

from .config import EMBEDDING_MODEL, MATCH_FUNCTION, CONTENT_TABLE
from .errors import SemanticSearchError, ConfigurationError

__all__ = [
    "EMBEDDING_MODEL",
    "MATCH_FUNCTION",
    "CONTENT_TABLE",
    "SemanticSearchError",
    "ConfigurationError",
]
