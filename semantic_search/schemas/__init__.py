"""
Schema and Data Models module.

This module contains Pydantic models for request/response validation:
- ContentRequest / SearchRequest: API request bodies
- ContentRecord / SearchResult: stored content and ranked matches
- EmbeddingResponse / MatchRow: strict decoders for remote responses
- OperationResult: success-or-error envelope returned by the pipeline
"""

from .content import (
    ContentRequest,
    SearchRequest,
    ContentRecord,
    SearchResult,
    EmbeddingResponse,
    MatchRow,
    ErrorDetail,
    OperationResult,
)

__all__ = [
    "ContentRequest",
    "SearchRequest",
    "ContentRecord",
    "SearchResult",
    "EmbeddingResponse",
    "MatchRow",
    "ErrorDetail",
    "OperationResult",
]
