"""
API Routes module.

This module contains the FastAPI route handlers:
- content: Add-content and semantic search endpoints
"""

from .content import router as content_router

__all__ = [
    "content_router",
]
