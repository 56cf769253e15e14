"""
Error taxonomy for the semantic search pipeline.

Every failure carries a stable `kind` string so the caller can tell a
timeout from a bad request from a broken remote service without parsing
messages. Per-call errors are reported back to the caller; a
ConfigurationError means the deployment itself is inconsistent.
"""
from typing import Any, Dict, Optional


class SemanticSearchError(Exception):
    kind = "SemanticSearchError"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def to_detail(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "status_code": self.status_code,
            "body": self.body,
        }

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class InvalidInputError(SemanticSearchError):
    """Input rejected before any remote call was made."""
    kind = "InvalidInput"


class TransportError(SemanticSearchError):
    """The remote service could not be reached."""
    kind = "TransportError"


class RemoteError(SemanticSearchError):
    """The remote service answered with a failure status."""
    kind = "RemoteError"


class ParseError(SemanticSearchError):
    """The remote service answered with an unexpected body."""
    kind = "ParseError"


class EmptyEmbeddingError(SemanticSearchError):
    kind = "EmptyEmbedding"


class SearchTimeoutError(SemanticSearchError):
    kind = "SearchTimeout"


class PersistenceError(SemanticSearchError):
    kind = "PersistenceError"


class ConfigurationError(SemanticSearchError):
    """Fatal: the deployment is misconfigured, retrying will not help."""
    kind = "ConfigurationError"


class DimensionMismatchError(ConfigurationError):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Embedding dimension mismatch. Expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual
