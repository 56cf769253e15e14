from pydantic import BaseModel, ConfigDict
from typing import Any, List, Literal, Optional


# -------------------------
# API REQUESTS
# -------------------------

class ContentRequest(BaseModel):
    text: str


class SearchRequest(BaseModel):
    query: str
    threshold: Optional[float] = None
    match_count: Optional[int] = None


# -------------------------
# DOMAIN
# -------------------------

class ContentRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    embedding: List[float]


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    similarity: float


# -------------------------
# REMOTE RESPONSES (strict)
# -------------------------

class EmbeddingValues(BaseModel):
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    values: List[float]


class EmbeddingResponse(BaseModel):
    """Body of a successful embedContent call: {"embedding": {"values": [...]}}."""
    model_config = ConfigDict(strict=True)

    embedding: EmbeddingValues


class MatchRow(BaseModel):
    """One row returned by the match function. Extra columns are ignored."""
    model_config = ConfigDict(strict=True, allow_inf_nan=False, extra="ignore")

    text: str
    similarity: float


# -------------------------
# RESULT ENVELOPE
# -------------------------

class ErrorDetail(BaseModel):
    kind: str
    message: str
    status_code: Optional[int] = None
    body: Optional[str] = None


class OperationResult(BaseModel):
    status: Literal["success", "error"]
    data: Any = None
    message: Optional[str] = None
    error: Optional[ErrorDetail] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
