"""
Embedding client for the Gemini embedContent API.

Turns one piece of text into a fixed-length float vector. Every call goes to
the remote model: nothing is cached and nothing is retried here, since calls
are billed and rate-limited and the retry decision belongs to the caller.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from ..core.config import (
    EMBEDDING_API_URL,
    EMBEDDING_MODEL,
    EMBEDDING_API_KEY,
    EMBEDDING_TIMEOUT,
    EMBEDDING_DIMENSION,
)
from ..core.errors import (
    InvalidInputError,
    TransportError,
    RemoteError,
    ParseError,
    EmptyEmbeddingError,
    DimensionMismatchError,
)
from ..schemas.content import EmbeddingResponse
from .utils import clean_user_text, response_body


class EmbeddingGenerator:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = EMBEDDING_API_URL,
        model: str = EMBEDDING_MODEL,
        api_key: str = EMBEDDING_API_KEY,
        timeout: Optional[float] = EMBEDDING_TIMEOUT,
        dimension: Optional[int] = EMBEDDING_DIMENSION,
    ):
        self.client = client
        self.api_url = api_url.rstrip("/")
        self.model = model
        self._api_key = api_key
        self.timeout = timeout
        # Locked on the first embedding when not configured
        self.dimension: Optional[int] = dimension or None

    @property
    def endpoint(self) -> str:
        model_path = self.model if self.model.startswith("models/") else f"models/{self.model}"
        return f"{self.api_url}/{model_path}:embedContent"

    def check_dimension(self, vector: List[float]) -> None:
        """
        Enforce one dimensionality per deployment.
        A mismatch means the model or its version changed underneath us.
        """
        if self.dimension is None:
            self.dimension = len(vector)
            logging.info(f"[Embedding] Vector dimension locked at {self.dimension}")
        elif len(vector) != self.dimension:
            logging.error(
                f"[Embedding] Dimension mismatch: expected {self.dimension}, got {len(vector)}"
            )
            raise DimensionMismatchError(self.dimension, len(vector))

    async def generate_embedding(self, text: str) -> List[float]:
        """
        Embed a single text.

        Raises:
            InvalidInputError: text is empty after trimming (no request is sent)
            TransportError: the API could not be reached
            RemoteError: the API answered with a non-200 status
            ParseError: the body does not contain embedding.values as numbers
            EmptyEmbeddingError: the API returned a zero-length vector
            DimensionMismatchError: the vector length differs from the deployment's
        """
        clean_text = clean_user_text(text)
        if not clean_text:
            raise InvalidInputError("Text cannot be empty")

        payload = {
            "model": self.model,
            "content": {"parts": [{"text": clean_text}]},
        }
        # Key goes in a header so it never shows up in logged request URLs
        headers = {"x-goog-api-key": self._api_key}
        extra = {"timeout": self.timeout} if self.timeout is not None else {}

        try:
            resp = await self.client.post(self.endpoint, json=payload, headers=headers, **extra)
        except httpx.RequestError as e:
            logging.error(f"[Embedding] HTTP error: {e!r}")
            raise TransportError(f"Embedding request failed: {e!r}") from e

        if resp.status_code != 200:
            logging.error(f"[Embedding] API returned {resp.status_code}")
            raise RemoteError(
                "Failed to generate embedding",
                status_code=resp.status_code,
                body=response_body(resp),
            )

        try:
            data = EmbeddingResponse.model_validate_json(resp.content)
        except ValidationError as e:
            logging.error(f"[Embedding] Unexpected response body: {e.error_count()} error(s)")
            raise ParseError(
                f"Malformed embedding response: {e.errors()[0]['msg']}",
                status_code=resp.status_code,
                body=response_body(resp),
            ) from e

        vector = [float(v) for v in data.embedding.values]
        if not vector:
            logging.error("[Embedding] API returned a zero-length vector")
            raise EmptyEmbeddingError("Generated embedding is empty")

        self.check_dimension(vector)
        logging.debug(f"[Embedding] {len(vector)} dimensions")
        return vector
