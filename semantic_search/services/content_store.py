import asyncio
import logging
from typing import List

import httpx
from pydantic import TypeAdapter, ValidationError

from ..core.config import (
    SUPABASE_URL,
    SUPABASE_KEY,
    CONTENT_TABLE,
    MATCH_FUNCTION,
    SEARCH_TIMEOUT,
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_MATCH_COUNT,
)
from ..core.errors import (
    InvalidInputError,
    TransportError,
    RemoteError,
    ParseError,
    EmptyEmbeddingError,
    SearchTimeoutError,
    PersistenceError,
)
from ..schemas.content import ContentRecord, MatchRow, SearchResult
from .embedding_client import EmbeddingGenerator
from .utils import clean_user_text, response_body

_MATCH_ROWS = TypeAdapter(List[MatchRow])


# -------------------------
# CONTENT STORE
# -------------------------

class ContentStore:
    """
    Persists (text, embedding) records in a Supabase table and ranks them
    through a Postgres function exposed over PostgREST RPC.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        embedder: EmbeddingGenerator,
        base_url: str = SUPABASE_URL,
        api_key: str = SUPABASE_KEY,
        table: str = CONTENT_TABLE,
        match_function: str = MATCH_FUNCTION,
        search_timeout: float = SEARCH_TIMEOUT,
    ):
        self.client = client
        self.embedder = embedder
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self.table = table
        self.match_function = match_function
        self.search_timeout = search_timeout

    def _rest_url(self, path: str) -> str:
        return f"{self.base_url}/rest/v1/{path}"

    @property
    def _headers(self) -> dict:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }

    # -------------------------
    # INSERT
    # -------------------------
    async def insert_content(self, text: str, embedding: List[float]) -> ContentRecord:
        clean_text = clean_user_text(text)
        if not clean_text:
            raise InvalidInputError("Text cannot be empty")
        if not embedding:
            logging.error("[ContentStore] Refusing to store an empty embedding")
            raise EmptyEmbeddingError("Cannot store an empty embedding")
        self.embedder.check_dimension(embedding)

        record = ContentRecord(text=clean_text, embedding=[float(v) for v in embedding])

        try:
            resp = await self.client.post(
                self._rest_url(self.table),
                json=record.model_dump(),
                headers={**self._headers, "Prefer": "return=minimal"},
            )
        except httpx.RequestError as e:
            logging.error(f"[ContentStore] Insert error: {e!r}")
            raise PersistenceError(f"Insert failed: {e!r}") from e

        if not resp.is_success:
            logging.error(f"[ContentStore] Insert rejected with {resp.status_code}")
            raise PersistenceError(
                "Insert failed",
                status_code=resp.status_code,
                body=response_body(resp),
            )

        logging.info(f"[ContentStore] Content inserted successfully ({len(record.embedding)} dims)")
        return record

    # -------------------------
    # SEARCH BY MEANING
    # -------------------------
    async def search_by_meaning(
        self,
        query: str,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        match_count: int = DEFAULT_MATCH_COUNT,
    ) -> List[SearchResult]:
        """
        Rank stored content against `query`.

        Returns at most `match_count` results with similarity >= `threshold`,
        best first. An empty list means nothing met the threshold.
        """
        # Also rejects NaN
        if not (0.0 <= threshold <= 1.0):
            raise InvalidInputError(f"threshold must be within [0, 1], got {threshold}")
        if isinstance(match_count, bool) or not isinstance(match_count, int) or match_count < 1:
            raise InvalidInputError(f"match_count must be a positive integer, got {match_count!r}")

        logging.info(f"[ContentStore] Searching for: {query!r}")

        # Embedding errors propagate as they are
        embedding = await self.embedder.generate_embedding(query)
        if not embedding:
            logging.error("[ContentStore] Generated embedding is empty")
            raise EmptyEmbeddingError("Generated embedding is empty")

        logging.info(f"[ContentStore] Embedding: {len(embedding)} dimensions")

        try:
            resp = await asyncio.wait_for(
                self._call_match_function(embedding, threshold, match_count),
                timeout=self.search_timeout,
            )
        except asyncio.TimeoutError as e:
            logging.error(f"[ContentStore] Search timed out after {self.search_timeout}s")
            raise SearchTimeoutError("Search timed out") from e

        if not resp.is_success:
            logging.error(f"[ContentStore] {self.match_function} returned {resp.status_code}")
            raise RemoteError(
                f"Ranking function {self.match_function} failed",
                status_code=resp.status_code,
                body=response_body(resp),
            )

        results = _decode_matches(resp, threshold, match_count)
        logging.info(f"[ContentStore] Response received: {len(results)} match(es)")
        return results

    async def _call_match_function(
        self, embedding: List[float], threshold: float, match_count: int
    ) -> httpx.Response:
        params = {
            "query_embedding": embedding,
            "match_threshold": threshold,
            "match_count": match_count,
        }
        try:
            return await self.client.post(
                self._rest_url(f"rpc/{self.match_function}"),
                json=params,
                headers=self._headers,
                timeout=self.search_timeout,
            )
        except httpx.TimeoutException as e:
            logging.error(f"[ContentStore] Search timed out in transport: {e!r}")
            raise SearchTimeoutError("Search timed out") from e
        except httpx.RequestError as e:
            logging.error(f"[ContentStore] Search error: {e!r}")
            raise TransportError(f"Could not reach {self.match_function}: {e!r}") from e


# -------------------------
# RESPONSE DECODING
# -------------------------

def _decode_matches(resp: httpx.Response, threshold: float, match_count: int) -> List[SearchResult]:
    """
    Decode the match function's rows and verify the ranking contract.
    Anything unexpected fails closed with ParseError.
    """
    body = resp.content.strip()
    # PostgREST answers null when the function returns no set
    if body == b"null":
        return []

    try:
        rows = _MATCH_ROWS.validate_json(body)
    except ValidationError as e:
        logging.error(f"[ContentStore] Unexpected search response: {e.error_count()} error(s)")
        raise ParseError(
            f"Unexpected search response: {e.errors()[0]['msg']}",
            status_code=resp.status_code,
            body=response_body(resp),
        ) from e

    if len(rows) > match_count:
        logging.error(f"[ContentStore] Too many rows: {len(rows)} > {match_count}")
        raise ParseError(f"Ranking function returned {len(rows)} rows, expected at most {match_count}")

    results: List[SearchResult] = []
    previous = None
    for row in rows:
        # Cosine similarity never exceeds 1.0; anything above is rounding noise
        similarity = min(row.similarity, 1.0)
        if similarity < threshold:
            logging.error(f"[ContentStore] Row similarity {similarity} below threshold {threshold}")
            raise ParseError(f"Row similarity {similarity} is below threshold {threshold}")
        if previous is not None and similarity > previous:
            logging.error("[ContentStore] Rows out of order")
            raise ParseError("Ranking function returned rows out of order")
        previous = similarity
        results.append(SearchResult(text=row.text, similarity=similarity))

    return results
