"""Pytest conftest: an in-memory fake of the embedding API and Supabase REST."""

import json
import math
from typing import Dict, List

import httpx
import pytest

from semantic_search.services.embedding_client import EmbeddingGenerator
from semantic_search.services.content_store import ContentStore
from semantic_search.services.pipeline import SemanticSearch

EMBED_URL = "https://embed.test/v1beta"
DB_URL = "https://db.test"

VECTORS: Dict[str, List[float]] = {
    "I like studying science": [0.9, 0.1, 0.2],
    "learning subjects": [0.8, 0.2, 0.25],
    "cooking pasta at home": [0.0, 1.0, 0.0],
    "italian recipes": [0.1, 0.95, 0.05],
    "quantum tax law": [0.0, 0.0, 1.0],
    "physics homework": [0.85, 0.15, 0.3],
    "chemistry class": [0.8, 0.05, 0.1],
}


def cosine(a: List[float], b: List[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class FakeBackend:
    """
    Answers embedContent, table inserts and the match_contents RPC the way
    the real services do, keeping rows in memory.
    """

    def __init__(self, vectors: Dict[str, List[float]] = VECTORS):
        self.vectors = vectors
        self.rows: List[dict] = []
        self.requests: List[httpx.Request] = []

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        path = request.url.path

        if path.endswith(":embedContent"):
            text = body["content"]["parts"][0]["text"]
            return httpx.Response(200, json={"embedding": {"values": self.vectors[text]}})

        if path == "/rest/v1/contents":
            self.rows.append(body)
            return httpx.Response(201)

        if path == "/rest/v1/rpc/match_contents":
            query = body["query_embedding"]
            scored = [
                {"id": i + 1, "text": row["text"], "similarity": cosine(query, row["embedding"])}
                for i, row in enumerate(self.rows)
            ]
            scored = [s for s in scored if s["similarity"] >= body["match_threshold"]]
            scored.sort(key=lambda s: s["similarity"], reverse=True)
            return httpx.Response(200, json=scored[: body["match_count"]])

        return httpx.Response(404, json={"message": "not found"})


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_embedder(client: httpx.AsyncClient, **kwargs) -> EmbeddingGenerator:
    kwargs.setdefault("api_key", "test-key")
    kwargs.setdefault("dimension", 0)
    kwargs.setdefault("timeout", None)
    return EmbeddingGenerator(client, api_url=EMBED_URL, model="models/text-embedding-004", **kwargs)


def make_store(client: httpx.AsyncClient, embedder: EmbeddingGenerator, **kwargs) -> ContentStore:
    kwargs.setdefault("search_timeout", 30.0)
    return ContentStore(
        client,
        embedder,
        base_url=DB_URL,
        api_key="db-key",
        table="contents",
        match_function="match_contents",
        **kwargs,
    )


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    return make_client(backend.handler)


@pytest.fixture
def embedder(client):
    return make_embedder(client)


@pytest.fixture
def store(client, embedder):
    return make_store(client, embedder)


@pytest.fixture
def service(embedder, store):
    return SemanticSearch(embedder, store, default_threshold=0.6, default_match_count=5)
