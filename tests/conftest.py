"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic keyword embeddings, an in-memory document store with
cosine similarity, fake source/platform readers and settings objects.
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

import math
import re
import uuid
from collections.abc import Sequence
from typing import Any

import pytest
from langchain_core.embeddings import Embeddings

from q5search.boundary.providers.embedding_provider import EmbeddingProvider
from q5search.boundary.vdb.vector_schemas import EntityType, SearchDocument, SearchResult
from q5search.configs.embedding import EmbeddingSettings
from q5search.configs.retrieval import RetrievalSettings
from q5search.core.retriever import RetrievalService

VOCABULARY = [
    "quantum", "control", "electronics", "job", "engineer", "qa", "acme",
    "superconducting", "qubits", "cryogenic", "laser", "photonics", "software",
    "product", "dilution", "refrigerator", "research", "post", "ion", "trap",
]


class KeywordEmbeddings(Embeddings):
    """Bag-of-words over a fixed vocabulary plus a small bias dimension."""

    def __init__(self, vocabulary: Sequence[str] = VOCABULARY) -> None:
        self.vocabulary = list(vocabulary)
        self.calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        words = re.findall(r"[a-z]+", text.lower())
        return [float(words.count(term)) for term in self.vocabulary] + [0.05]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        return self._vector(text)

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


def cosine(a: Sequence[float], b: Sequence[float]) -> float:
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / norm


class InMemoryDocumentStore:
    """DocumentStore double with the same check-then-insert semantics."""

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []
        self._next_id = 1

    def count(self, entity_type: EntityType, link: str) -> int:
        return sum(
            1 for row in self.rows
            if row["metadata"].type == entity_type and row["metadata"].link == link
        )

    async def exists(self, link: str) -> bool:
        return any(row["metadata"].link == link for row in self.rows)

    async def insert(self, document: SearchDocument) -> bool:
        self.rows.append({
            "id": self._next_id,
            "content": document.content,
            "embedding": document.embedding,
            "metadata": document.metadata,
        })
        self._next_id += 1
        return True

    async def replace(self, document: SearchDocument) -> None:
        await self.delete(document.metadata.link)
        await self.insert(document)

    async def delete(self, link: str) -> int:
        before = len(self.rows)
        self.rows = [row for row in self.rows if row["metadata"].link != link]
        return before - len(self.rows)

    async def match(self, query_embedding, threshold: float, count: int) -> list[SearchResult]:
        scored = [
            (cosine(query_embedding, row["embedding"]), row)
            for row in self.rows
        ]
        scored = [(sim, row) for sim, row in scored if sim > threshold]
        scored.sort(key=lambda item: (-item[0], item[1]["id"]))
        return [
            SearchResult(
                id=row["id"],
                content=row["content"],
                metadata=row["metadata"],
                similarity=sim,
            )
            for sim, row in scored[:count]
        ]


class FakeSourceReader:
    """SourceReader double returning preset rows per entity type."""

    def __init__(self, rows: dict[EntityType, list[Any]] | None = None) -> None:
        self.rows = rows or {}
        self.failing: set[EntityType] = set()

    async def fetch(self, entity_type: EntityType) -> list[Any]:
        if entity_type in self.failing:
            raise RuntimeError(f"{entity_type.value} table unavailable")
        return list(self.rows.get(entity_type, []))


class FakePlatformReader:
    """PlatformReader double backed by dictionaries."""

    def __init__(
        self,
        profiles: dict[str, dict[str, Any]] | None = None,
        peer_posts: dict[str, list[str]] | None = None,
        stats: dict[str, Any] | None = None,
    ) -> None:
        self.profiles = profiles or {}
        self.peer_posts = peer_posts or {}
        self.stats = stats or {
            "job_count": 3,
            "product_count": 2,
            "org_count": 1,
            "user_count": 10,
            "question_count": 4,
        }

    async def get_profile(self, user_id: str):
        return self.profiles.get(user_id)

    async def get_peer_post_ids(self, user_id: str, limit: int) -> list[str]:
        return self.peer_posts.get(user_id, [])[:limit]

    async def get_stats(self) -> dict[str, Any]:
        return dict(self.stats)


@pytest.fixture
def embedding_settings() -> EmbeddingSettings:
    """Fast, check-free embedding settings."""
    return EmbeddingSettings(
        provider="openai",
        dimension=None,
        timeout_seconds=1.0,
        max_attempts=2,
        retry_initial_wait=0.0,
        retry_max_wait=0.0,
    )


@pytest.fixture
def retrieval_settings() -> RetrievalSettings:
    return RetrievalSettings()


@pytest.fixture
def keyword_embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture
def embedder(embedding_settings: EmbeddingSettings, keyword_embeddings: KeywordEmbeddings) -> EmbeddingProvider:
    return EmbeddingProvider(embedding_settings, embeddings=keyword_embeddings)


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def retrieval_service(embedder: EmbeddingProvider, document_store: InMemoryDocumentStore) -> RetrievalService:
    return RetrievalService(embedder, document_store, strict_provider_check=True)


@pytest.fixture
def user_id() -> str:
    return str(uuid.uuid4())
