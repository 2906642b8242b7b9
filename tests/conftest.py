"""Pytest configuration and shared fixtures."""
import os
from collections.abc import AsyncIterator
from typing import Any

import numpy as np
import pytest

from aminebuddy.knowledge import (
    EmbeddingProvider,
    IndexConfig,
    KnowledgeStats,
    KnowledgeStore,
    Passage,
    RetrievedPassage,
)
from aminebuddy.llm import ChatMessage, LLMProvider, LLMResponse, StreamingResponse


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "anthropic": os.getenv("ANTHROPIC_API_KEY")
    }


@pytest.fixture(scope="session")
def postgres_config():
    """Return PostgreSQL configuration."""
    return {
        "host": os.getenv("POSTGRES_HOST", "localhost"),
        "port": int(os.getenv("POSTGRES_PORT", "5433")),
        "database": os.getenv("POSTGRES_DB", "aminebuddy"),
        "user": os.getenv("POSTGRES_USER", "aminebuddy"),
        "password": os.getenv("POSTGRES_PASSWORD", "aminebuddy_dev")
    }


class FakeEmbedder(EmbeddingProvider):
    """Deterministic embedder that never calls an API."""

    def __init__(self, dimension: int = 4):
        self._dimension = dimension
        self.batches: list[list[str]] = []
        self.closed = False

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed_text(self, text: str) -> np.ndarray:
        return np.full(self._dimension, len(text) % 7 + 1, dtype=np.float32)

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        self.batches.append(list(texts))
        return [await self.embed_text(t) for t in texts]

    async def close(self) -> None:
        self.closed = True


class FakeStore(KnowledgeStore):
    """In-memory knowledge store returning canned search results."""

    def __init__(self, results: list[RetrievedPassage] | None = None, healthy: bool = True):
        self.results = results or []
        self.healthy = healthy
        self.stored: list[Passage] = []
        self.searches: list[dict[str, Any]] = []
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def initialize_schema(self, config: IndexConfig) -> None:
        pass

    async def store_passages(self, passages, embeddings) -> list[str]:
        if len(passages) != len(embeddings):
            raise ValueError("Number of passages must match number of embeddings")
        self.stored.extend(passages)
        return [p.id for p in passages]

    async def similarity_search(self, query_embedding, limit=5, namespace=None):
        self.searches.append({"limit": limit, "namespace": namespace})
        return self.results[:limit]

    async def get_stats(self) -> KnowledgeStats:
        return KnowledgeStats(total_passages=len(self.stored))

    async def health_check(self) -> bool:
        return self.healthy

    async def clear_namespace(self, namespace=None) -> int:
        count = len(self.stored)
        self.stored.clear()
        return count

    async def drop_schema(self) -> None:
        self.stored.clear()


class FakeLLM(LLMProvider):
    """Language model that replies with a fixed answer."""

    def __init__(self, answer: str = "Amine is a software engineer.", fail: bool = False):
        self.answer = answer
        self.fail = fail
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(self, messages, model=None, temperature=0.7, max_tokens=None, **kwargs):
        self.calls.append({"messages": messages, "model": model, "temperature": temperature})
        if self.fail:
            raise RuntimeError("model unavailable")
        return LLMResponse(
            content=self.answer,
            model=model or self.model,
            usage={"prompt_tokens": 10, "completion_tokens": 5}
        )

    async def chat_completion_stream(self, messages, model=None, temperature=0.7, max_tokens=None, **kwargs):
        self.calls.append({"messages": messages, "model": model, "temperature": temperature})
        if self.fail:
            raise RuntimeError("model unavailable")

        response = StreamingResponse()

        async def fragments() -> AsyncIterator[str]:
            for word in self.answer.split(" "):
                yield word + " "
            response.set_usage(10, 5)

        response.bind(fragments())
        return response

    async def close(self) -> None:
        self.closed = True


def make_passage(text: str, rank: int = 1, score: float = 0.9, **metadata: Any) -> RetrievedPassage:
    """Build a retrieved passage for search results."""
    return RetrievedPassage(
        passage=Passage(text=text, metadata=metadata),
        score=score,
        rank=rank
    )


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_store():
    return FakeStore(
        results=[
            make_passage("Amine works at Intelswift as a full-stack engineer.", rank=1, source="experience.md"),
            make_passage("Amine builds with Python, TypeScript and Next.js.", rank=2, score=0.8, source="skills.md"),
        ]
    )


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def sample_messages():
    return [
        ChatMessage(role="system", content="You are helpful."),
        ChatMessage(role="user", content="Who is Amine?"),
    ]
