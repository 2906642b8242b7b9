"""Tests for the pgvector knowledge store."""
import numpy as np
import pytest

from aminebuddy.knowledge import (
    IndexConfig,
    Passage,
    create_knowledge_store,
)
from aminebuddy.knowledge.postgres import PgVectorKnowledgeStore


def make_store(**overrides) -> PgVectorKnowledgeStore:
    config = {
        "host": "localhost",
        "port": 5433,
        "database": "aminebuddy",
        "user": "aminebuddy",
        "password": "aminebuddy_dev",
        **overrides,
    }
    return PgVectorKnowledgeStore(**config)


class TestFactory:
    """Tests for create_knowledge_store."""

    @pytest.mark.parametrize("backend", ["postgres", "pgvector", "Postgres"])
    def test_postgres(self, backend: str, postgres_config):
        store = create_knowledge_store(backend, **postgres_config)
        assert isinstance(store, PgVectorKnowledgeStore)

    def test_embedding_dimension(self, postgres_config):
        store = create_knowledge_store("postgres", **postgres_config, embedding_dimension=3072)
        assert store.embedding_dimension == 3072

    def test_unsupported_backend(self):
        with pytest.raises(ValueError, match="Unsupported backend"):
            create_knowledge_store("sqlite")


class TestDisconnected:
    """Calls before connect()."""

    @pytest.mark.asyncio
    async def test_health_check_false(self):
        assert await make_store().health_check() is False

    @pytest.mark.asyncio
    async def test_search_requires_connection(self):
        with pytest.raises(RuntimeError, match="Not connected to database"):
            await make_store().similarity_search(np.zeros(1536, dtype=np.float32))

    @pytest.mark.asyncio
    async def test_store_requires_connection(self):
        passage = Passage(text="Amine")
        with pytest.raises(RuntimeError, match="Not connected to database"):
            await make_store().store_passages([passage], [np.zeros(1536, dtype=np.float32)])

    @pytest.mark.asyncio
    async def test_stats_requires_connection(self):
        with pytest.raises(RuntimeError, match="Not connected to database"):
            await make_store().get_stats()

    @pytest.mark.asyncio
    async def test_disconnect_without_pool(self):
        await make_store().disconnect()


@pytest.mark.integration
class TestPgVectorIntegration:
    """Round trips against a running PostgreSQL with pgvector."""

    @pytest.fixture
    async def store(self, postgres_config):
        store = PgVectorKnowledgeStore(**postgres_config, embedding_dimension=4)
        try:
            await store.connect()
        except ConnectionError:
            pytest.skip("PostgreSQL not available")

        await store.drop_schema()
        await store.initialize_schema(IndexConfig())
        yield store
        await store.drop_schema()
        await store.disconnect()

    @pytest.mark.asyncio
    async def test_search_ranks_by_similarity(self, store):
        passages = [
            Passage(namespace="portfolio", text="Python", metadata={"source": "skills.md"}),
            Passage(namespace="portfolio", text="Intelswift", metadata={"source": "experience.md"}),
        ]
        embeddings = [
            np.array([1, 0, 0, 0], dtype=np.float32),
            np.array([0, 1, 0, 0], dtype=np.float32),
        ]
        await store.store_passages(passages, embeddings)

        results = await store.similarity_search(
            np.array([0.9, 0.1, 0, 0], dtype=np.float32),
            limit=2,
            namespace="portfolio"
        )

        assert [r.passage.text for r in results] == ["Python", "Intelswift"]
        assert [r.rank for r in results] == [1, 2]
        assert results[0].score > results[1].score
        assert results[0].passage.metadata == {"source": "skills.md"}

    @pytest.mark.asyncio
    async def test_stats_and_clear(self, store):
        vector = np.ones(4, dtype=np.float32)
        await store.store_passages([Passage(namespace="a", text="x")], [vector])
        await store.store_passages([Passage(namespace="b", text="y")], [vector])

        stats = await store.get_stats()
        assert stats.total_passages == 2
        assert stats.namespaces == {"a": 1, "b": 1}

        assert await store.clear_namespace("a") == 1
        assert (await store.get_stats()).total_passages == 1
        assert await store.health_check() is True

    @pytest.mark.asyncio
    async def test_dimension_mismatch(self, store):
        with pytest.raises(ValueError, match="dimension"):
            await store.store_passages([Passage(text="x")], [np.ones(3, dtype=np.float32)])
