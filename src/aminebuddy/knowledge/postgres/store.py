"""pgvector knowledge store."""

import json
import logging
from typing import Any
from uuid import UUID

import asyncpg
import numpy as np
from numpy.typing import NDArray
from pgvector.asyncpg import register_vector

from ..models import IndexConfig, KnowledgeStats, Passage, RetrievedPassage
from ..store import KnowledgeStore
from . import schema

log = logging.getLogger(__name__)


class PgVectorKnowledgeStore(KnowledgeStore):
    """
    PostgreSQL + pgvector knowledge store.

    Hides all Postgres-specific details:
    - Connection pooling
    - SQL construction
    - Cosine distance to similarity conversion
    """

    def __init__(
        self,
        host: str,
        port: int,
        database: str,
        user: str,
        password: str,
        min_pool_size: int = 1,
        max_pool_size: int = 5,
        embedding_dimension: int = 1536
    ):
        self._host = host
        self._port = port
        self._database = database
        self._user = user
        self._password = password
        self._min_pool_size = min_pool_size
        self._max_pool_size = max_pool_size
        self._embedding_dimension = embedding_dimension
        self._pool: asyncpg.Pool | None = None

    @property
    def embedding_dimension(self) -> int:
        return self._embedding_dimension

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Not connected to database")
        return self._pool

    def _check_dimension(self, embedding: NDArray[np.float32], label: str) -> None:
        if embedding.shape[0] != self._embedding_dimension:
            raise ValueError(
                f"{label} dimension {embedding.shape[0]} doesn't match "
                f"expected {self._embedding_dimension}"
            )

    async def connect(self) -> None:
        if self._pool is not None:
            return

        async def init(conn: asyncpg.Connection) -> None:
            await register_vector(conn)

        try:
            # register_vector fails unless the extension exists, so create it first
            conn = await asyncpg.connect(
                host=self._host,
                port=self._port,
                database=self._database,
                user=self._user,
                password=self._password
            )
            try:
                await conn.execute(schema.ENABLE_VECTOR_EXTENSION)
            finally:
                await conn.close()

            self._pool = await asyncpg.create_pool(
                host=self._host,
                port=self._port,
                database=self._database,
                user=self._user,
                password=self._password,
                min_size=self._min_pool_size,
                max_size=self._max_pool_size,
                command_timeout=60.0,
                init=init
            )
        except (OSError, asyncpg.PostgresError) as e:
            raise ConnectionError(f"Failed to connect to PostgreSQL: {e}") from e

        log.debug("Connected to %s:%s/%s", self._host, self._port, self._database)

    async def disconnect(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def initialize_schema(self, config: IndexConfig) -> None:
        pool = self._require_pool()

        async with pool.acquire() as conn:
            await conn.execute(
                schema.CREATE_PASSAGES_TABLE.format(dimension=self._embedding_dimension)
            )
            await conn.execute(schema.CREATE_NAMESPACE_INDEX)
            await conn.execute(
                schema.CREATE_HNSW_INDEX.format(
                    m=config.hnsw_m,
                    ef_construction=config.hnsw_ef_construction
                )
            )

    async def store_passages(
        self,
        passages: list[Passage],
        embeddings: list[NDArray[np.float32]]
    ) -> list[str]:
        if len(passages) != len(embeddings):
            raise ValueError("Number of passages must match number of embeddings")

        pool = self._require_pool()

        for i, emb in enumerate(embeddings):
            self._check_dimension(emb, f"Embedding {i}")

        async with pool.acquire() as conn, conn.transaction():
            await conn.executemany(
                schema.UPSERT_PASSAGE,
                [
                    (
                        UUID(passage.id),
                        passage.namespace,
                        passage.text,
                        json.dumps(passage.metadata),
                        emb
                    )
                    for passage, emb in zip(passages, embeddings, strict=True)
                ]
            )

        return [passage.id for passage in passages]

    async def similarity_search(
        self,
        query_embedding: NDArray[np.float32],
        limit: int = 5,
        namespace: str | None = None
    ) -> list[RetrievedPassage]:
        pool = self._require_pool()
        self._check_dimension(query_embedding, "Query embedding")

        params: list[Any] = [query_embedding, limit]
        where_clause = ""
        if namespace:
            where_clause = "WHERE namespace = $3"
            params.append(namespace)

        async with pool.acquire() as conn:
            rows = await conn.fetch(
                schema.SIMILARITY_SEARCH.format(where_clause=where_clause),
                *params
            )

        return [
            RetrievedPassage(
                passage=Passage(
                    id=str(row["id"]),
                    namespace=row["namespace"],
                    text=row["passage_text"],
                    metadata=json.loads(row["metadata"]) if row["metadata"] else {},
                    created_at=row["created_at"]
                ),
                score=1.0 - float(row["distance"]),
                rank=rank
            )
            for rank, row in enumerate(rows, 1)
        ]

    async def get_stats(self) -> KnowledgeStats:
        pool = self._require_pool()

        async with pool.acquire() as conn:
            rows = await conn.fetch(schema.NAMESPACE_STATS)

        namespaces = {row["namespace"]: row["passages"] for row in rows}
        last = [row["last_ingested"] for row in rows if row["last_ingested"] is not None]

        return KnowledgeStats(
            total_passages=sum(namespaces.values()),
            namespaces=namespaces,
            total_size_bytes=sum(row["size_bytes"] or 0 for row in rows),
            last_ingested=max(last) if last else None
        )

    async def health_check(self) -> bool:
        if self._pool is None:
            return False

        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (OSError, asyncpg.PostgresError) as e:
            log.warning("Knowledge store health check failed: %s", e)
            return False
        return True

    async def clear_namespace(self, namespace: str | None = None) -> int:
        pool = self._require_pool()

        async with pool.acquire() as conn:
            if namespace is None:
                result = await conn.execute("DELETE FROM knowledge_passages")
            else:
                result = await conn.execute(
                    "DELETE FROM knowledge_passages WHERE namespace = $1",
                    namespace
                )

        # result looks like "DELETE 12"
        return int(result.split()[-1]) if result else 0

    async def drop_schema(self) -> None:
        pool = self._require_pool()

        try:
            async with pool.acquire() as conn:
                await conn.execute(schema.DROP_PASSAGES_TABLE)
        except asyncpg.PostgresError as e:
            raise RuntimeError(f"Failed to drop schema: {e}") from e
