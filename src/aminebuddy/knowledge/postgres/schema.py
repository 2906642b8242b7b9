"""PostgreSQL schema for the knowledge store."""

from typing import Final

ENABLE_VECTOR_EXTENSION: Final[str] = """
CREATE EXTENSION IF NOT EXISTS vector;
"""

CREATE_PASSAGES_TABLE: Final[str] = """
CREATE TABLE IF NOT EXISTS knowledge_passages (
    id UUID PRIMARY KEY,
    namespace TEXT NOT NULL DEFAULT 'default',
    passage_text TEXT NOT NULL,
    metadata JSONB DEFAULT '{{}}'::jsonb,
    embedding vector({dimension}),
    created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
);
"""

CREATE_NAMESPACE_INDEX: Final[str] = """
CREATE INDEX IF NOT EXISTS idx_passages_namespace
ON knowledge_passages (namespace);
"""

CREATE_HNSW_INDEX: Final[str] = """
CREATE INDEX IF NOT EXISTS idx_passages_embedding_hnsw
ON knowledge_passages
USING hnsw (embedding vector_cosine_ops)
WITH (m = {m}, ef_construction = {ef_construction});
"""

UPSERT_PASSAGE: Final[str] = """
INSERT INTO knowledge_passages (id, namespace, passage_text, metadata, embedding)
VALUES ($1, $2, $3, $4, $5)
ON CONFLICT (id) DO UPDATE SET
    namespace = EXCLUDED.namespace,
    passage_text = EXCLUDED.passage_text,
    metadata = EXCLUDED.metadata,
    embedding = EXCLUDED.embedding
"""

SIMILARITY_SEARCH: Final[str] = """
SELECT id, namespace, passage_text, metadata, created_at,
       embedding <=> $1 AS distance
FROM knowledge_passages
{where_clause}
ORDER BY embedding <=> $1
LIMIT $2
"""

NAMESPACE_STATS: Final[str] = """
SELECT namespace,
       COUNT(*) AS passages,
       SUM(pg_column_size(passage_text)) AS size_bytes,
       MAX(created_at) AS last_ingested
FROM knowledge_passages
GROUP BY namespace
"""

DROP_PASSAGES_TABLE: Final[str] = """
DROP TABLE IF EXISTS knowledge_passages CASCADE;
"""
