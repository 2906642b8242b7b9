"""Knowledge base of biographical passages.

Hidden design decisions:
- Vector database (PostgreSQL + pgvector)
- Embedding model
- How documents are split into passages
"""

from .embedding import EmbeddingProvider, OpenAIEmbeddingProvider, create_embedding_provider
from .factory import create_knowledge_store
from .ingest import IngestionPipeline, load_documents
from .models import (
    ChunkingOptions,
    IndexConfig,
    IngestResult,
    KnowledgeStats,
    Passage,
    RetrievedPassage,
    SourceDocument,
)
from .splitter import split_markdown, split_text
from .store import KnowledgeStore

__all__ = [
    "ChunkingOptions",
    "EmbeddingProvider",
    "IndexConfig",
    "IngestResult",
    "IngestionPipeline",
    "KnowledgeStats",
    "KnowledgeStore",
    "OpenAIEmbeddingProvider",
    "Passage",
    "RetrievedPassage",
    "SourceDocument",
    "create_embedding_provider",
    "create_knowledge_store",
    "load_documents",
    "split_markdown",
    "split_text",
]
