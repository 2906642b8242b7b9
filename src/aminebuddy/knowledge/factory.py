from typing import Any

from .postgres import PgVectorKnowledgeStore
from .store import KnowledgeStore


def create_knowledge_store(backend: str = "postgres", **config: Any) -> KnowledgeStore:
    """
    Create a knowledge store.

    Args:
        backend: Backend type ("postgres")
        **config: Connection settings (host, port, database, user, password,
            embedding_dimension)

    Returns:
        Unconnected knowledge store

    Raises:
        ValueError: If the backend is not supported
    """
    if backend.lower() in ("postgres", "pgvector"):
        return PgVectorKnowledgeStore(**config)

    raise ValueError(
        f"Unsupported backend: {backend}. "
        f"Supported backends: 'postgres'"
    )
