"""Abstract knowledge store."""

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from .models import IndexConfig, KnowledgeStats, Passage, RetrievedPassage


class KnowledgeStore(ABC):
    """
    Vector index of biographical passages.

    Hides all database details:
    - Connection management
    - Table and index layout
    - Similarity metric
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the connection.

        Raises:
            ConnectionError: If the database is unreachable
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection."""

    @abstractmethod
    async def initialize_schema(self, config: IndexConfig) -> None:
        """Create tables and indexes if they do not exist."""

    @abstractmethod
    async def store_passages(
        self,
        passages: list[Passage],
        embeddings: list[NDArray[np.float32]]
    ) -> list[str]:
        """
        Store passages with their embeddings.

        Args:
            passages: Passages to store
            embeddings: One vector per passage, same order

        Returns:
            IDs of the stored passages

        Raises:
            ValueError: If lengths or dimensions do not match
        """

    @abstractmethod
    async def similarity_search(
        self,
        query_embedding: NDArray[np.float32],
        limit: int = 5,
        namespace: str | None = None
    ) -> list[RetrievedPassage]:
        """
        Find the passages closest to a query vector.

        Args:
            query_embedding: Embedded question
            limit: Maximum number of passages
            namespace: Restrict to one namespace

        Returns:
            Passages ordered by decreasing similarity
        """

    @abstractmethod
    async def get_stats(self) -> KnowledgeStats:
        """Return passage counts per namespace."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the store answers queries."""

    @abstractmethod
    async def clear_namespace(self, namespace: str | None = None) -> int:
        """
        Delete passages.

        Args:
            namespace: Namespace to clear, or None for everything

        Returns:
            Number of passages deleted
        """

    @abstractmethod
    async def drop_schema(self) -> None:
        """Drop all tables. Destroys all data."""
