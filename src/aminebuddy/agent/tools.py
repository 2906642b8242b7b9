"""Tools available to the portfolio agent."""

import logging
from abc import ABC, abstractmethod

from ..knowledge import EmbeddingProvider, KnowledgeStore, RetrievedPassage
from .data_structures import ToolCall, ToolCallResult

log = logging.getLogger(__name__)


class BaseTool(ABC):
    """A capability the agent invokes by name."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the agent dispatches on."""

    @abstractmethod
    async def execute(self, tool_call: ToolCall) -> ToolCallResult:
        """Run the tool."""

    async def close(self) -> None:
        """Release resources held by the tool."""


class KnowledgeBaseTool(BaseTool):
    """Semantic search over Amine's portfolio knowledge base.

    Arguments: ``query`` (required) and ``limit`` (passages to return).

    Hidden design decisions:
    - Query embedding
    - Namespace scoping
    - Context formatting for the prompt
    """

    def __init__(
        self,
        store: KnowledgeStore,
        embedder: EmbeddingProvider,
        namespace: str | None = None,
        default_limit: int = 5
    ):
        self._store = store
        self._embedder = embedder
        self._namespace = namespace
        self._default_limit = default_limit

    @property
    def name(self) -> str:
        return "search_knowledge_base"

    async def retrieve(self, query: str, limit: int | None = None) -> list[RetrievedPassage]:
        """Return the passages most similar to the query."""
        embedding = await self._embedder.embed_text(query)
        passages = await self._store.similarity_search(
            embedding,
            limit=limit or self._default_limit,
            namespace=self._namespace
        )
        log.debug("Retrieved %d passage(s) for %r", len(passages), query[:60])
        return passages

    async def retrieve_with_context(
        self,
        query: str,
        limit: int | None = None
    ) -> tuple[list[RetrievedPassage], str]:
        """Retrieve passages and format them as prompt context.

        Returns:
            Tuple of (passages, context string)
        """
        passages = await self.retrieve(query, limit)
        return passages, format_context(passages)

    async def execute(self, tool_call: ToolCall) -> ToolCallResult:
        query = tool_call.arguments.get("query", "")
        if not query:
            return ToolCallResult(
                tool_call_id=tool_call.id_,
                content="Error: query parameter is required",
                error=True
            )

        passages, context = await self.retrieve_with_context(query, tool_call.arguments.get("limit"))
        return ToolCallResult(
            tool_call_id=tool_call.id_,
            content=context or "No relevant information found in the knowledge base.",
            passages=passages
        )

    async def health_check(self) -> bool:
        return await self._store.health_check()

    async def close(self) -> None:
        await self._embedder.close()
        await self._store.disconnect()


def format_context(passages: list[RetrievedPassage]) -> str:
    """Render passages as numbered documents for the prompt."""
    parts = []
    for item in passages:
        source = item.passage.metadata.get("source", "portfolio")
        parts.append(
            f"[Document {item.rank}]\n"
            f"Source: {source}\n"
            f"Content:\n{item.passage.text}\n"
        )
    return "\n---\n\n".join(parts)
