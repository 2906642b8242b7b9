"""Question answering over the portfolio knowledge base."""

import logging
from collections.abc import AsyncIterator

from ..errors import AgentError
from ..llm import ChatMessage, LLMProvider
from ..suggestions import suggest_pages
from .data_structures import QueryResult, Source, ToolCall, ToolCallResult, UsageSummary
from .tools import BaseTool, KnowledgeBaseTool

log = logging.getLogger(__name__)


class PortfolioAgent:
    """Answers visitor questions about Amine.

    Each question is dispatched as one ``search_knowledge_base`` tool call;
    the tool result goes to the language model together with the system
    prompt. Page suggestions come from the keyword classifier, never from
    the model.

    Hidden design decisions:
    - Prompt layout (system message + documents + question)
    - Retrieval limit and sampling temperature
    - Error wrapping
    """

    def __init__(
        self,
        retrieval_tool: KnowledgeBaseTool,
        llm: LLMProvider,
        system_prompt: str | None = None,
        retrieval_limit: int = 5,
        temperature: float = 0.7,
        model: str | None = None
    ):
        """Initialize the agent.

        Args:
            retrieval_tool: Knowledge base search tool
            llm: Language model provider
            system_prompt: Custom system prompt (defaults to prompts/system.txt)
            retrieval_limit: Passages retrieved per question
            temperature: Sampling temperature
            model: Model override for the provider
        """
        if system_prompt is None:
            from ..prompts import get_system_prompt
            system_prompt = get_system_prompt()

        self._tool = retrieval_tool
        self._tools: dict[str, BaseTool] = {retrieval_tool.name: retrieval_tool}
        self._llm = llm
        self._system_prompt = system_prompt
        self._retrieval_limit = retrieval_limit
        self._temperature = temperature
        self._model = model
        self.usage = UsageSummary()

    @property
    def tools(self) -> list[BaseTool]:
        return list(self._tools.values())

    async def _run_tool(self, tool_call: ToolCall) -> ToolCallResult:
        tool = self._tools.get(tool_call.tool_name)
        if tool is None:
            raise ValueError(f"Unknown tool: {tool_call.tool_name}")

        result = await tool.execute(tool_call)
        if result.error:
            raise ValueError(result.content)
        return result

    async def _prepare(self, question: str) -> tuple[list[ChatMessage], list[Source]]:
        result = await self._run_tool(
            ToolCall(
                tool_name=self._tool.name,
                arguments={"query": question, "limit": self._retrieval_limit}
            )
        )

        sources = [
            Source(content=p.passage.text, metadata=p.passage.metadata, score=p.score)
            for p in result.passages
        ]
        messages = [
            ChatMessage(role="system", content=self._system_prompt),
            ChatMessage(role="user", content=self._build_prompt(question, result.content)),
        ]
        return messages, sources

    def _build_prompt(self, question: str, context: str) -> str:
        return f"""Documents:
{context}

Question: {question}

Answer:"""

    async def query(self, question: str) -> QueryResult:
        """Answer a question in one piece.

        Args:
            question: Visitor's question

        Returns:
            QueryResult with the answer, suggestions and sources

        Raises:
            AgentError: If retrieval or generation fails
        """
        try:
            messages, sources = await self._prepare(question)
            reply = await self._llm.chat_completion(
                messages,
                model=self._model,
                temperature=self._temperature
            )
        except Exception as e:
            log.error("Query failed: %s", e)
            raise AgentError(f"Failed to query RAG agent: {e}") from e

        self.usage.add_usage(reply.usage)
        pages = suggest_pages(question)

        return QueryResult(
            answer=reply.content,
            suggested_pages=pages or None,
            sources=sources
        )

    async def stream(self, question: str) -> AsyncIterator[str]:
        """Answer a question as a stream of text fragments.

        Args:
            question: Visitor's question

        Yields:
            Answer fragments in order

        Raises:
            AgentError: If retrieval or generation fails
        """
        try:
            messages, _ = await self._prepare(question)
            response = await self._llm.chat_completion_stream(
                messages,
                model=self._model,
                temperature=self._temperature
            )
            async for fragment in response:
                if fragment:
                    yield fragment
        except Exception as e:
            log.error("Stream failed: %s", e)
            raise AgentError(f"Failed to stream RAG agent: {e}") from e

        self.usage.add_usage(response.usage)

    async def health_check(self) -> bool:
        """Whether the knowledge base answers queries."""
        return await self._tool.health_check()

    async def close(self) -> None:
        """Release the model client and knowledge base connections."""
        await self._llm.close()
        await self._tool.close()
