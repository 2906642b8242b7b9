"""Portfolio agent: retrieval-augmented answers about Amine."""

from .data_structures import (
    AgentOverrides,
    QueryResult,
    Source,
    ToolCall,
    ToolCallResult,
    UsageSummary,
)
from .factory import create_portfolio_agent
from .portfolio_agent import PortfolioAgent
from .runtime import AgentRuntime
from .tools import BaseTool, KnowledgeBaseTool, format_context

__all__ = [
    "AgentOverrides",
    "AgentRuntime",
    "BaseTool",
    "KnowledgeBaseTool",
    "PortfolioAgent",
    "QueryResult",
    "Source",
    "ToolCall",
    "ToolCallResult",
    "UsageSummary",
    "create_portfolio_agent",
    "format_context",
]
