"""Data structures for the portfolio agent."""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..knowledge import RetrievedPassage
from ..suggestions import PageSuggestion


class ToolCall(BaseModel):
    """A request to run a tool.

    Attributes:
        id_: Unique identifier for this call
        tool_name: Name of the tool
        arguments: Tool arguments
    """

    id_: str = Field(default_factory=lambda: str(uuid.uuid4()))
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolCallResult(BaseModel):
    """Result of running a tool.

    Attributes:
        tool_call_id: ID of the originating ToolCall
        content: Text handed to the model
        error: Whether the tool failed
        passages: Passages behind the content, for citing sources
    """

    tool_call_id: str
    content: str
    error: bool = False
    passages: list[RetrievedPassage] = Field(default_factory=list)


class Source(BaseModel):
    """A knowledge base passage used for an answer."""

    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float = 0.0


class QueryResult(BaseModel):
    """Answer to one question."""

    answer: str
    suggested_pages: list[PageSuggestion] | None = Field(
        default=None,
        description="Pages to link under the answer; None when nothing matched"
    )
    sources: list[Source] = Field(default_factory=list)


class AgentOverrides(BaseModel):
    """Per-agent overrides of the configured model settings."""

    model_config = ConfigDict(frozen=True)

    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_k: int | None = Field(default=None, ge=1, le=50)


class UsageSummary(BaseModel):
    """Token usage across the agent's lifetime."""

    total_calls: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0

    def add_usage(self, usage: dict[str, int] | None) -> None:
        """Add one call's usage (providers may not report it)."""
        self.total_calls += 1
        if usage:
            self.total_input_tokens += usage.get("prompt_tokens", 0)
            self.total_output_tokens += usage.get("completion_tokens", 0)
