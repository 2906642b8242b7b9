from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StreamingResponse:
    """Async iterator over answer fragments that also records token usage.

    Usage becomes available once the provider has seen the end of the
    stream:

        stream = await provider.chat_completion_stream(messages)
        async for fragment in stream:
            ...
        stream.usage  # {"prompt_tokens": ..., "completion_tokens": ...}
    """

    def __init__(self, fragments: AsyncIterator[str] | None = None):
        self._fragments = fragments
        self._usage: dict[str, int] | None = None

    def bind(self, fragments: AsyncIterator[str]) -> None:
        """Attach the fragment source (for generators that report usage back)."""
        self._fragments = fragments

    @property
    def usage(self) -> dict[str, int] | None:
        """Token usage, or None until the stream is exhausted."""
        return self._usage

    def set_usage(self, prompt_tokens: int, completion_tokens: int) -> None:
        """Record usage reported by the provider at the end of the stream."""
        self._usage = {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        }

    def __aiter__(self) -> "StreamingResponse":
        return self

    async def __anext__(self) -> str:
        if self._fragments is None:
            raise StopAsyncIteration
        return await self._fragments.__anext__()

    async def aclose(self) -> None:
        """Close the underlying generator if the consumer stops early."""
        closer: Any = getattr(self._fragments, "aclose", None)
        if closer is not None:
            await closer()


class ChatMessage(BaseModel):
    """One message sent to the language model."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="'system', 'user' or 'assistant'")
    content: str = Field(description="Message text")


class LLMResponse(BaseModel):
    """A complete, non-streamed model reply."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text")
    model: str = Field(description="Model that produced the reply")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage reported by the provider"
    )
