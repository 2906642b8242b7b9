"""Anthropic Claude provider.

Claude takes the system prompt as a separate request field and requires
``max_tokens``; both are handled here so callers can pass the same
ChatMessage list to any provider.
"""

from collections.abc import AsyncIterator
from typing import Any

from anthropic import AsyncAnthropic

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, StreamingResponse

DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider.

    Hidden design decisions:
    - AsyncAnthropic client construction
    - Extraction of the system message into the ``system`` field
    - Usage assembly from message_start / message_delta events
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        self._model = model
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    def _request(
        self,
        messages: list[ChatMessage],
        model: str | None,
        temperature: float,
        max_tokens: int | None,
        **kwargs: Any
    ) -> dict[str, Any]:
        system = [m.content for m in messages if m.role == "system"]
        params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [
                {"role": m.role, "content": m.content}
                for m in messages if m.role != "system"
            ],
            "temperature": temperature,
            "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
            **kwargs
        }
        if system:
            params["system"] = "\n\n".join(system)
        return params

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        reply = await self._client.messages.create(
            **self._request(messages, model, temperature, max_tokens, **kwargs)
        )

        usage = None
        if reply.usage:
            usage = {
                "prompt_tokens": reply.usage.input_tokens,
                "completion_tokens": reply.usage.output_tokens,
                "total_tokens": reply.usage.input_tokens + reply.usage.output_tokens
            }

        text = "".join(block.text for block in reply.content if hasattr(block, "text"))

        return LLMResponse(content=text, model=reply.model, usage=usage)

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        params = self._request(messages, model, temperature, max_tokens, **kwargs)
        response = StreamingResponse()
        response.bind(self._fragments(params, response))
        return response

    async def _fragments(
        self,
        params: dict[str, Any],
        response: StreamingResponse
    ) -> AsyncIterator[str]:
        input_tokens = 0
        output_tokens = 0

        async with self._client.messages.stream(**params) as stream:
            async for event in stream:
                kind = getattr(event, "type", None)
                if kind == "message_start":
                    input_tokens = event.message.usage.input_tokens
                elif kind == "message_delta":
                    output_tokens = event.usage.output_tokens
                elif kind == "content_block_delta" and hasattr(event.delta, "text"):
                    yield event.delta.text

        response.set_usage(input_tokens, output_tokens)

    async def close(self) -> None:
        await self._client.close()
