from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, StreamingResponse


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider.

    Hidden design decisions:
    - AsyncOpenAI client construction
    - Request parameter assembly (max_tokens only when set)
    - Usage capture from the final stream chunk
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: OpenAI API key
            model: Default chat model
            base_url: Optional API base URL (proxies, compatible servers)
            organization: Optional organization ID
            **client_kwargs: Passed through to AsyncOpenAI
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
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
        params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            **kwargs
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        return params

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        completion = await self._client.chat.completions.create(
            **self._request(messages, model, temperature, max_tokens, **kwargs)
        )

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model,
            usage=usage
        )

    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        params = self._request(messages, model, temperature, max_tokens, **kwargs)
        params["stream"] = True
        params["stream_options"] = {"include_usage": True}

        response = StreamingResponse()
        response.bind(self._fragments(params, response))
        return response

    async def _fragments(
        self,
        params: dict[str, Any],
        response: StreamingResponse
    ) -> AsyncIterator[str]:
        stream = await self._client.chat.completions.create(**params)

        async for chunk in stream:
            if chunk.usage is not None:
                response.set_usage(chunk.usage.prompt_tokens, chunk.usage.completion_tokens)
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content

    async def close(self) -> None:
        await self._client.close()
