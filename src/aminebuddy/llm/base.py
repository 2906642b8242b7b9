from abc import ABC, abstractmethod

from .models import ChatMessage, LLMResponse, StreamingResponse


class LLMProvider(ABC):
    """Chat model that writes the portfolio agent's answers.

    Hides which vendor answers questions: SDK client setup, conversion of
    ChatMessage lists to the vendor's request format, and where token usage
    is reported in a stream. ``model=None`` means the provider's default.

        async with create_llm_provider("openai", api_key=key) as llm:
            reply = await llm.chat_completion(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None
    ) -> LLMResponse:
        """Answer in one reply."""

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None
    ) -> StreamingResponse:
        """Answer as text fragments; ``usage`` is set once the stream ends."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
