"""Unit tests for the LLM provider layer."""
import pytest

from aminebuddy.llm import (
    ChatMessage,
    LLMProvider,
    LLMResponse,
    StreamingResponse,
    create_llm_provider,
)


async def fragments(*parts: str):
    for part in parts:
        yield part


class TestCreateLLMProvider:
    """Tests for create_llm_provider."""

    def test_openai(self):
        provider = create_llm_provider("openai", api_key="sk-test")
        assert provider.model == "gpt-4o-mini"

    @pytest.mark.parametrize("name", ["anthropic", "claude", "Anthropic"])
    def test_anthropic_aliases(self, name: str):
        provider = create_llm_provider(name, api_key="sk-ant", model="claude-sonnet-4-20250514")
        assert provider.model == "claude-sonnet-4-20250514"

    @pytest.mark.parametrize("name", ["openai", "anthropic"])
    def test_requires_api_key(self, name: str):
        with pytest.raises(TypeError, match="api_key"):
            create_llm_provider(name)

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported provider: gemini"):
            create_llm_provider("gemini", api_key="x")

    def test_provider_is_abstract(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore[abstract]


class TestStreamingResponse:
    """Tests for StreamingResponse."""

    @pytest.mark.asyncio
    async def test_iterates_fragments(self):
        response = StreamingResponse(fragments("Hel", "lo"))
        assert [f async for f in response] == ["Hel", "lo"]

    @pytest.mark.asyncio
    async def test_unbound_is_empty(self):
        assert [f async for f in StreamingResponse()] == []

    @pytest.mark.asyncio
    async def test_usage_after_exhaustion(self):
        response = StreamingResponse()

        async def source():
            yield "Hi"
            response.set_usage(12, 3)

        response.bind(source())
        assert response.usage is None

        async for _ in response:
            pass

        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15}

    @pytest.mark.asyncio
    async def test_aclose_stops_generator(self):
        closed = []

        async def source():
            try:
                yield "a"
                yield "b"
            finally:
                closed.append(True)

        response = StreamingResponse(source())
        assert await response.__anext__() == "a"

        await response.aclose()
        assert closed == [True]


class TestModels:
    """Tests for message models."""

    def test_messages_are_frozen(self):
        message = ChatMessage(role="user", content="Hi")
        with pytest.raises(ValueError):
            message.content = "Bye"  # type: ignore[misc]

    def test_response_usage_optional(self):
        assert LLMResponse(content="Hi", model="gpt-4o-mini").usage is None


class TestProvidersIntegration:
    """Calls to real model APIs."""

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_openai_completion(self, api_keys, sample_messages):
        if not api_keys["openai"]:
            pytest.skip("OPENAI_API_KEY not set")

        async with create_llm_provider("openai", api_key=api_keys["openai"]) as llm:
            reply = await llm.chat_completion(sample_messages, max_tokens=20)

        assert reply.content
        assert reply.usage is not None

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_anthropic_stream(self, api_keys, sample_messages):
        if not api_keys["anthropic"]:
            pytest.skip("ANTHROPIC_API_KEY not set")

        async with create_llm_provider("anthropic", api_key=api_keys["anthropic"]) as llm:
            stream = await llm.chat_completion_stream(sample_messages, max_tokens=20)
            text = "".join([f async for f in stream])

        assert text
        assert stream.usage is not None
