"""Language model providers used to generate answers."""

from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, StreamingResponse
from .providers import AnthropicProvider, OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "ChatMessage",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "StreamingResponse",
    "create_llm_provider",
]
