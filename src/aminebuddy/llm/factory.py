from typing import Any

from .base import LLMProvider
from .providers import AnthropicProvider, OpenAIProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider.

    Args:
        provider: 'openai' or 'anthropic' (alias 'claude')
        **config: Provider configuration
            - api_key: str (required)
            - model: str (default: 'gpt-4o-mini' / 'claude-sonnet-4-20250514')
            - base_url: str | None

    Returns:
        Provider instance

    Raises:
        ValueError: If the provider is not supported
        TypeError: If api_key is missing

    Examples:
        >>> llm = create_llm_provider("openai", api_key="sk-...", model="gpt-4o-mini")
    """
    name = provider.lower()

    if name == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIProvider(**config)

    if name in ("anthropic", "claude"):
        if "api_key" not in config:
            raise TypeError("Anthropic provider requires 'api_key' in config")
        return AnthropicProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai', 'anthropic'"
    )
