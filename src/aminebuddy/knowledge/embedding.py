"""Text embedding providers.

Hidden design decisions:
- Which embedding vendor and model is used
- Batch request shape
- Vector dtype (float32 numpy arrays)
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import NDArray
from openai import AsyncOpenAI


class EmbeddingProvider(ABC):
    """Turns text into fixed-size vectors for similarity search."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Vector length produced by the model."""

    @abstractmethod
    async def embed_text(self, text: str) -> NDArray[np.float32]:
        """Embed a single text (queries)."""

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[NDArray[np.float32]]:
        """Embed several texts in one request (ingestion)."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying client."""


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embeddings endpoint."""

    _MODEL_DIMENSIONS = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-ada-002": 1536,
    }

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize the provider.

        Args:
            api_key: OpenAI API key
            model: Embedding model name
            base_url: Optional API base URL
            **client_kwargs: Passed through to AsyncOpenAI

        Raises:
            ValueError: If the model's dimension is unknown
        """
        if model not in self._MODEL_DIMENSIONS:
            raise ValueError(
                f"Unknown model: {model}. "
                f"Supported models: {list(self._MODEL_DIMENSIONS)}"
            )
        self._model = model
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, **client_kwargs)

    @property
    def dimension(self) -> int:
        return self._MODEL_DIMENSIONS[self._model]

    async def embed_text(self, text: str) -> NDArray[np.float32]:
        response = await self._client.embeddings.create(input=text, model=self._model)
        return np.array(response.data[0].embedding, dtype=np.float32)

    async def embed_batch(self, texts: list[str]) -> list[NDArray[np.float32]]:
        if not texts:
            return []

        response = await self._client.embeddings.create(input=texts, model=self._model)
        ordered = sorted(response.data, key=lambda item: item.index)
        return [np.array(item.embedding, dtype=np.float32) for item in ordered]

    async def close(self) -> None:
        await self._client.close()


def create_embedding_provider(provider: str, **config: Any) -> EmbeddingProvider:
    """Create an embedding provider.

    Args:
        provider: Provider type ('openai')
        **config: api_key (required), model, base_url

    Returns:
        Provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If api_key is missing
    """
    if provider.lower() == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIEmbeddingProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai'"
    )
