"""Provider factory functions for CLI.

Centralizes creation of the knowledge store, embedder and chat transport
from settings. Hides configuration details from command implementations.
"""

import typer
from rich.console import Console

from ..chat import ActionTransport, ChatTransport, RemoteAction, StreamingTransport
from ..config import Settings
from ..knowledge import (
    EmbeddingProvider,
    IngestionPipeline,
    KnowledgeStore,
    create_embedding_provider,
    create_knowledge_store,
)

# Default console for output
_console = Console()

DEFAULT_EMBEDDING_DIMENSION = 1536


def get_store(settings: Settings, embedding_dimension: int = DEFAULT_EMBEDDING_DIMENSION) -> KnowledgeStore:
    """Create the knowledge store from settings.

    Args:
        settings: Loaded configuration
        embedding_dimension: Vector size of the embedding model

    Returns:
        Unconnected pgvector knowledge store
    """
    return create_knowledge_store(
        "postgres",
        **settings.database.model_dump(),
        embedding_dimension=embedding_dimension
    )


def get_embedder(settings: Settings, console: Console | None = None) -> EmbeddingProvider:
    """Create the embedding provider from settings.

    Raises:
        typer.Exit: If OPENAI_API_KEY is not set
    """
    con = console or _console
    api_key = settings.model.openai_api_key
    if not api_key:
        con.print("[red]Error: OPENAI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)

    return create_embedding_provider(
        "openai",
        api_key=api_key,
        model=settings.model.embedding_model
    )


def get_pipeline(
    settings: Settings,
    console: Console | None = None
) -> tuple[IngestionPipeline, KnowledgeStore, EmbeddingProvider]:
    """Create an ingestion pipeline with its store and embedder.

    Returns:
        Tuple of (pipeline, store, embedder); the caller connects and closes
    """
    embedder = get_embedder(settings, console)
    store = get_store(settings, embedder.dimension)
    return IngestionPipeline(store, embedder), store, embedder


def get_transport(api_url: str, sync: bool = False) -> ChatTransport:
    """Create the chat transport for the terminal widget.

    Args:
        api_url: Base URL of a running ``aminebuddy serve``
        sync: Use the one-shot action endpoint instead of streaming
    """
    if sync:
        return ActionTransport(RemoteAction(api_url))
    return StreamingTransport(api_url)
