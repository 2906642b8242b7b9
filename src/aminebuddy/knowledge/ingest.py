"""Ingestion of biographical content into the knowledge store."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import frontmatter

from ..errors import IngestionError
from .embedding import EmbeddingProvider
from .models import ChunkingOptions, IngestResult, Passage, SourceDocument
from .splitter import split_markdown, split_text
from .store import KnowledgeStore

log = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".md", ".markdown", ".txt")


def load_documents(paths: Iterable[Path]) -> list[SourceDocument]:
    """Read text and markdown files into source documents.

    Markdown frontmatter becomes document metadata. Every document records
    its ``source`` path and ``format``; directories are searched
    recursively for supported files.

    Args:
        paths: Files or directories

    Returns:
        Documents in path order

    Raises:
        FileNotFoundError: If a path does not exist
    """
    files: list[Path] = []
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"No such file or directory: {path}")
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.suffix.lower() in SUPPORTED_SUFFIXES)
            )
        else:
            files.append(path)

    documents = []
    for file_path in files:
        if file_path.suffix.lower() in (".md", ".markdown"):
            post = frontmatter.load(file_path)
            metadata: dict[str, Any] = dict(post.metadata)
            metadata.setdefault("source", str(file_path))
            metadata["format"] = "markdown"
            documents.append(SourceDocument(content=post.content, metadata=metadata))
        else:
            documents.append(
                SourceDocument(
                    content=file_path.read_text(encoding="utf-8"),
                    metadata={"source": str(file_path), "format": "text"}
                )
            )
    return documents


class IngestionPipeline:
    """Split, embed and store documents.

    Hidden design decisions:
    - Splitter choice per document format
    - Embedding batch size
    - Passage metadata layout (document metadata + chunk_index)
    """

    def __init__(
        self,
        store: KnowledgeStore,
        embedder: EmbeddingProvider,
        batch_size: int = 64
    ):
        self._store = store
        self._embedder = embedder
        self._batch_size = batch_size

    def split(self, document: SourceDocument, options: ChunkingOptions) -> list[Passage]:
        """Split one document into passages."""
        splitter = split_markdown if document.metadata.get("format") == "markdown" else split_text
        pieces = splitter(document.content, options.chunk_size, options.chunk_overlap)

        return [
            Passage(
                namespace=options.namespace,
                text=piece,
                metadata={**document.metadata, "chunk_index": index}
            )
            for index, piece in enumerate(pieces)
        ]

    async def insert_documents(
        self,
        documents: list[SourceDocument],
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        namespace: str = "default"
    ) -> IngestResult:
        """Insert documents into the knowledge store.

        Args:
            documents: Documents to insert
            chunk_size: Maximum characters per passage
            chunk_overlap: Characters shared by consecutive passages
            namespace: Store namespace

        Returns:
            IngestResult with counts

        Raises:
            IngestionError: If splitting, embedding or storage fails
        """
        try:
            options = ChunkingOptions(
                chunk_size=chunk_size,
                chunk_overlap=chunk_overlap,
                namespace=namespace
            )

            log.info("Splitting %d document(s) into chunks", len(documents))
            passages = [p for doc in documents for p in self.split(doc, options)]
            log.info("Created %d chunks from %d document(s)", len(passages), len(documents))

            for start in range(0, len(passages), self._batch_size):
                batch = passages[start:start + self._batch_size]
                embeddings = await self._embedder.embed_batch([p.text for p in batch])
                await self._store.store_passages(batch, embeddings)
                log.debug("Stored passages %d-%d", start, start + len(batch) - 1)

        except Exception as e:
            raise IngestionError(f"Failed to insert data: {e}") from e

        log.info("Inserted %d chunks into namespace %r", len(passages), namespace)

        return IngestResult(
            success=True,
            chunks_inserted=len(passages),
            documents_processed=len(documents)
        )

    async def insert_text(
        self,
        text: str,
        metadata: dict[str, Any] | None = None,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        namespace: str = "default"
    ) -> IngestResult:
        """Insert a single text as one document."""
        document = SourceDocument(content=text, metadata=metadata or {})
        return await self.insert_documents(
            [document],
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            namespace=namespace
        )
