"""Data models for the knowledge base."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class SourceDocument(BaseModel):
    """A piece of biographical content before splitting."""

    content: str = Field(description="Raw document text")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary metadata copied onto every passage"
    )


class Passage(BaseModel):
    """A chunk of a source document as stored in the knowledge base."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    namespace: str = Field(default="default", description="Logical partition")
    text: str = Field(description="Passage text")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Document metadata plus chunk_index"
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()


class RetrievedPassage(BaseModel):
    """A passage returned by similarity search."""

    model_config = ConfigDict(frozen=True)

    passage: Passage
    score: float = Field(description="Cosine similarity, higher is closer")
    rank: int = Field(ge=1)


class KnowledgeStats(BaseModel):
    """Knowledge store statistics."""

    total_passages: int = Field(ge=0)
    namespaces: dict[str, int] = Field(default_factory=dict)
    total_size_bytes: int = Field(ge=0, default=0)
    last_ingested: datetime | None = None


class IndexConfig(BaseModel):
    """Vector index parameters for the knowledge store."""

    hnsw_m: int = Field(default=16, ge=4, le=64)
    hnsw_ef_construction: int = Field(default=64, ge=8, le=512)


class ChunkingOptions(BaseModel):
    """Splitting parameters for ingestion."""

    model_config = ConfigDict(frozen=True)

    chunk_size: int = Field(default=1000, ge=1)
    chunk_overlap: int = Field(default=200, ge=0)
    namespace: str = "default"

    @model_validator(mode="after")
    def check_overlap(self) -> "ChunkingOptions":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


class IngestResult(BaseModel):
    """Outcome of an ingestion run."""

    success: bool
    chunks_inserted: int = Field(ge=0)
    documents_processed: int = Field(ge=0)
