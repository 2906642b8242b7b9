from .store import PgVectorKnowledgeStore

__all__ = ["PgVectorKnowledgeStore"]
