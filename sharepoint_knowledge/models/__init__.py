"""
Domain models.

Exports: DocumentReference, AnalyzedPage, Chunk, EmbeddingResponse
"""

from .document import AnalyzedPage, Chunk, DocumentReference
from .embedding import EmbeddingData, EmbeddingResponse, EmbeddingUsage

__all__ = [
    "DocumentReference",
    "AnalyzedPage",
    "Chunk",
    "EmbeddingResponse",
    "EmbeddingData",
    "EmbeddingUsage",
]
