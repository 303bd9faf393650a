"""
Document ingestion.

Exports: ChunkingPipeline, IngestionOrchestrator, normalize_url, escape_filter_value, content_type_for
"""

from .chunking import ChunkingPipeline
from .orchestrator import (
    IngestionOrchestrator,
    content_type_for,
    escape_filter_value,
    normalize_url,
)

__all__ = [
    "ChunkingPipeline",
    "IngestionOrchestrator",
    "content_type_for",
    "escape_filter_value",
    "normalize_url",
]
