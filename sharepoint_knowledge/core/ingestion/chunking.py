"""
Local chunking pipeline.

Splits a document into one chunk per analyzed page and attaches a title vector
(shared by all chunks of the document) and a per-page content vector.

This is the secondary ingestion path. Bulk ingestion normally goes through the
pull pipeline, where the search service chunks and vectorizes blobs itself.

Dependencies: boundary.graph, boundary.foundry
System role: Produces pre-vectorized chunks for the ingestion orchestrator
"""

import logging
from typing import Protocol

from sharepoint_knowledge.boundary.graph.document_fetcher import FetchPrivilege
from sharepoint_knowledge.core.exceptions import InvalidDocumentError
from sharepoint_knowledge.models.document import AnalyzedPage, Chunk, DocumentReference
from sharepoint_knowledge.observability.log_utils import document_context, log_exception_with_context

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("drive_id", "item_id", "name", "url")


class Fetcher(Protocol):
    async def fetch(self, doc: DocumentReference, privilege: FetchPrivilege = ...) -> bytes: ...


class Analyzer(Protocol):
    async def analyze_layout(self, content: bytes, url: str | None = None) -> list[AnalyzedPage]: ...


class Vectorizer(Protocol):
    async def vectorize(self, text: str) -> list[float]: ...


class ChunkingPipeline:
    """Fetch, analyze and vectorize a document page by page."""

    def __init__(self, fetcher: Fetcher, analyzer: Analyzer, vectorizer: Vectorizer) -> None:
        self._fetcher = fetcher
        self._analyzer = analyzer
        self._vectorizer = vectorizer

    async def chunk(self, doc: DocumentReference) -> list[Chunk]:
        """
        Produce one vectorized chunk per page of a document.

        Args:
            doc: Document to chunk

        Returns:
            list[Chunk]: Chunks in page order, all sharing one title vector

        Raises:
            InvalidDocumentError: When a required reference field is empty
            KnowledgeIngestionError: When fetching, analysis or vectorization fails
        """
        missing = [field for field in REQUIRED_FIELDS if not getattr(doc, field)]
        if missing:
            raise InvalidDocumentError(
                f"Document is missing required fields: {', '.join(missing)}",
                field=missing[0],
                details={"url": doc.url},
            )

        logger.warning(
            "Chunking document locally; the indexer pull pipeline is the primary ingestion path",
            extra=document_context(doc),
        )

        try:
            title_vector = await self._vectorizer.vectorize(doc.title)
            content = await self._fetcher.fetch(doc, FetchPrivilege.MOST)
            pages = await self._analyzer.analyze_layout(content, url=doc.url)

            chunks: list[Chunk] = []
            for page in pages:
                logger.info(
                    f"Vectorizing page {page.page_number} of {doc.name}",
                    extra=document_context(doc),
                )
                page_text = page.content
                content_vector = await self._vectorizer.vectorize(page_text)
                chunks.append(
                    Chunk.from_page(doc, page.page_number, page_text, title_vector, content_vector)
                )
        except Exception as e:
            log_exception_with_context(
                logger, f"Unable to chunk {doc.name}", e, **document_context(doc)
            )
            raise

        logger.info(
            f"Chunked {doc.name} into {len(chunks)} chunks",
            extra={**document_context(doc), "chunk_count": len(chunks)},
        )
        return chunks
