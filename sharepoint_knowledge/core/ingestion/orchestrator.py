"""
Ingestion orchestrator.

Per-document upload, ingest and delete across the blob store and the search
indexes. Each operation reduces every failure to False; nothing is raised past
this boundary.

Dependencies: boundary.azure, boundary.graph, core.ingestion.chunking
System role: Entry point for document events
"""

import logging
import os

from sharepoint_knowledge.boundary.azure.blob_store import BlobDocumentStore
from sharepoint_knowledge.boundary.azure.search_store import SearchIndexStore
from sharepoint_knowledge.boundary.graph.document_fetcher import FetchPrivilege
from sharepoint_knowledge.core.constants import CONTENT_TYPES, OCTET_STREAM
from sharepoint_knowledge.core.exceptions import (
    IndexOperationFailedError,
    OrphanedIndexEntriesError,
)
from sharepoint_knowledge.core.ingestion.chunking import ChunkingPipeline, Fetcher
from sharepoint_knowledge.models.document import DocumentReference
from sharepoint_knowledge.observability.log_utils import document_context, log_exception_with_context

logger = logging.getLogger(__name__)

# Key and URL fields of the pull-pipeline index
PULL_PIPELINE_KEY_FIELD = "chunkId"
PULL_PIPELINE_URL_FIELD = "url"


def normalize_url(url: str) -> str:
    """Trim and lowercase a URL. Must match the value written to blob metadata."""
    return url.strip().lower()


def escape_filter_value(url: str) -> str:
    """Normalized URL with spaces percent-escaped, for use inside an OData filter."""
    return normalize_url(url).replace(" ", "%20")


def url_filter(field: str, url: str) -> str:
    """OData equality filter on a URL field. Single quotes are doubled inside the literal."""
    literal = escape_filter_value(url).replace("'", "''")
    return f"{field} eq '{literal}'"


def content_type_for(name: str) -> str:
    """MIME type for a file name, matched on its extension case-insensitively."""
    _, extension = os.path.splitext(name)
    return CONTENT_TYPES.get(extension.lower(), OCTET_STREAM)


def blob_metadata(doc: DocumentReference) -> dict[str, str]:
    """Metadata stored on a document blob, projected into the pull-pipeline index."""
    return {
        "title": doc.title,
        "itemId": doc.item_id,
        "driveId": doc.drive_id,
        "url": normalize_url(doc.url),
    }


class IngestionOrchestrator:
    """Keeps the blob container and the search indexes in step for single documents."""

    def __init__(
        self,
        fetcher: Fetcher,
        chunker: ChunkingPipeline,
        blob_store: BlobDocumentStore,
        prevectorized_index: SearchIndexStore,
        pull_pipeline_index: SearchIndexStore,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            fetcher: SharePoint document fetcher
            chunker: Local chunking pipeline
            blob_store: Blob container feeding the pull pipeline
            prevectorized_index: Index receiving locally produced chunks
            pull_pipeline_index: Index populated by the indexer from blobs
        """
        self._fetcher = fetcher
        self._chunker = chunker
        self._blobs = blob_store
        self._prevectorized = prevectorized_index
        self._pull_pipeline = pull_pipeline_index

    async def upload(self, doc: DocumentReference) -> bool:
        """Copy a document from SharePoint into the blob container."""
        try:
            content = await self._fetcher.fetch(doc, FetchPrivilege.MOST)
            if not content:
                logger.error(f"File {doc} has no content", extra=document_context(doc))
                return False

            await self._blobs.upload(
                name=doc.name,
                content=content,
                content_type=content_type_for(doc.name),
                metadata=blob_metadata(doc),
            )
        except Exception as e:
            log_exception_with_context(
                logger, f"Unable to upload {doc.name}", e, **document_context(doc)
            )
            return False

        logger.info(f"Uploaded {doc.name} to blob storage", extra=document_context(doc))
        return True

    async def ingest(self, doc: DocumentReference) -> bool:
        """
        Chunk a document locally and write all chunks to the pre-vectorized index.

        Returns True only when every chunk in the batch was written.
        """
        try:
            chunks = await self._chunker.chunk(doc)
            results = await self._prevectorized.upload_documents(
                [chunk.to_index_document() for chunk in chunks]
            )
        except Exception as e:
            log_exception_with_context(
                logger, f"Unable to ingest {doc.name}", e, **document_context(doc)
            )
            return False

        failed = [result for result in results if not result.succeeded]
        for result in failed:
            logger.error(
                f"Failed to index chunk {result.key}",
                extra={
                    **document_context(doc),
                    "chunk_id": result.key,
                    "status_code": result.status_code,
                    "error_msg": result.error_message,
                },
            )
        if failed:
            logger.error(
                f"{len(failed)} of {len(results)} chunks of {doc.name} failed to index",
                extra=document_context(doc),
            )
            return False

        logger.info(
            f"Ingested {len(results)} chunks of {doc.name}",
            extra={**document_context(doc), "chunk_count": len(results)},
        )
        return True

    async def delete(self, doc: DocumentReference) -> bool:
        """
        Delete a document's blob and then its chunks in the pull-pipeline index.

        A missing blob leaves the index untouched. A deleted blob with no
        matching index rows is reported as a failure.
        """
        try:
            deleted = await self._blobs.delete_if_exists(doc.name)
            if not deleted:
                logger.warning(
                    f"File {doc.name} not found in blob storage",
                    extra=document_context(doc),
                )
                return False

            keys = await self._pull_pipeline.find_keys(
                url_filter(PULL_PIPELINE_URL_FIELD, doc.url),
                PULL_PIPELINE_KEY_FIELD,
            )
            if not keys:
                raise OrphanedIndexEntriesError(
                    f"No index entries found for {doc.name}",
                    url=doc.url,
                    details={"index_name": self._pull_pipeline.index_name},
                )

            results = await self._pull_pipeline.delete_by_keys(PULL_PIPELINE_KEY_FIELD, keys)
            failed = [result.key for result in results if not result.succeeded]
            if failed:
                raise IndexOperationFailedError(
                    f"Failed to delete {len(failed)} index entries for {doc.name}",
                    step="delete",
                    details={"failed_keys": failed},
                )
        except Exception as e:
            log_exception_with_context(
                logger, f"Unable to delete {doc.name}", e, **document_context(doc)
            )
            return False

        logger.info(
            f"Deleted {doc.name} and {len(keys)} index entries",
            extra={**document_context(doc), "chunk_count": len(keys)},
        )
        return True
