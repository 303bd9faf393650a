"""
Search index data-plane client.

Batch upload, filtered key lookup and key-based delete against a single
Azure AI Search index.

Dependencies: azure.search.documents
System role: Index writer for the ingestion orchestrator
"""

import logging
from typing import Any

from azure.core.exceptions import AzureError, HttpResponseError
from azure.search.documents.aio import SearchClient
from azure.search.documents.models import IndexingResult

from sharepoint_knowledge.core.exceptions import IndexOperationFailedError

logger = logging.getLogger(__name__)


def error_body(exc: BaseException) -> str:
    """Error text reported by the search service, falling back to the exception text."""
    if isinstance(exc, HttpResponseError) and exc.message:
        return exc.message
    return str(exc)


class SearchIndexStore:
    """Documents in one search index."""

    def __init__(self, client: SearchClient, index_name: str) -> None:
        self._client = client
        self.index_name = index_name

    async def upload_documents(self, documents: list[dict[str, Any]]) -> list[IndexingResult]:
        """
        Upload documents as one batch.

        Returns one result per document; individual items may fail while the
        batch call itself succeeds.

        Raises:
            IndexOperationFailedError: When the batch call is rejected
        """
        try:
            return await self._client.upload_documents(documents=documents)
        except AzureError as e:
            raise self._failure("batch upload", e) from e

    async def find_keys(self, filter_expression: str, key_field: str) -> list[str]:
        """
        Return the key of every document matching an OData filter.

        Raises:
            IndexOperationFailedError: When the search request fails
        """
        keys: list[str] = []
        try:
            results = await self._client.search(
                search_text="*",
                filter=filter_expression,
                select=[key_field],
                include_total_count=True,
            )
            async for result in results:
                keys.append(result[key_field])
        except AzureError as e:
            raise self._failure("search", e) from e
        return keys

    async def delete_by_keys(self, key_field: str, keys: list[str]) -> list[IndexingResult]:
        """
        Delete documents by key.

        Raises:
            IndexOperationFailedError: When the delete batch is rejected
        """
        try:
            return await self._client.delete_documents(
                documents=[{key_field: key} for key in keys]
            )
        except AzureError as e:
            raise self._failure("delete", e) from e

    def _failure(self, step: str, exc: BaseException) -> IndexOperationFailedError:
        body = error_body(exc)
        logger.error(
            f"Search index {step} failed",
            extra={"index_name": self.index_name, "step": step, "error_body": body},
        )
        return IndexOperationFailedError(
            f"Search index {step} failed: {body}",
            step=step,
            error_body=body,
            details={"index_name": self.index_name},
        )
