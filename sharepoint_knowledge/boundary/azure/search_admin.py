"""
Search service administrative facade.

Thin wrapper over the index and indexer management clients: get, create and
delete indexes, datasources, skillsets and indexers. Remote errors are logged
with their full body and raised as ProvisioningFailedError.

Dependencies: azure.search.documents
System role: Admin-plane boundary for the provisioning orchestrator
"""

import logging
from dataclasses import dataclass
from enum import Enum

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.search.documents.indexes.aio import SearchIndexClient, SearchIndexerClient
from azure.search.documents.indexes.models import (
    SearchIndex,
    SearchIndexer,
    SearchIndexerDataSourceConnection,
    SearchIndexerSkillset,
)

from sharepoint_knowledge.boundary.azure.search_store import error_body
from sharepoint_knowledge.core.exceptions import ProvisioningFailedError

logger = logging.getLogger(__name__)


class ResourceKind(str, Enum):
    """Search service resources that can be deleted by name."""

    INDEX = "index"
    INDEXER = "indexer"
    DATA_SOURCE = "datasource"
    SKILLSET = "skillset"


class DeleteStatus(str, Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a tolerant delete. ``error`` is set only when FAILED."""

    status: DeleteStatus
    error: str = ""


class SearchAdmin:
    """Administrative operations against one search service."""

    def __init__(self, index_client: SearchIndexClient, indexer_client: SearchIndexerClient) -> None:
        self._indexes = index_client
        self._indexers = indexer_client

    async def get_index(self, name: str) -> SearchIndex | None:
        """Return the index, or None when it does not exist."""
        try:
            return await self._indexes.get_index(name)
        except ResourceNotFoundError:
            return None
        except AzureError as e:
            raise self._failure(f"get index {name}", e) from e

    async def delete_index(self, name: str) -> None:
        try:
            await self._indexes.delete_index(name)
        except AzureError as e:
            raise self._failure(f"delete index {name}", e) from e
        logger.info(f"Deleted search index {name}")

    async def create_index(self, index: SearchIndex) -> SearchIndex:
        try:
            created = await self._indexes.create_index(index)
        except AzureError as e:
            raise self._failure(f"create index {index.name}", e) from e
        logger.info(f"Created search index {index.name}")
        return created

    async def create_data_source(
        self, data_source: SearchIndexerDataSourceConnection
    ) -> SearchIndexerDataSourceConnection:
        try:
            created = await self._indexers.create_data_source_connection(data_source)
        except AzureError as e:
            raise self._failure(f"create datasource {data_source.name}", e) from e
        logger.info(f"Created datasource {data_source.name}")
        return created

    async def create_skillset(self, skillset: SearchIndexerSkillset) -> SearchIndexerSkillset:
        try:
            created = await self._indexers.create_skillset(skillset)
        except AzureError as e:
            raise self._failure(f"create skillset {skillset.name}", e) from e
        logger.info(f"Created skillset {skillset.name}")
        return created

    async def create_indexer(self, indexer: SearchIndexer) -> SearchIndexer:
        try:
            created = await self._indexers.create_indexer(indexer)
        except AzureError as e:
            raise self._failure(f"create indexer {indexer.name}", e) from e
        logger.info(f"Created indexer {indexer.name}")
        return created

    async def try_delete(self, kind: ResourceKind, name: str) -> DeleteOutcome:
        """
        Delete a resource by name, treating "not found" as success.

        Args:
            kind: Resource type
            name: Resource name

        Returns:
            DeleteOutcome: DELETED, NOT_FOUND, or FAILED with the error body
        """
        deleters = {
            ResourceKind.INDEX: self._indexes.delete_index,
            ResourceKind.INDEXER: self._indexers.delete_indexer,
            ResourceKind.DATA_SOURCE: self._indexers.delete_data_source_connection,
            ResourceKind.SKILLSET: self._indexers.delete_skillset,
        }
        try:
            await deleters[kind](name)
        except ResourceNotFoundError:
            logger.info(f"No {kind.value} named {name} to delete")
            return DeleteOutcome(DeleteStatus.NOT_FOUND)
        except AzureError as e:
            body = error_body(e)
            logger.error(
                f"Failed to delete {kind.value} {name}",
                extra={"resource_kind": kind.value, "resource_name": name, "error_body": body},
            )
            return DeleteOutcome(DeleteStatus.FAILED, body)

        logger.info(f"Deleted {kind.value} {name}")
        return DeleteOutcome(DeleteStatus.DELETED)

    def _failure(self, step: str, exc: BaseException) -> ProvisioningFailedError:
        body = error_body(exc)
        logger.error(f"Failed to {step}", extra={"step": step, "error_body": body})
        return ProvisioningFailedError(step, body)
