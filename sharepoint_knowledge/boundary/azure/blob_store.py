"""
Blob storage client for ingested documents.

Writes document bytes with metadata into a single container and deletes them
again. The container is created on first use.

Dependencies: azure.storage.blob
System role: Object store backing the pull-pipeline datasource
"""

import logging

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from sharepoint_knowledge.core.constants import BLOB_CONTAINER, OCTET_STREAM
from sharepoint_knowledge.core.exceptions import StoreWriteFailedError

logger = logging.getLogger(__name__)


class BlobDocumentStore:
    """Document bytes in one blob container, keyed by file name."""

    def __init__(self, service_client: BlobServiceClient, container: str = BLOB_CONTAINER) -> None:
        """
        Initialize blob store.

        Args:
            service_client: Async blob service client (retry policy configured by caller)
            container: Container holding ingested documents
        """
        self._service = service_client
        self._container_name = container

    @property
    def container(self) -> str:
        return self._container_name

    async def _container(self) -> ContainerClient:
        container = self._service.get_container_client(self._container_name)
        try:
            await container.create_container()
            logger.info(f"Created blob container {self._container_name}")
        except ResourceExistsError:
            pass
        return container

    async def upload(
        self,
        name: str,
        content: bytes,
        content_type: str = OCTET_STREAM,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """
        Write a document, replacing any existing blob with the same name.

        Args:
            name: Blob key
            content: Document bytes
            content_type: MIME type stored on the blob
            metadata: Blob metadata

        Raises:
            StoreWriteFailedError: When the storage service rejects the write
        """
        logger.info(
            f"Uploading {name} to blob container {self._container_name}",
            extra={"blob_name": name, "content_type": content_type, "byte_count": len(content)},
        )
        try:
            container = await self._container()
            await container.upload_blob(
                name=name,
                data=content,
                overwrite=True,
                metadata=metadata or {},
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            logger.error(
                f"Unable to upload {name} to blob storage",
                extra={"blob_name": name, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise StoreWriteFailedError(
                f"Unable to upload {name} to blob storage: {e}",
                details={"blob_name": name},
            ) from e

    async def delete_if_exists(self, name: str) -> bool:
        """
        Delete a document and its snapshots.

        Args:
            name: Blob key

        Returns:
            bool: True when a blob was deleted, False when none existed

        Raises:
            StoreWriteFailedError: When the storage service rejects the delete
        """
        container = self._service.get_container_client(self._container_name)
        try:
            await container.delete_blob(name, delete_snapshots="include")
        except ResourceNotFoundError:
            return False
        except AzureError as e:
            logger.error(
                f"Unable to delete {name} from blob storage",
                extra={"blob_name": name, "error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise StoreWriteFailedError(
                f"Unable to delete {name} from blob storage: {e}",
                details={"blob_name": name},
            ) from e

        logger.info(f"Deleted {name} from blob container {self._container_name}")
        return True
