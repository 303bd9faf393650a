"""
Provisioning orchestrator.

Deploys search index topologies with replace semantics: an existing index is
deleted and, after a settling delay, created again from scratch. The pull
pipeline (datasource, skillset, indexer) is torn down and rebuilt with it.

Every call returns an empty string on success or the captured error text.

Dependencies: boundary.azure.search_admin, core.provisioning.topology
System role: Out-of-band deployment of the search service topology
"""

import asyncio
import logging
from enum import Enum

from azure.search.documents.indexes.models import SearchIndex

from sharepoint_knowledge.boundary.azure.search_admin import DeleteStatus, ResourceKind, SearchAdmin
from sharepoint_knowledge.core import constants
from sharepoint_knowledge.core.exceptions import ProvisioningFailedError
from sharepoint_knowledge.core.provisioning.topology import TopologyBuilder, new_index

logger = logging.getLogger(__name__)


class IndexVariant(str, Enum):
    """Index topologies that can be provisioned."""

    PRE_VECTORIZED = "prevectorized"
    PULL_PIPELINE = "pullpipeline"


# Indexer first: it references the datasource and skillset
PIPELINE_RESOURCES: tuple[tuple[ResourceKind, str], ...] = (
    (ResourceKind.INDEXER, constants.INDEXER_NAME),
    (ResourceKind.DATA_SOURCE, constants.DATASOURCE_NAME),
    (ResourceKind.SKILLSET, constants.SKILLSET_NAME),
)


class ProvisioningOrchestrator:
    """Drives index and pull-pipeline deployment against the search admin API."""

    def __init__(
        self,
        admin: SearchAdmin,
        builder: TopologyBuilder,
        settle_seconds: float = constants.SETTLE_SECONDS,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            admin: Search service admin facade
            builder: Topology builder bound to the deployment settings
            settle_seconds: Wait after each destructive admin call
        """
        self._admin = admin
        self._builder = builder
        self._settle_seconds = settle_seconds

    async def provision(self, name: str, variant: IndexVariant) -> str:
        """
        Deploy an index, replacing any existing one with the same name.

        Args:
            name: Index name
            variant: Topology to deploy

        Returns:
            str: Empty on success, otherwise the error text of the failing step
        """
        logger.info(f"Deploying search index {name}", extra={"index_name": name, "variant": variant.value})
        try:
            index = await self.ensure_index(name)
            if variant is IndexVariant.PRE_VECTORIZED:
                await self._admin.create_index(self._builder.build_prevectorized(index))
            else:
                await self._provision_pull_pipeline(index)
        except ProvisioningFailedError as e:
            logger.critical(
                f"Unable to deploy search index {name}",
                extra={"index_name": name, "step": e.step, "error_body": e.error_body},
            )
            return e.message
        except Exception as e:
            logger.critical(f"Unable to deploy search index {name}", exc_info=e, extra={"index_name": name})
            return str(e) or type(e).__name__

        logger.info(f"Deployed search index {name}", extra={"index_name": name, "variant": variant.value})
        return ""

    async def ensure_index(self, name: str) -> SearchIndex:
        """
        Remove any existing index with this name and return an empty definition.

        Raises:
            ProvisioningFailedError: When the lookup or delete fails
        """
        existing = await self._admin.get_index(name)
        if existing is not None:
            logger.warning(f"Deleting existing search index {name}", extra={"index_name": name})
            await self._admin.delete_index(name)
            await self._settle()
        return new_index(name)

    async def _provision_pull_pipeline(self, index: SearchIndex) -> None:
        await self._admin.create_index(self._builder.build_pull_pipeline(index))

        for kind, resource_name in PIPELINE_RESOURCES:
            outcome = await self._admin.try_delete(kind, resource_name)
            if outcome.status is DeleteStatus.FAILED:
                raise ProvisioningFailedError(f"delete {kind.value} {resource_name}", outcome.error)
            if outcome.status is DeleteStatus.DELETED:
                await self._settle()

        pipeline = self._builder.build_pipeline(index.name)
        await self._admin.create_data_source(pipeline.data_source)
        await self._admin.create_skillset(pipeline.skillset)
        await self._admin.create_indexer(pipeline.indexer)

    async def _settle(self) -> None:
        if self._settle_seconds > 0:
            logger.info(f"Waiting {self._settle_seconds}s for the search service to settle")
            await asyncio.sleep(self._settle_seconds)
