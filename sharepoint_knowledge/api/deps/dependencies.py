"""
Dependency injection container.

Builds one client handle per remote service at startup, wires them into the
orchestrators, and exposes FastAPI dependency functions reading the container
from application state.

Dependencies: sharepoint_knowledge.configs, sharepoint_knowledge.boundary, sharepoint_knowledge.core
System role: DI container for service injection
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

import httpx
from azure.ai.documentintelligence.aio import DocumentIntelligenceClient
from azure.core.credentials import AzureKeyCredential
from azure.identity.aio import ClientSecretCredential
from azure.search.documents.aio import SearchClient
from azure.search.documents.indexes.aio import SearchIndexClient, SearchIndexerClient
from azure.storage.blob.aio import BlobServiceClient, ExponentialRetry
from fastapi import Depends, Request

from sharepoint_knowledge.boundary.azure.blob_store import BlobDocumentStore
from sharepoint_knowledge.boundary.azure.search_admin import SearchAdmin
from sharepoint_knowledge.boundary.azure.search_store import SearchIndexStore
from sharepoint_knowledge.boundary.foundry.document_analyzer import DocumentAnalyzer
from sharepoint_knowledge.boundary.foundry.embedding_client import VectorizationClient
from sharepoint_knowledge.boundary.graph.document_fetcher import DocumentFetcher
from sharepoint_knowledge.configs.secrets import SettingsBundles
from sharepoint_knowledge.configs.settings import Settings, get_settings
from sharepoint_knowledge.core.constants import BLOB_RETRY_ATTEMPTS, BLOB_RETRY_BACKOFF_SECONDS
from sharepoint_knowledge.core.ingestion.chunking import ChunkingPipeline
from sharepoint_knowledge.core.ingestion.orchestrator import IngestionOrchestrator
from sharepoint_knowledge.core.provisioning.orchestrator import ProvisioningOrchestrator
from sharepoint_knowledge.core.provisioning.topology import TopologyBuilder

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_SECONDS = 100.0


@dataclass
class ServiceContainer:
    """Long-lived client handles and the orchestrators built on them."""

    settings: Settings
    http_client: httpx.AsyncClient
    graph_credential: ClientSecretCredential
    blob_service: BlobServiceClient
    document_intelligence: DocumentIntelligenceClient
    prevectorized_search: SearchClient
    pull_pipeline_search: SearchClient
    index_client: SearchIndexClient
    indexer_client: SearchIndexerClient
    ingestion: IngestionOrchestrator
    provisioning: ProvisioningOrchestrator

    @classmethod
    def create(cls, settings: Settings, bundles: SettingsBundles) -> "ServiceContainer":
        """
        Construct every client and orchestrator.

        Args:
            settings: Environment settings (index names, container, settle delay)
            bundles: Secrets resolved from Key Vault

        Returns:
            ServiceContainer: Ready-to-use container; call ``close`` on shutdown
        """
        search_credential = AzureKeyCredential(bundles.search.search_key)
        search_endpoint = bundles.search.search_url

        http_client = httpx.AsyncClient(follow_redirects=True, timeout=HTTP_TIMEOUT_SECONDS)
        graph_credential = ClientSecretCredential(
            tenant_id=bundles.entra.tenant_id,
            client_id=bundles.entra.client_id,
            client_secret=bundles.entra.client_secret,
        )
        blob_service = BlobServiceClient.from_connection_string(
            bundles.blob.connection_string,
            retry_policy=ExponentialRetry(
                initial_backoff=BLOB_RETRY_BACKOFF_SECONDS,
                retry_total=BLOB_RETRY_ATTEMPTS,
            ),
        )
        document_intelligence = DocumentIntelligenceClient(
            endpoint=bundles.foundry.document_intelligence_endpoint,
            credential=AzureKeyCredential(bundles.foundry.account_key),
            api_version=bundles.foundry.document_intelligence_api_version,
        )
        prevectorized_search = SearchClient(
            endpoint=search_endpoint,
            index_name=settings.search.prevectorized_index,
            credential=search_credential,
        )
        pull_pipeline_search = SearchClient(
            endpoint=search_endpoint,
            index_name=settings.search.pull_pipeline_index,
            credential=search_credential,
        )
        index_client = SearchIndexClient(endpoint=search_endpoint, credential=search_credential)
        indexer_client = SearchIndexerClient(endpoint=search_endpoint, credential=search_credential)

        fetcher = DocumentFetcher(http_client, graph_credential)
        chunker = ChunkingPipeline(
            fetcher=fetcher,
            analyzer=DocumentAnalyzer(document_intelligence),
            vectorizer=VectorizationClient(bundles.foundry, http_client),
        )
        ingestion = IngestionOrchestrator(
            fetcher=fetcher,
            chunker=chunker,
            blob_store=BlobDocumentStore(blob_service, settings.blob.container),
            prevectorized_index=SearchIndexStore(prevectorized_search, settings.search.prevectorized_index),
            pull_pipeline_index=SearchIndexStore(pull_pipeline_search, settings.search.pull_pipeline_index),
        )
        provisioning = ProvisioningOrchestrator(
            admin=SearchAdmin(index_client, indexer_client),
            builder=TopologyBuilder(bundles.foundry, bundles.search, settings.blob.container),
            settle_seconds=settings.search.settle_seconds,
        )

        logger.info(
            "Service container created",
            extra={"storage_account": bundles.blob.name, "blob_container": settings.blob.container},
        )
        return cls(
            settings=settings,
            http_client=http_client,
            graph_credential=graph_credential,
            blob_service=blob_service,
            document_intelligence=document_intelligence,
            prevectorized_search=prevectorized_search,
            pull_pipeline_search=pull_pipeline_search,
            index_client=index_client,
            indexer_client=indexer_client,
            ingestion=ingestion,
            provisioning=provisioning,
        )

    async def close(self) -> None:
        """Close every client handle."""
        await self.http_client.aclose()
        await self.graph_credential.close()
        await self.blob_service.close()
        await self.document_intelligence.close()
        await self.prevectorized_search.close()
        await self.pull_pipeline_search.close()
        await self.index_client.close()
        await self.indexer_client.close()
        logger.info("Service container closed")


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_service_container(request: Request) -> ServiceContainer:
    """Service container created by the application lifespan."""
    return request.app.state.services


def get_ingestion_orchestrator(
    services: ServiceContainer = Depends(get_service_container),
) -> IngestionOrchestrator:
    return services.ingestion


def get_provisioning_orchestrator(
    services: ServiceContainer = Depends(get_service_container),
) -> ProvisioningOrchestrator:
    return services.provisioning
