"""Tests for the service container wiring and shutdown."""

import logging
from dataclasses import fields
from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.storage.blob.aio import ExponentialRetry

from sharepoint_knowledge.api.deps.dependencies import ServiceContainer
from sharepoint_knowledge.configs import secrets
from sharepoint_knowledge.configs.secrets import build_bundles
from sharepoint_knowledge.configs.settings import SearchTopologySettings, Settings
from sharepoint_knowledge.core.constants import BLOB_RETRY_ATTEMPTS, BLOB_RETRY_BACKOFF_SECONDS
from sharepoint_knowledge.core.ingestion.orchestrator import IngestionOrchestrator
from sharepoint_knowledge.core.provisioning.orchestrator import ProvisioningOrchestrator

SECRET_VALUES = {
    secrets.SEARCH_API_URL: "https://contoso-search.search.windows.net",
    secrets.SEARCH_ADMIN_KEY: "search-admin-key",
    secrets.STORAGE_ACCOUNT_RESOURCE_ID: (
        "/subscriptions/0000/resourceGroups/rg/providers/Microsoft.Storage/storageAccounts/contoso"
    ),
    secrets.FOUNDRY_ACCOUNT_KEY: "foundry-key",
    secrets.EMBEDDING_MODEL: "text-embedding-ada-002",
    secrets.FOUNDRY_OPENAI_ENDPOINT: "https://contoso.openai.azure.com",
    secrets.FOUNDRY_DOCUMENT_INTELLIGENCE_ENDPOINT: "https://contoso.cognitiveservices.azure.com",
    secrets.TENANT_ID: "00000000-0000-0000-0000-000000000000",
    secrets.AUTH_CLIENT_ID: "11111111-1111-1111-1111-111111111111",
    secrets.AUTH_CLIENT_SECRET: "client-secret",
    secrets.STORAGE_ACCOUNT_NAME: "contoso",
    secrets.STORAGE_ACCOUNT_CONNECTION_STRING: (
        "DefaultEndpointsProtocol=https;AccountName=contoso;AccountKey=a2V5;EndpointSuffix=core.windows.net"
    ),
}

CLIENT_FIELDS = (
    "graph_credential",
    "blob_service",
    "document_intelligence",
    "prevectorized_search",
    "pull_pipeline_search",
    "index_client",
    "indexer_client",
)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, search=SearchTopologySettings(settle_seconds=0))


class TestServiceContainerCreate:
    """Test client construction from resolved secrets."""

    @pytest.mark.asyncio
    async def test_blob_client_uses_exponential_retry(self, settings) -> None:
        services = ServiceContainer.create(settings, build_bundles(SECRET_VALUES, settings))

        try:
            retry_policy = services.blob_service._config.retry_policy
            assert isinstance(retry_policy, ExponentialRetry)
            assert retry_policy.initial_backoff == BLOB_RETRY_BACKOFF_SECONDS == 30
            assert retry_policy.total_retries == BLOB_RETRY_ATTEMPTS == 5
        finally:
            await services.close()

    @pytest.mark.asyncio
    async def test_orchestrators_and_http_client(self, settings) -> None:
        services = ServiceContainer.create(settings, build_bundles(SECRET_VALUES, settings))

        try:
            assert isinstance(services.ingestion, IngestionOrchestrator)
            assert isinstance(services.provisioning, ProvisioningOrchestrator)
            assert services.http_client.follow_redirects is True
            assert services.settings is settings
        finally:
            await services.close()

    @pytest.mark.asyncio
    async def test_startup_log_names_storage_account(self, settings, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="sharepoint_knowledge.api.deps.dependencies"):
            services = ServiceContainer.create(settings, build_bundles(SECRET_VALUES, settings))
        await services.close()

        record = next(r for r in caplog.records if r.message == "Service container created")
        assert record.storage_account == "contoso"
        assert record.blob_container == settings.blob.container


class TestServiceContainerClose:
    """Test shutdown of every client handle."""

    @pytest.mark.asyncio
    async def test_closes_every_client(self, settings) -> None:
        # Arrange
        clients = {name: AsyncMock() for name in CLIENT_FIELDS}
        http_client = AsyncMock()
        services = ServiceContainer(
            settings=settings,
            http_client=http_client,
            ingestion=MagicMock(),
            provisioning=MagicMock(),
            **clients,
        )

        # Act
        await services.close()

        # Assert
        http_client.aclose.assert_awaited_once()
        for name, client in clients.items():
            assert client.close.await_count == 1, name

    def test_client_fields_cover_container(self) -> None:
        handled = set(CLIENT_FIELDS) | {"settings", "http_client", "ingestion", "provisioning"}

        assert {field.name for field in fields(ServiceContainer)} == handled
