"""
Shared test fixtures and configuration for entire test suite.

Provides: sample document references, settings bundles, in-memory blob and
search index fakes
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from types import SimpleNamespace

import pytest

from sharepoint_knowledge.configs.bundles import AzureFoundrySettings, AzureSearchSettings
from sharepoint_knowledge.core.constants import VECTOR_DIMENSIONS
from sharepoint_knowledge.models.document import DocumentReference


def indexing_result(key: str, succeeded: bool = True, error_message: str | None = None):
    """Stand-in for an IndexingResult returned by the search data plane."""
    return SimpleNamespace(
        key=key,
        succeeded=succeeded,
        status_code=200 if succeeded else 400,
        error_message=error_message,
    )


def vector(value: float = 0.1) -> list[float]:
    return [value] * VECTOR_DIMENSIONS


class InMemoryBlobStore:
    """Blob store fake keyed by blob name."""

    def __init__(self) -> None:
        self.blobs: dict[str, dict] = {}

    async def upload(self, name, content, content_type="application/octet-stream", metadata=None):
        self.blobs[name] = {
            "content": content,
            "content_type": content_type,
            "metadata": dict(metadata or {}),
        }

    async def delete_if_exists(self, name):
        return self.blobs.pop(name, None) is not None


def _odata_url_filter(url: str) -> str:
    literal = url.replace(" ", "%20").replace("'", "''")
    return f"url eq '{literal}'"


class InMemorySearchIndex:
    """Search index fake supporting batch upload, url filters and key deletes."""

    def __init__(self, index_name: str = "test-index", key_field: str = "id") -> None:
        self.index_name = index_name
        self.key_field = key_field
        self.rows: dict[str, dict] = {}
        self.failing_keys: set[str] = set()
        self.filters: list[str] = []

    async def upload_documents(self, documents):
        results = []
        for document in documents:
            key = document[self.key_field]
            if key in self.failing_keys:
                results.append(indexing_result(key, False, "rejected"))
                continue
            self.rows[key] = document
            results.append(indexing_result(key))
        return results

    async def find_keys(self, filter_expression, key_field):
        self.filters.append(filter_expression)
        return [
            row[key_field]
            for row in self.rows.values()
            if filter_expression == _odata_url_filter(row["url"])
        ]

    async def delete_by_keys(self, key_field, keys):
        for key in keys:
            self.rows.pop(key, None)
        return [indexing_result(key) for key in keys]


@pytest.fixture
def sample_doc() -> DocumentReference:
    """A complete document reference."""
    return DocumentReference(
        drive_id="b!drive-123",
        item_id="01ITEM456",
        name="Employee Handbook.docx",
        title="Employee Handbook",
        url="  https://contoso.sharepoint.com/sites/HR/Shared Documents/Employee Handbook.docx ",
        security_data="{\"groups\": [\"hr\"]}",
    )


@pytest.fixture
def foundry_settings() -> AzureFoundrySettings:
    return AzureFoundrySettings(
        account_key="foundry-key",
        openai_endpoint="https://contoso-foundry.openai.azure.com/",
        embedding_api_version="2024-10-21",
        embedding_model="text-embedding-ada-002",
        document_intelligence_api_version="2024-11-30",
        document_intelligence_endpoint="https://contoso-foundry.cognitiveservices.azure.com/",
    )


@pytest.fixture
def search_settings() -> AzureSearchSettings:
    return AzureSearchSettings(
        search_url="https://contoso-search.search.windows.net",
        search_key="search-admin-key",
        storage_resource_id="/subscriptions/sub/resourceGroups/rg/providers/Microsoft.Storage/storageAccounts/contoso",
    )


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def prevectorized_index() -> InMemorySearchIndex:
    return InMemorySearchIndex("sharepoint-foundry-vectorized", key_field="id")


@pytest.fixture
def pull_pipeline_index() -> InMemorySearchIndex:
    return InMemorySearchIndex("sharepoint-foundry", key_field="chunkId")
