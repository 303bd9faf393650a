"""Tests for the search admin facade."""

from unittest.mock import AsyncMock

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError

from sharepoint_knowledge.boundary.azure.search_admin import (
    DeleteStatus,
    ResourceKind,
    SearchAdmin,
)
from sharepoint_knowledge.core.exceptions import ProvisioningFailedError
from sharepoint_knowledge.core.provisioning.topology import new_index


@pytest.fixture
def index_client():
    return AsyncMock()


@pytest.fixture
def indexer_client():
    return AsyncMock()


@pytest.fixture
def admin(index_client, indexer_client) -> SearchAdmin:
    return SearchAdmin(index_client, indexer_client)


class TestGetIndex:
    """Test index lookup."""

    @pytest.mark.asyncio
    async def test_missing_index_is_none(self, admin, index_client) -> None:
        index_client.get_index.side_effect = ResourceNotFoundError("No index with the name 'docs' was found")

        assert await admin.get_index("docs") is None

    @pytest.mark.asyncio
    async def test_other_errors_raise(self, admin, index_client) -> None:
        index_client.get_index.side_effect = HttpResponseError(message="Forbidden")

        with pytest.raises(ProvisioningFailedError) as exc_info:
            await admin.get_index("docs")

        assert exc_info.value.step == "get index docs"
        assert exc_info.value.error_body == "Forbidden"


class TestCreate:
    """Test create calls and error body capture."""

    @pytest.mark.asyncio
    async def test_create_index(self, admin, index_client) -> None:
        index = new_index("docs")
        index_client.create_index.return_value = index

        assert await admin.create_index(index) is index
        index_client.create_index.assert_awaited_once_with(index)

    @pytest.mark.asyncio
    async def test_create_failure_carries_body(self, admin, index_client) -> None:
        index_client.create_index.side_effect = HttpResponseError(
            message="The vector field 'contentVector' must have dimensions"
        )

        with pytest.raises(ProvisioningFailedError) as exc_info:
            await admin.create_index(new_index("docs"))

        assert exc_info.value.step == "create index docs"
        assert "contentVector" in exc_info.value.error_body


class TestTryDelete:
    """Test tolerant deletes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind, method",
        [
            (ResourceKind.INDEXER, "delete_indexer"),
            (ResourceKind.DATA_SOURCE, "delete_data_source_connection"),
            (ResourceKind.SKILLSET, "delete_skillset"),
        ],
    )
    async def test_deleted(self, admin, indexer_client, kind, method) -> None:
        outcome = await admin.try_delete(kind, "sharepoint-foundry-resource")

        assert outcome.status is DeleteStatus.DELETED
        assert outcome.error == ""
        getattr(indexer_client, method).assert_awaited_once_with("sharepoint-foundry-resource")

    @pytest.mark.asyncio
    async def test_not_found_is_success(self, admin, indexer_client) -> None:
        indexer_client.delete_indexer.side_effect = ResourceNotFoundError("not found")

        outcome = await admin.try_delete(ResourceKind.INDEXER, "sharepoint-foundry-indexer")

        assert outcome.status is DeleteStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_failure_carries_error(self, admin, indexer_client) -> None:
        indexer_client.delete_skillset.side_effect = HttpResponseError(message="Service unavailable")

        outcome = await admin.try_delete(ResourceKind.SKILLSET, "sharepoint-foundry-skillset")

        assert outcome.status is DeleteStatus.FAILED
        assert outcome.error == "Service unavailable"

    @pytest.mark.asyncio
    async def test_index_delete(self, admin, index_client) -> None:
        outcome = await admin.try_delete(ResourceKind.INDEX, "docs")

        assert outcome.status is DeleteStatus.DELETED
        index_client.delete_index.assert_awaited_once_with("docs")
