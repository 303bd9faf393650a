"""Tests for replace-semantics provisioning against an in-memory search service."""

from unittest.mock import AsyncMock, patch

import pytest

from sharepoint_knowledge.boundary.azure.search_admin import DeleteOutcome, DeleteStatus, ResourceKind
from sharepoint_knowledge.core import constants
from sharepoint_knowledge.core.exceptions import ProvisioningFailedError
from sharepoint_knowledge.core.provisioning.orchestrator import IndexVariant, ProvisioningOrchestrator
from sharepoint_knowledge.core.provisioning.topology import TopologyBuilder


class InMemorySearchAdmin:
    """Search admin fake recording every call."""

    def __init__(self) -> None:
        self.indexes: dict = {}
        self.resources: dict[ResourceKind, dict] = {kind: {} for kind in ResourceKind}
        self.calls: list[str] = []
        self.fail_on: dict[str, str] = {}

    def _check(self, step: str) -> None:
        self.calls.append(step)
        if step in self.fail_on:
            raise ProvisioningFailedError(step, self.fail_on[step])

    async def get_index(self, name):
        self._check("get index")
        return self.indexes.get(name)

    async def delete_index(self, name):
        self._check("delete index")
        del self.indexes[name]

    async def create_index(self, index):
        self._check("create index")
        self.indexes[index.name] = index
        return index

    async def try_delete(self, kind, name):
        self.calls.append(f"try delete {kind.value}")
        if f"delete {kind.value}" in self.fail_on:
            return DeleteOutcome(DeleteStatus.FAILED, self.fail_on[f"delete {kind.value}"])
        if self.resources[kind].pop(name, None) is None:
            return DeleteOutcome(DeleteStatus.NOT_FOUND)
        return DeleteOutcome(DeleteStatus.DELETED)

    async def create_data_source(self, data_source):
        self._check("create datasource")
        self.resources[ResourceKind.DATA_SOURCE][data_source.name] = data_source

    async def create_skillset(self, skillset):
        self._check("create skillset")
        self.resources[ResourceKind.SKILLSET][skillset.name] = skillset

    async def create_indexer(self, indexer):
        self._check("create indexer")
        self.resources[ResourceKind.INDEXER][indexer.name] = indexer


@pytest.fixture
def admin() -> InMemorySearchAdmin:
    return InMemorySearchAdmin()


@pytest.fixture
def orchestrator(admin, foundry_settings, search_settings) -> ProvisioningOrchestrator:
    return ProvisioningOrchestrator(
        admin=admin,
        builder=TopologyBuilder(foundry_settings, search_settings),
        settle_seconds=0,
    )


class TestEnsureIndex:
    """Test the shared delete-then-recreate step."""

    @pytest.mark.asyncio
    async def test_absent_index_is_not_deleted(self, orchestrator, admin) -> None:
        index = await orchestrator.ensure_index("docs-v1")

        assert index.name == "docs-v1"
        assert index.fields == []
        assert index.vector_search.algorithms == []
        assert "delete index" not in admin.calls

    @pytest.mark.asyncio
    async def test_existing_index_is_deleted_and_settled(self, admin, foundry_settings, search_settings) -> None:
        # Arrange
        admin.indexes["docs-v1"] = object()
        orchestrator = ProvisioningOrchestrator(
            admin=admin,
            builder=TopologyBuilder(foundry_settings, search_settings),
            settle_seconds=30,
        )

        # Act
        with patch("sharepoint_knowledge.core.provisioning.orchestrator.asyncio.sleep", new=AsyncMock()) as sleep:
            await orchestrator.ensure_index("docs-v1")

        # Assert
        assert "docs-v1" not in admin.indexes
        sleep.assert_awaited_once_with(30)


class TestPreVectorizedProvisioning:
    """Test deployment of the pre-vectorized index."""

    @pytest.mark.asyncio
    async def test_provisioning_twice_succeeds(self, orchestrator, admin) -> None:
        first = await orchestrator.provision("docs-v1", IndexVariant.PRE_VECTORIZED)
        second = await orchestrator.provision("docs-v1", IndexVariant.PRE_VECTORIZED)

        assert first == ""
        assert second == ""
        assert admin.calls.count("delete index") == 1
        assert admin.calls.count("create index") == 2

    @pytest.mark.asyncio
    async def test_final_topology(self, orchestrator, admin) -> None:
        await orchestrator.provision("docs-v1", IndexVariant.PRE_VECTORIZED)
        await orchestrator.provision("docs-v1", IndexVariant.PRE_VECTORIZED)

        index = admin.indexes["docs-v1"]
        algorithm_kinds = sorted(type(a).__name__ for a in index.vector_search.algorithms)
        assert algorithm_kinds == [
            "ExhaustiveKnnAlgorithmConfiguration",
            "HnswAlgorithmConfiguration",
            "HnswAlgorithmConfiguration",
        ]
        assert len(index.vector_search.compressions) == 2
        assert len(index.vector_search.profiles) == 1
        assert len([f for f in index.fields if f.vector_search_dimensions is None]) == 9
        assert len([f for f in index.fields if f.vector_search_dimensions is not None]) == 2

    @pytest.mark.asyncio
    async def test_create_failure_returns_error_body(self, orchestrator, admin) -> None:
        admin.fail_on["create index"] = "The request is invalid. Field 'id' is duplicated."

        result = await orchestrator.provision("docs-v1", IndexVariant.PRE_VECTORIZED)

        assert "Field 'id' is duplicated" in result
        assert result.startswith("Failed to create index")

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_message(self, orchestrator, admin) -> None:
        admin.get_index = AsyncMock(side_effect=RuntimeError("connection reset"))

        assert await orchestrator.provision("docs-v1", IndexVariant.PRE_VECTORIZED) == "connection reset"


class TestPullPipelineProvisioning:
    """Test deployment of the indexer-fed index and its toolchain."""

    @pytest.mark.asyncio
    async def test_fresh_deployment(self, orchestrator, admin) -> None:
        result = await orchestrator.provision("sharepoint-foundry", IndexVariant.PULL_PIPELINE)

        assert result == ""
        assert admin.calls == [
            "get index",
            "create index",
            "try delete indexer",
            "try delete datasource",
            "try delete skillset",
            "create datasource",
            "create skillset",
            "create indexer",
        ]
        indexer = admin.resources[ResourceKind.INDEXER][constants.INDEXER_NAME]
        assert indexer.target_index_name == "sharepoint-foundry"

    @pytest.mark.asyncio
    async def test_redeployment_replaces_toolchain(self, admin, foundry_settings, search_settings) -> None:
        # Arrange: a previous deployment exists
        orchestrator = ProvisioningOrchestrator(
            admin=admin,
            builder=TopologyBuilder(foundry_settings, search_settings),
            settle_seconds=30,
        )
        with patch("sharepoint_knowledge.core.provisioning.orchestrator.asyncio.sleep", new=AsyncMock()):
            await orchestrator.provision("sharepoint-foundry", IndexVariant.PULL_PIPELINE)

        # Act
        with patch("sharepoint_knowledge.core.provisioning.orchestrator.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await orchestrator.provision("sharepoint-foundry", IndexVariant.PULL_PIPELINE)

        # Assert: settle after the index delete and after each of the three toolchain deletes
        assert result == ""
        assert sleep.await_count == 4
        assert set(admin.resources[ResourceKind.SKILLSET]) == {constants.SKILLSET_NAME}

    @pytest.mark.asyncio
    async def test_failed_cleanup_aborts(self, orchestrator, admin) -> None:
        admin.fail_on["delete datasource"] = "Forbidden"

        result = await orchestrator.provision("sharepoint-foundry", IndexVariant.PULL_PIPELINE)

        assert "Forbidden" in result
        assert "create datasource" not in admin.calls

    @pytest.mark.asyncio
    async def test_skillset_failure_aborts_remaining_steps(self, orchestrator, admin) -> None:
        admin.fail_on["create skillset"] = "Invalid skill input '/document/content'"

        result = await orchestrator.provision("sharepoint-foundry", IndexVariant.PULL_PIPELINE)

        assert result == "Failed to create skillset: Invalid skill input '/document/content'"
        assert "create indexer" not in admin.calls
        assert constants.DATASOURCE_NAME in admin.resources[ResourceKind.DATA_SOURCE]
