"""
Deployment API endpoints.

Routes: GET /deploy/vectorized, GET /deploy/foundry

Administrative only: both routes replace an existing index and its content,
and are rejected unless SEARCH_ALLOW_DEPLOY is enabled.

Dependencies: sharepoint_knowledge.core.provisioning
System role: Operator entry point for index provisioning
"""

from fastapi import APIRouter, Depends, HTTPException

from sharepoint_knowledge.api.deps import get_provisioning_orchestrator, get_settings_dependency
from sharepoint_knowledge.api.routers.responses import OperationResponse
from sharepoint_knowledge.configs.settings import Settings
from sharepoint_knowledge.core.provisioning.orchestrator import IndexVariant, ProvisioningOrchestrator

router = APIRouter(prefix="/deploy", tags=["deploy"])


async def _deploy(
    name: str,
    variant: IndexVariant,
    settings: Settings,
    provisioning: ProvisioningOrchestrator,
) -> OperationResponse:
    if not settings.search.allow_deploy:
        raise HTTPException(status_code=403, detail="Index deployment is disabled")

    error = await provisioning.provision(name, variant)
    if error:
        raise HTTPException(status_code=500, detail=f"Unable to deploy search index {name}: {error}")
    return OperationResponse(status="success", message=f"Search index {name} deployed.")


@router.get("/vectorized", response_model=OperationResponse)
async def deploy_vectorized(
    settings: Settings = Depends(get_settings_dependency),
    provisioning: ProvisioningOrchestrator = Depends(get_provisioning_orchestrator),
) -> OperationResponse:
    """
    Deploy the pre-vectorized index (chunks vectorized by this service).

    Raises:
        HTTPException(403): Deployment disabled
        HTTPException(500): Deployment failed, detail carries the search service error
    """
    return await _deploy(settings.search.prevectorized_index, IndexVariant.PRE_VECTORIZED, settings, provisioning)


@router.get("/foundry", response_model=OperationResponse)
async def deploy_foundry(
    settings: Settings = Depends(get_settings_dependency),
    provisioning: ProvisioningOrchestrator = Depends(get_provisioning_orchestrator),
) -> OperationResponse:
    """
    Deploy the pull-pipeline index with its datasource, skillset and indexer.

    Raises:
        HTTPException(403): Deployment disabled
        HTTPException(500): Deployment failed, detail carries the search service error
    """
    return await _deploy(settings.search.pull_pipeline_index, IndexVariant.PULL_PIPELINE, settings, provisioning)
