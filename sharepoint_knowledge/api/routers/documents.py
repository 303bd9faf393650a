"""
Document API endpoints.

Routes: POST /search/ingest, POST /search/upload, POST /search/delete

Dependencies: sharepoint_knowledge.core.ingestion, sharepoint_knowledge.models
System role: Per-document event HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from sharepoint_knowledge.api.deps import get_ingestion_orchestrator
from sharepoint_knowledge.api.routers.responses import OperationResponse
from sharepoint_knowledge.core.ingestion.orchestrator import IngestionOrchestrator
from sharepoint_knowledge.models.document import DocumentReference

router = APIRouter(prefix="/search", tags=["documents"])


@router.post("/ingest", response_model=OperationResponse)
async def ingest_document(
    doc: DocumentReference,
    ingestion: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> OperationResponse:
    """Chunk, vectorize and index a document in the pre-vectorized index."""
    if not await ingestion.ingest(doc):
        raise HTTPException(status_code=500, detail=f"Unable to ingest file {doc.name}.")
    return OperationResponse(status="success", message=f"File {doc.name} ingested.")


@router.post("/upload", response_model=OperationResponse)
async def upload_document(
    doc: DocumentReference,
    ingestion: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> OperationResponse:
    """Copy a document into blob storage for the indexer to pick up."""
    if not await ingestion.upload(doc):
        raise HTTPException(status_code=500, detail=f"Unable to upload file {doc.name}.")
    return OperationResponse(status="success", message=f"File {doc.name} uploaded.")


@router.post("/delete", response_model=OperationResponse)
async def delete_document(
    doc: DocumentReference,
    ingestion: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> OperationResponse:
    """Remove a document from blob storage and its chunks from the index."""
    if not await ingestion.delete(doc):
        raise HTTPException(status_code=500, detail=f"Unable to delete file {doc.name}.")
    return OperationResponse(status="success", message=f"File {doc.name} deleted.")
