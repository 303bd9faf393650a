"""
Health check API endpoint.

Routes: GET /health

System role: Liveness probe
"""

from fastapi import APIRouter
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check. Does not call any remote service."""
    return HealthResponse(status="healthy", message="Server Healthy")
