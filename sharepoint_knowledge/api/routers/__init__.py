"""API routers."""

from .deploy import router as deploy_router
from .documents import router as documents_router
from .health import router as health_router

__all__ = [
    "deploy_router",
    "documents_router",
    "health_router",
]
