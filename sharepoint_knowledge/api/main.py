"""
FastAPI application with assembled routers.

Initializes the FastAPI app with all API routers and configures the uvicorn server.

Dependencies: fastapi, sharepoint_knowledge.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from sharepoint_knowledge.api.deps.dependencies import ServiceContainer
from sharepoint_knowledge.configs.secrets import load_settings_bundles
from sharepoint_knowledge.configs.settings import get_settings
from sharepoint_knowledge.observability.logger import configure_logging
from sharepoint_knowledge.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import deploy_router, documents_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Resolves Key Vault secrets and builds the service container on startup;
    closes every client handle on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    logger.info("Resolving settings from key vault...")
    bundles = await load_settings_bundles(settings)
    app.state.services = ServiceContainer.create(settings, bundles)
    logger.info("Services ready")

    yield

    await app.state.services.close()
    logger.info("Services closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="SharePoint Knowledge Ingestion API",
        description="Ingests SharePoint documents into Azure AI Search and provisions the index topology",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Last added runs first: correlation ID is set before the request is logged
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(deploy_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "sharepoint_knowledge.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
