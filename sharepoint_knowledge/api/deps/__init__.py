"""API-specific dependencies."""

from .dependencies import (
    ServiceContainer,
    get_ingestion_orchestrator,
    get_provisioning_orchestrator,
    get_service_container,
    get_settings_dependency,
)

__all__ = [
    "ServiceContainer",
    "get_ingestion_orchestrator",
    "get_provisioning_orchestrator",
    "get_service_container",
    "get_settings_dependency",
]
