"""
Configuration package.

Exports: Settings, get_settings, settings bundles, load_settings_bundles
"""

from .bundles import (
    AzureFoundrySettings,
    AzureSearchSettings,
    BlobStorageSettings,
    EntraIDSettings,
    validate_non_empty,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "AzureFoundrySettings",
    "AzureSearchSettings",
    "BlobStorageSettings",
    "EntraIDSettings",
    "validate_non_empty",
]
