"""
Unified application settings.

Aggregates all environment-driven configuration into a single Settings class.
Secrets (endpoints, keys, connection strings) are not read here; they are
resolved from Key Vault at startup, see configs.secrets.

Dependencies: pydantic_settings
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

from sharepoint_knowledge.core import constants


class KeyVaultSettings(PydanticBaseSettings):
    """Location of the Key Vault holding all service secrets."""

    model_config = SettingsConfigDict(
        env_prefix="KEY_VAULT_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="", description="Key Vault URL, e.g. https://my-vault.vault.azure.net/")


class FoundryApiSettings(PydanticBaseSettings):
    """API versions for the Foundry embedding and document analysis endpoints."""

    model_config = SettingsConfigDict(
        env_prefix="FOUNDRY_",
        case_sensitive=False,
        extra="ignore",
    )

    embedding_api_version: str = Field(
        default="2024-10-21",
        description="api-version query parameter for the embeddings deployment",
    )
    document_intelligence_api_version: str = Field(
        default="2024-11-30",
        description="API version for Document Intelligence",
    )


class SearchTopologySettings(PydanticBaseSettings):
    """Index names and provisioning behavior."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    prevectorized_index: str = Field(
        default=constants.PREVECTORIZED_INDEX,
        description="Index receiving locally chunked, pre-vectorized pages",
    )
    pull_pipeline_index: str = Field(
        default=constants.PULL_PIPELINE_INDEX,
        description="Index fed by the blob datasource/skillset/indexer pipeline",
    )
    settle_seconds: float = Field(
        default=constants.SETTLE_SECONDS,
        description="Wait after each destructive admin call",
    )
    allow_deploy: bool = Field(
        default=False,
        description="Expose the deploy endpoints (local/administrative use only)",
    )


class BlobContainerSettings(PydanticBaseSettings):
    """Blob container receiving uploaded documents."""

    model_config = SettingsConfigDict(
        env_prefix="BLOB_",
        case_sensitive=False,
        extra="ignore",
    )

    container: str = Field(default=constants.BLOB_CONTAINER, description="Blob container name")


class Settings(PydanticBaseSettings):
    """Unified application settings aggregating all config modules."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Root log level name")
    key_vault: KeyVaultSettings = Field(default_factory=KeyVaultSettings)
    foundry: FoundryApiSettings = Field(default_factory=FoundryApiSettings)
    search: SearchTopologySettings = Field(default_factory=SearchTopologySettings)
    blob: BlobContainerSettings = Field(default_factory=BlobContainerSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
