"""
Key Vault secret resolution.

Reads every secret the service needs from Azure Key Vault concurrently and
assembles the settings bundles. All failures are collected and reported
together instead of surfacing only the first.

Dependencies: azure.keyvault.secrets, azure.identity
System role: Startup-time provider of endpoints, keys and connection strings
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from azure.identity.aio import DefaultAzureCredential
from azure.keyvault.secrets.aio import SecretClient

from sharepoint_knowledge.configs.bundles import (
    AzureFoundrySettings,
    AzureSearchSettings,
    BlobStorageSettings,
    EntraIDSettings,
)
from sharepoint_knowledge.configs.settings import Settings
from sharepoint_knowledge.core.exceptions import SecretResolutionError

logger = logging.getLogger(__name__)

SEARCH_API_URL = "search-api-url"
SEARCH_ADMIN_KEY = "search-admin-key"
STORAGE_ACCOUNT_RESOURCE_ID = "storage-account-resource-id"
FOUNDRY_ACCOUNT_KEY = "foundry-account-key"
EMBEDDING_MODEL = "embedding-model"
FOUNDRY_OPENAI_ENDPOINT = "foundry-open-ai-endpoint"
FOUNDRY_DOCUMENT_INTELLIGENCE_ENDPOINT = "foundry-document-intelligence-endpoint"
TENANT_ID = "tenant-id"
AUTH_CLIENT_ID = "auth-client-id"
AUTH_CLIENT_SECRET = "auth-client-secret"
STORAGE_ACCOUNT_NAME = "storage-account-name"
STORAGE_ACCOUNT_CONNECTION_STRING = "storage-account-connection-string"

REQUIRED_SECRETS: tuple[str, ...] = (
    SEARCH_API_URL,
    SEARCH_ADMIN_KEY,
    STORAGE_ACCOUNT_RESOURCE_ID,
    FOUNDRY_ACCOUNT_KEY,
    EMBEDDING_MODEL,
    FOUNDRY_OPENAI_ENDPOINT,
    FOUNDRY_DOCUMENT_INTELLIGENCE_ENDPOINT,
    TENANT_ID,
    AUTH_CLIENT_ID,
    AUTH_CLIENT_SECRET,
    STORAGE_ACCOUNT_NAME,
    STORAGE_ACCOUNT_CONNECTION_STRING,
)


class SecretReader(Protocol):
    """Anything exposing the Key Vault ``get_secret`` coroutine."""

    async def get_secret(self, name: str): ...


@dataclass(frozen=True)
class SettingsBundles:
    """All settings bundles resolved at startup."""

    foundry: AzureFoundrySettings
    search: AzureSearchSettings
    blob: BlobStorageSettings
    entra: EntraIDSettings


async def _read_secret(client: SecretReader, name: str) -> str:
    secret = await client.get_secret(name)
    if not secret.value:
        raise ValueError("secret has no value")
    return secret.value


async def resolve_secrets(
    client: SecretReader,
    names: tuple[str, ...] = REQUIRED_SECRETS,
) -> dict[str, str]:
    """
    Fetch secrets concurrently.

    Args:
        client: Key Vault secret client
        names: Secret names to read

    Returns:
        dict[str, str]: Secret name mapped to its value

    Raises:
        SecretResolutionError: When any secret is missing, empty or unreadable
    """
    results = await asyncio.gather(
        *(_read_secret(client, name) for name in names),
        return_exceptions=True,
    )

    values: dict[str, str] = {}
    failures: dict[str, str] = {}
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            failures[name] = f"{type(result).__name__}: {result}"
        else:
            values[name] = result

    if failures:
        logger.error(
            "Key vault secret resolution failed",
            extra={"failed_secrets": sorted(failures)},
        )
        raise SecretResolutionError(failures)

    logger.info("Resolved key vault secrets", extra={"secret_count": len(values)})
    return values


def build_bundles(values: dict[str, str], settings: Settings) -> SettingsBundles:
    """Assemble the settings bundles from resolved secret values."""
    return SettingsBundles(
        foundry=AzureFoundrySettings(
            account_key=values[FOUNDRY_ACCOUNT_KEY],
            openai_endpoint=values[FOUNDRY_OPENAI_ENDPOINT],
            embedding_api_version=settings.foundry.embedding_api_version,
            embedding_model=values[EMBEDDING_MODEL],
            document_intelligence_api_version=settings.foundry.document_intelligence_api_version,
            document_intelligence_endpoint=values[FOUNDRY_DOCUMENT_INTELLIGENCE_ENDPOINT],
        ),
        search=AzureSearchSettings(
            search_url=values[SEARCH_API_URL],
            search_key=values[SEARCH_ADMIN_KEY],
            storage_resource_id=values[STORAGE_ACCOUNT_RESOURCE_ID],
        ),
        blob=BlobStorageSettings(
            name=values[STORAGE_ACCOUNT_NAME],
            connection_string=values[STORAGE_ACCOUNT_CONNECTION_STRING],
        ),
        entra=EntraIDSettings(
            tenant_id=values[TENANT_ID],
            client_id=values[AUTH_CLIENT_ID],
            client_secret=values[AUTH_CLIENT_SECRET],
        ),
    )


async def load_settings_bundles(settings: Settings) -> SettingsBundles:
    """
    Resolve all secrets from the configured Key Vault and build the bundles.

    Args:
        settings: Application settings carrying the Key Vault URL

    Returns:
        SettingsBundles: Validated, immutable settings bundles

    Raises:
        ValueError: When no Key Vault URL is configured
        SecretResolutionError: When any secret cannot be resolved
    """
    vault_url = settings.key_vault.url
    if not vault_url:
        raise ValueError("KEY_VAULT_URL is required to resolve service secrets")

    async with DefaultAzureCredential() as credential:
        async with SecretClient(vault_url=vault_url, credential=credential) as client:
            values = await resolve_secrets(client)

    return build_bundles(values, settings)
