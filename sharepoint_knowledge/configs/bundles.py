"""
Settings bundles resolved from Key Vault.

Small immutable records validated at construction: every field is required
and must be a non-empty string.

Dependencies: pydantic
System role: Typed, read-only credentials shared for the process lifetime
"""

from pydantic import BaseModel, ConfigDict, model_validator


def validate_non_empty(value: str | None, name: str) -> str:
    """
    Ensure a setting value is present.

    Args:
        value: Setting value to check
        name: Setting name used in the error message

    Returns:
        str: The value unchanged

    Raises:
        ValueError: When the value is None, empty or whitespace
    """
    if value is None or not str(value).strip():
        raise ValueError(f"Setting '{name}' is required and cannot be empty")
    return value


class _SettingsBundle(BaseModel):
    """Frozen record whose string fields must all be non-empty."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _require_all_fields(self) -> "_SettingsBundle":
        for name in type(self).model_fields:
            validate_non_empty(getattr(self, name), name)
        return self


class AzureFoundrySettings(_SettingsBundle):
    """Foundry account key, endpoints and model deployment."""

    account_key: str
    openai_endpoint: str
    embedding_api_version: str
    embedding_model: str
    document_intelligence_api_version: str
    document_intelligence_endpoint: str


class AzureSearchSettings(_SettingsBundle):
    """Search service endpoint, admin key and the storage resource it indexes."""

    search_url: str
    search_key: str
    storage_resource_id: str


class BlobStorageSettings(_SettingsBundle):
    """Storage account name and connection string."""

    name: str
    connection_string: str


class EntraIDSettings(_SettingsBundle):
    """App registration used for Microsoft Graph access."""

    tenant_id: str
    client_id: str
    client_secret: str
