"""
Exception hierarchy for SharePoint knowledge ingestion.

Provides layered exception structure for ingestion and provisioning errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeIngestionError(Exception):
    """Base exception for all ingestion and provisioning errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidReferenceError(KnowledgeIngestionError):
    """Raised when a document reference is missing required fields."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid reference error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidDocumentError(InvalidReferenceError):
    """Raised when a document cannot be chunked because fields are missing."""


class DocumentError(KnowledgeIngestionError):
    """Base exception for errors tied to one source document."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document error.

        Args:
            message: Error message
            url: URL of the document that failed
            details: Additional context
        """
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)


class FetchFailedError(DocumentError):
    """Raised when document bytes cannot be downloaded from SharePoint."""


class AnalysisFailedError(DocumentError):
    """Raised when document analysis reports no result."""


class VectorizeFailedError(KnowledgeIngestionError):
    """Raised when the embedding deployment returns an error or a bad vector."""


class StoreWriteFailedError(DocumentError):
    """Raised when blob storage rejects a write or delete."""


class OrphanedIndexEntriesError(DocumentError):
    """Raised when a blob was deleted but no index rows matched its URL."""


class IndexOperationFailedError(KnowledgeIngestionError):
    """Raised when a search index data operation fails."""

    def __init__(
        self,
        message: str,
        step: str | None = None,
        error_body: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize index operation error.

        Args:
            message: Error message
            step: Operation that failed (batch upload, search, delete)
            error_body: Error text returned by the search service
            details: Additional context
        """
        details = details or {}
        if step:
            details["step"] = step
        self.step = step
        self.error_body = error_body or ""
        super().__init__(message, details)


class ProvisioningFailedError(KnowledgeIngestionError):
    """Raised when an administrative call against the search service fails."""

    def __init__(self, step: str, error_body: str) -> None:
        """
        Initialize provisioning error.

        Args:
            step: Provisioning step that failed (e.g. "create skillset")
            error_body: Error text returned by the search service
        """
        self.step = step
        self.error_body = error_body
        super().__init__(f"Failed to {step}: {error_body}", {"step": step})


class SecretResolutionError(KnowledgeIngestionError):
    """Raised when one or more Key Vault secrets cannot be resolved."""

    def __init__(self, failures: dict[str, str]) -> None:
        """
        Initialize secret resolution error.

        Args:
            failures: Secret name mapped to the reason it could not be resolved
        """
        self.failures = failures
        names = ", ".join(sorted(failures))
        super().__init__(f"Unable to resolve key vault secrets: {names}", dict(failures))
