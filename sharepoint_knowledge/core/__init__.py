"""
Core business logic module.

Contains the exception hierarchy, well-known names, ingestion and provisioning
orchestration.
"""

from sharepoint_knowledge.core.exceptions import (
    AnalysisFailedError,
    FetchFailedError,
    IndexOperationFailedError,
    InvalidDocumentError,
    InvalidReferenceError,
    KnowledgeIngestionError,
    OrphanedIndexEntriesError,
    ProvisioningFailedError,
    SecretResolutionError,
    StoreWriteFailedError,
    VectorizeFailedError,
)

__all__ = [
    "KnowledgeIngestionError",
    "InvalidReferenceError",
    "InvalidDocumentError",
    "FetchFailedError",
    "AnalysisFailedError",
    "VectorizeFailedError",
    "StoreWriteFailedError",
    "IndexOperationFailedError",
    "OrphanedIndexEntriesError",
    "ProvisioningFailedError",
    "SecretResolutionError",
]
