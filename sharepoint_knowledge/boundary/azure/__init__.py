"""
Azure storage and search boundary modules.

Exports: BlobDocumentStore, SearchIndexStore, SearchAdmin
"""

from .blob_store import BlobDocumentStore
from .search_admin import DeleteOutcome, DeleteStatus, ResourceKind, SearchAdmin
from .search_store import SearchIndexStore

__all__ = [
    "BlobDocumentStore",
    "SearchIndexStore",
    "SearchAdmin",
    "DeleteOutcome",
    "DeleteStatus",
    "ResourceKind",
]
