"""
Microsoft Graph boundary modules.

Exports: DocumentFetcher, FetchPrivilege
"""

from .document_fetcher import DocumentFetcher, FetchPrivilege

__all__ = ["DocumentFetcher", "FetchPrivilege"]
