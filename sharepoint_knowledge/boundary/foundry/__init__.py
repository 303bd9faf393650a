"""
Foundry boundary modules.

Exports: VectorizationClient, DocumentAnalyzer
"""

from .document_analyzer import DocumentAnalyzer
from .embedding_client import VectorizationClient

__all__ = ["VectorizationClient", "DocumentAnalyzer"]
