"""
SharePoint knowledge ingestion.

Ingests SharePoint documents into Azure AI Search through Azure Blob Storage
and provisions the search index topology.
"""

__version__ = "0.1.0"
