"""
Observability module.

Provides logging configuration, structured log helpers and request middleware.
"""

from sharepoint_knowledge.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
