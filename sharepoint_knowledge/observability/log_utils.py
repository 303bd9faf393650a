"""
Logging utilities for structured document context.

Dependencies: logging (stdlib)
System role: Logging helper functions shared by boundaries and orchestrators
"""

import logging
from typing import Any

from sharepoint_knowledge.models.document import DocumentReference


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert any value to a bounded string for logging.

    Sequences and mappings are summarized by size so vectors never reach the log.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            text = value
        elif isinstance(value, (list, tuple)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)

        if len(text) > max_length:
            return text[:max_length] + f"... (truncated, {len(text)} total)"
        return text
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def document_context(doc: DocumentReference) -> dict[str, str]:
    """Identifying fields of a document for log records. Never includes security data."""
    return {
        "document_url": doc.url,
        "document_name": doc.name,
        "item_id": doc.item_id,
        "drive_id": doc.drive_id,
    }


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with its traceback and sanitized context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update(
        {
            "error_type": type(exc).__name__,
            "error_msg": safe_log_value(str(exc), max_length=2000),
        }
    )
    logger.error(message, exc_info=exc, extra=safe_context)
