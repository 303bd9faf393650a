"""
Document analysis client.

Runs the prebuilt layout model over document bytes and returns the text of
each page as ordered lines.

Dependencies: azure.ai.documentintelligence
System role: Page text extraction for the chunking pipeline
"""

import logging

from azure.ai.documentintelligence.aio import DocumentIntelligenceClient
from azure.ai.documentintelligence.models import AnalyzeDocumentRequest

from sharepoint_knowledge.core.constants import LAYOUT_MODEL_ID
from sharepoint_knowledge.core.exceptions import AnalysisFailedError
from sharepoint_knowledge.models.document import AnalyzedPage

logger = logging.getLogger(__name__)


class DocumentAnalyzer:
    """Wraps Document Intelligence layout analysis."""

    def __init__(self, client: DocumentIntelligenceClient, model_id: str = LAYOUT_MODEL_ID) -> None:
        self._client = client
        self._model_id = model_id

    async def analyze_layout(self, content: bytes, url: str | None = None) -> list[AnalyzedPage]:
        """
        Analyze a document and wait for the long-running operation to finish.

        Args:
            content: Document bytes
            url: Source URL, used for error context only

        Returns:
            list[AnalyzedPage]: Pages in document order

        Raises:
            AnalysisFailedError: When the operation yields no result
        """
        logger.info(f"Analyzing document using {self._model_id}", extra={"document_url": url})

        poller = await self._client.begin_analyze_document(
            self._model_id,
            AnalyzeDocumentRequest(bytes_source=content),
        )
        result = await poller.result()

        if result is None or result.pages is None:
            logger.error("Document analysis returned no result", extra={"document_url": url})
            raise AnalysisFailedError("Document analysis returned no result", url=url)

        return [
            AnalyzedPage(
                page_number=page.page_number,
                lines=[line.content for line in (page.lines or [])],
            )
            for page in result.pages
        ]
