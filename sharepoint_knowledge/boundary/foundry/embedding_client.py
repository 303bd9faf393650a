"""
Vectorization client for the Foundry embeddings deployment.

Turns text into a single fixed-length embedding by calling the Azure OpenAI
embeddings REST endpoint directly.

Dependencies: httpx, pydantic
System role: Embedding provider for the chunking pipeline
"""

import logging

import httpx
from pydantic import ValidationError

from sharepoint_knowledge.configs.bundles import AzureFoundrySettings
from sharepoint_knowledge.core.constants import VECTOR_DIMENSIONS
from sharepoint_knowledge.core.exceptions import VectorizeFailedError
from sharepoint_knowledge.models.embedding import EmbeddingResponse

logger = logging.getLogger(__name__)


class VectorizationClient:
    """Calls the embeddings deployment and validates the returned vector."""

    def __init__(
        self,
        settings: AzureFoundrySettings,
        http_client: httpx.AsyncClient,
        dimensions: int = VECTOR_DIMENSIONS,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._dimensions = dimensions

    @property
    def endpoint(self) -> str:
        """Embeddings URL for the configured deployment (without query string)."""
        return (
            f"{self._settings.openai_endpoint.rstrip('/')}"
            f"/openai/deployments/{self._settings.embedding_model}/embeddings"
        )

    async def vectorize(self, text: str) -> list[float]:
        """
        Embed text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding of exactly ``dimensions`` values

        Raises:
            VectorizeFailedError: On HTTP error, malformed body or wrong vector length
        """
        logger.debug(
            f"Vectorizing content using model {self._settings.embedding_model}",
            extra={"text_length": len(text)},
        )

        try:
            response = await self._http.post(
                self.endpoint,
                params={"api-version": self._settings.embedding_api_version},
                headers={"api-key": self._settings.account_key},
                json={"input": text},
            )
            response.raise_for_status()
            body = EmbeddingResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(
                "Embedding request rejected",
                extra={"status_code": e.response.status_code, "error_body": e.response.text},
            )
            raise VectorizeFailedError(
                f"Embedding request failed with status {e.response.status_code}",
                {"error_body": e.response.text},
            ) from e
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            logger.error(
                "Embedding request failed",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise VectorizeFailedError(f"Embedding request failed: {e}") from e

        vector = body.first_embedding()
        if len(vector) != self._dimensions:
            raise VectorizeFailedError(
                "Embedding has unexpected dimensions",
                {"expected": self._dimensions, "actual": len(vector)},
            )

        logger.debug(f"Vectorized content: {body.usage}")
        return vector
