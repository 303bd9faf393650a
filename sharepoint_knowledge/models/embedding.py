"""
Embedding response model.

Mirrors the JSON returned by an Azure OpenAI embeddings deployment.

Dependencies: pydantic
System role: Response contract for the vectorization client
"""

from pydantic import BaseModel, Field


class EmbeddingUsage(BaseModel):
    """Token usage reported for an embedding call."""

    total_tokens: int = 0
    prompt_tokens: int = 0

    def __str__(self) -> str:
        return f"{self.total_tokens} total tokens."


class EmbeddingData(BaseModel):
    """A single embedding in the response."""

    object: str = "embedding"
    index: int = 0
    embedding: list[float] = Field(default_factory=list)


class EmbeddingResponse(BaseModel):
    """Embeddings deployment response body."""

    object: str = "list"
    data: list[EmbeddingData] = Field(default_factory=list)
    model: str = ""
    usage: EmbeddingUsage = Field(default_factory=EmbeddingUsage)

    def first_embedding(self) -> list[float]:
        """Return the first embedding, or an empty list when none was returned."""
        if not self.data:
            return []
        return self.data[0].embedding
