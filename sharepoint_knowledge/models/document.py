"""
Document domain models for ingestion.

Represents SharePoint document references, analyzed pages and the
vectorized page chunks written to the pre-vectorized search index.

Dependencies: pydantic
System role: Data structures flowing through the ingestion pipeline
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentReference(BaseModel):
    """Reference to a SharePoint document, as sent by the upstream caller."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        json_schema_extra={
            "example": {
                "driveId": "b!5T2lW0cbQk6pAAAAAAAAAA",
                "itemId": "01ABCDEFGHIJKLMNOPQRSTUVWXYZ",
                "name": "Handbook.pdf",
                "title": "Employee Handbook",
                "url": "https://contoso.sharepoint.com/sites/hr/Shared Documents/Handbook.pdf",
                "securityData": "",
            }
        },
    )

    drive_id: str = Field(default="", description="SharePoint drive (document library) ID")
    item_id: str = Field(default="", description="SharePoint drive item ID")
    name: str = Field(default="", description="File name, used as the blob key")
    title: str = Field(default="", description="Display title")
    url: str = Field(default="", description="Canonical document URL")
    security_data: str = Field(default="", description="Opaque permission blob, carried not interpreted")

    def __str__(self) -> str:
        return self.url


class AnalyzedPage(BaseModel):
    """One page of text returned by document analysis."""

    page_number: int = Field(description="1-based page number")
    lines: list[str] = Field(default_factory=list, description="Line texts in reading order")

    @property
    def content(self) -> str:
        """Page text with lines joined by newlines."""
        return "\n".join(self.lines)


class Chunk(DocumentReference):
    """One page of a document with its title and content vectors."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique chunk key")
    page_number: int = Field(description="1-based page number")
    content: str = Field(default="", description="Extracted page text")
    title_vector: list[float] = Field(default_factory=list, description="Embedding of the document title")
    content_vector: list[float] = Field(default_factory=list, description="Embedding of the page text")

    @classmethod
    def from_page(
        cls,
        doc: DocumentReference,
        page_number: int,
        content: str,
        title_vector: list[float],
        content_vector: list[float],
    ) -> "Chunk":
        """Create a chunk carrying every field of its source document."""
        return cls(
            **doc.model_dump(),
            page_number=page_number,
            content=content,
            title_vector=title_vector,
            content_vector=content_vector,
        )

    def to_index_document(self) -> dict:
        """Serialize with the pre-vectorized index field names."""
        return self.model_dump(by_alias=True)
