"""Document schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from petadopt.models.document import DocumentType

MAX_DOCUMENT_BYTES = 10 * 1024 * 1024


class DocumentCreate(BaseModel):
    """Metadata for a file already stored by the upload service."""

    pet_id: int | None = None
    file_name: str = Field(min_length=1, max_length=255)
    file_path: str = Field(min_length=1, max_length=1024)
    file_size: int = Field(ge=0, le=MAX_DOCUMENT_BYTES)
    mime_type: str = Field(min_length=1, max_length=128)
    document_type: DocumentType = DocumentType.OTHER
    description: str | None = None


class DocumentVerify(BaseModel):
    is_verified: bool
    verification_notes: str | None = None


class DocumentRead(BaseModel):
    """Serialized document metadata."""

    id: int
    pet_id: int | None = None
    user_id: int
    file_name: str
    file_path: str
    file_size: int
    mime_type: str
    document_type: DocumentType
    description: str | None = None
    is_verified: bool
    verified_by: int | None = None
    verified_at: datetime | None = None
    verification_notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
