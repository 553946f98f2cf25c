"""Document metadata for uploaded pet and user files."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base, TimestampMixin


class DocumentType(str, enum.Enum):
    VACCINATION_RECORD = "vaccination_record"
    HEALTH_CERTIFICATE = "health_certificate"
    MEDICAL_HISTORY = "medical_history"
    ADOPTION_CONTRACT = "adoption_contract"
    IDENTIFICATION = "identification"
    OTHER = "other"

class Document(TimestampMixin, Base):
    """Stores metadata for files kept by the storage collaborator."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pet_id: Mapped[int | None] = mapped_column(
        ForeignKey("pets.id", ondelete="CASCADE"), nullable=True, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger(), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(128), nullable=False)
    document_type: Mapped[DocumentType] = mapped_column(
        Enum(DocumentType), default=DocumentType.OTHER, nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verified_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    verification_notes: Mapped[str | None] = mapped_column(Text)

    pet = relationship("Pet", back_populates="documents")
    uploader = relationship("User", foreign_keys=[user_id])
    verifier = relationship("User", foreign_keys=[verified_by])
