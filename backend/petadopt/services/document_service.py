"""Services for document metadata.

File bytes live with the external upload collaborator; this module only keeps
the metadata rows and the admin verification state.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from petadopt.core.errors import ForbiddenError, NotFoundError
from petadopt.models.document import Document, DocumentType
from petadopt.models.pet import Pet
from petadopt.schemas.document import DocumentCreate
from petadopt.security.permissions import Action, Actor, can, require
from petadopt.services import audit_service

logger = logging.getLogger(__name__)


def _document_query() -> Select[tuple[Document]]:
    return select(Document).options(selectinload(Document.pet))


async def list_documents(
    session: AsyncSession,
    *,
    document_type: DocumentType | None = None,
    is_verified: bool | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Document]:
    stmt = _document_query()
    if document_type is not None:
        stmt = stmt.where(Document.document_type == document_type)
    if is_verified is not None:
        stmt = stmt.where(Document.is_verified.is_(is_verified))
    stmt = stmt.order_by(Document.created_at.desc(), Document.id.desc())
    result = await session.execute(stmt.offset(skip).limit(limit))
    return list(result.scalars().all())


async def list_for_pet(
    session: AsyncSession, *, actor: Actor, pet_id: int
) -> list[Document]:
    """Documents attached to a pet; strangers only see their own uploads."""
    pet = await session.get(Pet, pet_id)
    if pet is None:
        raise NotFoundError("Pet not found", pet_id=pet_id)
    stmt = _document_query().where(Document.pet_id == pet_id)
    if not (actor.is_admin or pet.uploaded_by == actor.id):
        stmt = stmt.where(Document.user_id == actor.id)
    result = await session.execute(stmt.order_by(Document.created_at.desc()))
    return list(result.scalars().all())


async def list_for_user(
    session: AsyncSession, *, actor: Actor, user_id: int
) -> list[Document]:
    if actor.id != user_id and not actor.is_admin:
        raise ForbiddenError("You can only view your own documents")
    result = await session.execute(
        _document_query()
        .where(Document.user_id == user_id)
        .order_by(Document.created_at.desc())
    )
    return list(result.scalars().all())


async def get_document(session: AsyncSession, document_id: int) -> Document:
    result = await session.execute(
        _document_query().where(Document.id == document_id)
    )
    document = result.scalar_one_or_none()
    if document is None:
        raise NotFoundError("Document not found", document_id=document_id)
    return document


async def get_document_for_actor(
    session: AsyncSession, *, actor: Actor, document_id: int
) -> Document:
    document = await get_document(session, document_id)
    require(actor, Action.DOCUMENT_VIEW, document, message="Access denied")
    return document


async def create_document(
    session: AsyncSession, *, actor: Actor, payload: DocumentCreate
) -> Document:
    if payload.pet_id is not None and await session.get(Pet, payload.pet_id) is None:
        raise NotFoundError("Pet not found", pet_id=payload.pet_id)
    document = Document(user_id=actor.id, **payload.model_dump())
    session.add(document)
    await session.commit()
    logger.info("Document %s recorded by user %s", document.id, actor.id)
    return await get_document(session, document.id)


async def verify_document(
    session: AsyncSession,
    *,
    actor: Actor,
    document_id: int,
    is_verified: bool,
    verification_notes: str | None = None,
) -> Document:
    document = await get_document(session, document_id)
    require(actor, Action.DOCUMENT_VERIFY, document)
    document.is_verified = is_verified
    document.verification_notes = verification_notes
    document.verified_by = actor.id if is_verified else None
    document.verified_at = datetime.now(UTC) if is_verified else None
    await audit_service.record_event(
        session,
        event_type="document.verified" if is_verified else "document.unverified",
        user_id=actor.id,
        payload={"document_id": document.id},
        commit=False,
    )
    await session.commit()
    await session.refresh(document)
    return document


async def delete_document(
    session: AsyncSession, *, actor: Actor, document_id: int
) -> None:
    document = await get_document(session, document_id)
    if not can(actor, Action.DOCUMENT_DELETE, document):
        raise ForbiddenError("You can only delete your own documents")
    await session.delete(document)
    await session.commit()
    logger.info("Document %s deleted by %s", document_id, actor.id)
