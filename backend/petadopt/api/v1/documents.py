"""Document metadata endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.models.document import DocumentType
from petadopt.schemas.document import DocumentCreate, DocumentRead, DocumentVerify
from petadopt.security.permissions import Action, Actor, require
from petadopt.services import document_service

router = APIRouter()


@router.get("", response_model=list[DocumentRead], summary="List all documents")
async def list_documents(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
    document_type: DocumentType | None = None,
    is_verified: bool | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = 50,
) -> list[DocumentRead]:
    require(actor, Action.DOCUMENT_VERIFY, message="Admin access required")
    documents = await document_service.list_documents(
        session,
        document_type=document_type,
        is_verified=is_verified,
        skip=skip,
        limit=deps.page_limit(limit),
    )
    return [DocumentRead.model_validate(doc) for doc in documents]


@router.post(
    "",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record uploaded document",
)
async def create_document(
    payload: DocumentCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DocumentRead:
    document = await document_service.create_document(
        session, actor=actor, payload=payload
    )
    return DocumentRead.model_validate(document)


@router.get(
    "/pet/{pet_id}", response_model=list[DocumentRead], summary="Documents for a pet"
)
async def list_pet_documents(
    pet_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> list[DocumentRead]:
    documents = await document_service.list_for_pet(
        session, actor=actor, pet_id=pet_id
    )
    return [DocumentRead.model_validate(doc) for doc in documents]


@router.get(
    "/user/{user_id}",
    response_model=list[DocumentRead],
    summary="Documents uploaded by a user",
)
async def list_user_documents(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> list[DocumentRead]:
    documents = await document_service.list_for_user(
        session, actor=actor, user_id=user_id
    )
    return [DocumentRead.model_validate(doc) for doc in documents]


@router.get("/{document_id}", response_model=DocumentRead, summary="Get document")
async def get_document(
    document_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DocumentRead:
    document = await document_service.get_document_for_actor(
        session, actor=actor, document_id=document_id
    )
    return DocumentRead.model_validate(document)


@router.put(
    "/{document_id}/verify", response_model=DocumentRead, summary="Verify document"
)
async def verify_document(
    document_id: int,
    payload: DocumentVerify,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> DocumentRead:
    document = await document_service.verify_document(
        session,
        actor=actor,
        document_id=document_id,
        is_verified=payload.is_verified,
        verification_notes=payload.verification_notes,
    )
    return DocumentRead.model_validate(document)


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete document",
)
async def delete_document(
    document_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    actor: Annotated[Actor, Depends(deps.get_current_actor)],
) -> Response:
    await document_service.delete_document(
        session, actor=actor, document_id=document_id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
