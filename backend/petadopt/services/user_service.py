"""User data access helpers."""
from __future__ import annotations

import logging

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.errors import ConflictError, ForbiddenError, NotFoundError
from petadopt.core.security import hash_password
from petadopt.models import (
    Adoption,
    AdoptionRequestStatus,
    AdoptionStatus,
    Document,
    Donation,
    Favorite,
    Pet,
    User,
    UserRole,
)
from petadopt.schemas.user import UserCreate, UserUpdate
from petadopt.security.permissions import Actor
from petadopt.services import audit_service
from petadopt.services.adoption_service import ACTIVE_STATUSES
from petadopt.services.workflow import touch_pet

logger = logging.getLogger(__name__)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    """Return a user by ID."""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def require_user(session: AsyncSession, user_id: int) -> User:
    user = await get_user(session, user_id)
    if user is None:
        raise NotFoundError("User not found", user_id=user_id)
    return user


async def list_users(
    session: AsyncSession,
    *,
    skip: int = 0,
    limit: int = 50,
    role: UserRole | None = None,
    is_active: bool | None = None,
    search: str | None = None,
) -> list[User]:
    """Return paginated users, newest first."""
    stmt = select(User)
    if role is not None:
        stmt = stmt.where(User.role == role)
    if is_active is not None:
        stmt = stmt.where(User.is_active.is_(is_active))
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(User.name).like(pattern),
                func.lower(User.email).like(pattern),
            )
        )
    result = await session.execute(
        stmt.order_by(User.created_at.desc(), User.id.desc()).offset(skip).limit(limit)
    )
    return list(result.scalars().all())


async def list_shelters(session: AsyncSession) -> list[User]:
    """Return active shelters ordered by name."""
    result = await session.execute(
        select(User)
        .where(User.role == UserRole.SHELTER, User.is_active.is_(True))
        .order_by(User.name.asc())
    )
    return list(result.scalars().all())


async def create_user(session: AsyncSession, payload: UserCreate) -> User:
    """Persist a new user with hashed password."""
    if await get_user_by_email(session, payload.email) is not None:
        raise ConflictError("User already exists with this email", email=payload.email)
    user = User(
        name=payload.name,
        email=payload.email.lower(),
        hashed_password=hash_password(payload.password),
        role=payload.role,
        phone=payload.phone,
        address=payload.address,
        is_active=payload.is_active,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError(
            "User already exists with this email", email=payload.email
        ) from exc
    await session.refresh(user)
    logger.info("Created user %s with role %s", user.id, user.role.value)
    return user


async def update_user(
    session: AsyncSession, user: User, payload: UserUpdate, *, actor: Actor
) -> User:
    """Update mutable fields on a user."""
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("is_active") is False and user.id == actor.id:
        raise ForbiddenError("You cannot deactivate your own account")
    email = changes.get("email")
    if email and email != user.email:
        existing = await get_user_by_email(session, email)
        if existing is not None and existing.id != user.id:
            raise ConflictError("Email is already in use", email=email)
    for field, value in changes.items():
        setattr(user, field, value)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError("Email is already in use") from exc
    await session.refresh(user)
    return user


async def set_user_status(
    session: AsyncSession, user: User, *, is_active: bool, actor: Actor
) -> User:
    """Activate or deactivate an account."""
    if user.id == actor.id and not is_active:
        raise ForbiddenError("You cannot deactivate your own account")
    user.is_active = is_active
    await audit_service.record_event(
        session,
        event_type="user.status_changed",
        user_id=actor.id,
        description=f"User {user.id} {'activated' if is_active else 'deactivated'}",
        payload={"target_user_id": user.id, "is_active": is_active},
        commit=False,
    )
    await session.commit()
    await session.refresh(user)
    return user


async def _release_held_pets(session: AsyncSession, user_id: int) -> None:
    """Return pets reserved only by ``user_id``'s requests to the catalogue."""
    held = await session.scalars(
        select(Pet)
        .join(Adoption, Adoption.pet_id == Pet.id)
        .where(
            Adoption.user_id == user_id,
            Adoption.status.in_(ACTIVE_STATUSES),
            Pet.uploaded_by != user_id,
        )
        .distinct()
    )
    for pet in held.all():
        others = await session.scalar(
            select(func.count(Adoption.id)).where(
                Adoption.pet_id == pet.id,
                Adoption.user_id != user_id,
                Adoption.status.in_(ACTIVE_STATUSES),
            )
        )
        if not others and pet.adoption_status != AdoptionStatus.ADOPTED:
            pet.adoption_status = AdoptionStatus.AVAILABLE
        touch_pet(pet)


async def delete_user(session: AsyncSession, user: User, *, actor: Actor) -> None:
    """Delete a user and everything they own.

    Users who still list adoptable pets or have pending applications are kept.
    Pets held by the user's approved applications go back on offer.
    """
    if user.id == actor.id:
        raise ForbiddenError("You cannot delete your own account")

    active_pets = await session.scalar(
        select(func.count(Pet.id)).where(
            Pet.uploaded_by == user.id,
            Pet.adoption_status.in_([AdoptionStatus.AVAILABLE, AdoptionStatus.PENDING]),
        )
    )
    pending_adoptions = await session.scalar(
        select(func.count(Adoption.id)).where(
            Adoption.user_id == user.id,
            Adoption.status == AdoptionRequestStatus.PENDING,
        )
    )
    if active_pets or pending_adoptions:
        raise ConflictError(
            "Cannot delete user with active pets or pending adoptions",
            active_pets=active_pets or 0,
            pending_adoptions=pending_adoptions or 0,
        )

    await _release_held_pets(session, user.id)
    owned_pets = select(Pet.id).where(Pet.uploaded_by == user.id)
    for model, column in (
        (Favorite, Favorite.pet_id),
        (Adoption, Adoption.pet_id),
        (Donation, Donation.pet_id),
        (Document, Document.pet_id),
    ):
        await session.execute(delete(model).where(column.in_(owned_pets)))
    await session.execute(delete(Favorite).where(Favorite.user_id == user.id))
    await session.execute(delete(Adoption).where(Adoption.user_id == user.id))
    await session.execute(delete(Donation).where(Donation.shelter_id == user.id))
    await session.execute(
        update(Donation).where(Donation.donor_id == user.id).values(donor_id=None)
    )
    await session.execute(delete(Document).where(Document.user_id == user.id))
    await session.execute(delete(Pet).where(Pet.uploaded_by == user.id))
    await session.delete(user)
    await audit_service.record_event(
        session,
        event_type="user.deleted",
        user_id=actor.id,
        description=f"Deleted user {user.email}",
        payload={"target_user_id": user.id},
        commit=False,
    )
    await session.commit()
    logger.info("User %s deleted by %s", user.id, actor.id)
