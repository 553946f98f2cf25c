"""Sign-in, self-service registration and profile edits."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from petadopt.models.user import User
from petadopt.schemas.auth import ProfileUpdate, RegistrationRequest
from petadopt.schemas.user import UserCreate
from petadopt.services import audit_service, user_service

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.role.value)


async def authenticate_user(
    session: AsyncSession, email: str, password: str
) -> User | None:
    """Return the active account matching the credentials, if any."""
    user = await user_service.get_user_by_email(session, email=email.strip().lower())
    if user is None or not user.is_active:
        return None
    return user if verify_password(password, user.hashed_password) else None


async def login(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    ip_address: str | None = None,
) -> str | None:
    """Issue a token for valid credentials and audit the sign-in."""
    user = await authenticate_user(session, email, password)
    if user is None:
        logger.info("Failed sign-in from %s", ip_address or "unknown address")
        return None
    await audit_service.record_event(
        session,
        event_type="auth.login",
        user_id=user.id,
        payload={"role": user.role.value},
        ip_address=ip_address,
    )
    return issue_token(user)


async def register_user(
    session: AsyncSession,
    payload: RegistrationRequest,
    *,
    ip_address: str | None = None,
) -> tuple[User, str]:
    """Create an adopter or shelter account and sign it in."""
    user = await user_service.create_user(
        session,
        UserCreate(**payload.model_dump()),
    )
    await audit_service.record_event(
        session,
        event_type=f"auth.register.{user.role.value}",
        user_id=user.id,
        description=f"Self-service registration for {user.email}",
        ip_address=ip_address,
    )
    return user, issue_token(user)


async def update_profile(
    session: AsyncSession, user: User, payload: ProfileUpdate
) -> User:
    changes = payload.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    if password:
        user.hashed_password = hash_password(password)
    for field, value in changes.items():
        setattr(user, field, value)
    await session.commit()
    await session.refresh(user)
    return user
