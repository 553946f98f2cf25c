"""Request-scoped dependencies shared by the v1 routers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.config import get_settings
from petadopt.core.security import token_subject
from petadopt.db.session import get_session
from petadopt.models.user import User
from petadopt.security.permissions import Actor

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{get_settings().api_v1_prefix}/auth/token"
)

_UNAUTHORIZED = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Resolve the bearer token to an active account or answer 401."""
    user_id = token_subject(token)
    user = await session.get(User, user_id) if user_id is not None else None
    if user is None or not user.is_active:
        raise _UNAUTHORIZED
    return user


async def get_current_actor(
    current_user: Annotated[User, Depends(get_current_user)],
) -> Actor:
    """Per-request actor handed to services and capability checks."""
    return Actor.from_user(current_user)


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def page_limit(limit: int) -> int:
    """Clamp a requested page size to ``1..PAGE_SIZE_MAX``."""
    return max(1, min(limit, get_settings().page_size_max))
