"""Sign-in, registration and the caller's own profile."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.core.config import get_settings
from petadopt.models.user import User
from petadopt.schemas.auth import (
    ProfileUpdate,
    RegistrationRequest,
    RegistrationResponse,
    Token,
)
from petadopt.schemas.user import UserRead
from petadopt.services import auth_service

router = APIRouter()

_WINDOW_SECONDS = {"second": 1, "minute": 60, "hour": 3600, "day": 86400}


def parse_rate(rate: str) -> tuple[int, int]:
    """Turn ``"10/minute"`` into ``(10, 60)``; raises ValueError otherwise."""
    times, _, window = rate.partition("/")
    seconds = _WINDOW_SECONDS.get(window.strip().lower().removesuffix("s"))
    if seconds is None or not times.strip().isdigit():
        raise ValueError(f"Unrecognised rate limit {rate!r}")
    return int(times), seconds


def rate_limited(rate: str):
    """Dependency enforcing ``rate`` per client once the limiter is initialised."""
    times, seconds = parse_rate(rate)
    limiter = RateLimiter(times=times, seconds=seconds)

    async def _check(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is not None:
            await limiter(request, response)

    return Depends(_check)


_settings = get_settings()


@router.post(
    "/token",
    response_model=Token,
    summary="Exchange email and password for a bearer token",
    dependencies=[rate_limited(_settings.rate_limit_login)],
)
async def issue_token(
    form: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    request: Request,
) -> Token:
    token = await auth_service.login(
        session,
        email=form.username,
        password=form.password,
        ip_address=deps.client_ip(request),
    )
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=token)


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an adopter or shelter account",
    dependencies=[rate_limited(_settings.rate_limit_default)],
)
async def register(
    payload: RegistrationRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    request: Request,
) -> RegistrationResponse:
    """Admins are never self-registered; the new account is signed in directly."""
    user, token = await auth_service.register_user(
        session, payload, ip_address=deps.client_ip(request)
    )
    return RegistrationResponse(
        token=Token(access_token=token), user=UserRead.model_validate(user)
    )


@router.get("/me", response_model=UserRead, summary="Current user profile")
async def read_me(
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch("/me", response_model=UserRead, summary="Update own profile")
async def update_me(
    payload: ProfileUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> UserRead:
    user = await auth_service.update_profile(session, current_user, payload)
    return UserRead.model_validate(user)
