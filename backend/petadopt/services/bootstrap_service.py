"""Startup seeding of the first administrator account."""

from __future__ import annotations

import logging

from petadopt.core.config import get_settings
from petadopt.core.errors import ConflictError
from petadopt.db.session import get_sessionmaker
from petadopt.models import UserRole
from petadopt.schemas.user import UserCreate
from petadopt.services import user_service

logger = logging.getLogger(__name__)


async def ensure_default_admin() -> bool:
    """Create the ``BOOTSTRAP_ADMIN_*`` account once; return True when created."""
    settings = get_settings()
    email, password = settings.bootstrap_admin_email, settings.bootstrap_admin_password
    if not (email and password):
        return False

    async with get_sessionmaker()() as session:
        if await user_service.get_user_by_email(session, email.lower()) is not None:
            return False
        admin = UserCreate(
            name=settings.bootstrap_admin_name,
            email=email,
            password=password,
            role=UserRole.ADMIN,
        )
        try:
            await user_service.create_user(session, admin)
        except ConflictError:
            # Another worker created it first.
            return False
    logger.info("Created bootstrap admin %s", admin.email)
    return True
