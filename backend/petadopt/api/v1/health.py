"""Liveness and database readiness."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.api import deps
from petadopt.core.config import get_settings

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck(
    response: Response,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, str]:
    """Report the service name and whether the database answers; 503 when it does not."""
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "unavailable"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    settings = get_settings()
    return {
        "status": "ok" if database == "ok" else "degraded",
        "service": settings.app_name,
        "database": database,
        "environment": settings.app_env,
        "timestamp": datetime.now(UTC).isoformat(),
    }
