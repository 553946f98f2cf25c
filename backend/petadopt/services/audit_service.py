"""Audit trail for logins, registrations and workflow transitions."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.models.audit_event import AuditEvent


async def record_event(
    session: AsyncSession,
    *,
    event_type: str,
    user_id: int | None = None,
    description: str | None = None,
    payload: dict[str, Any] | None = None,
    ip_address: str | None = None,
    commit: bool = True,
) -> AuditEvent:
    """Add an audit row; pass ``commit=False`` to join the caller's transaction."""
    event = AuditEvent(
        event_type=event_type,
        user_id=user_id,
        description=description,
        payload=payload or None,
        ip_address=ip_address,
    )
    session.add(event)
    if commit:
        await session.commit()
    return event
