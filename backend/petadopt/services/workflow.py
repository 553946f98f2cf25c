"""Shared state-machine machinery for adoption and donation requests."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from petadopt.core.errors import (
    ConflictError,
    InvalidTransitionError,
    ValidationFailedError,
)
from petadopt.models.adoption import AdoptionRequestStatus
from petadopt.models.donation import DonationStatus
from petadopt.models.pet import Pet
from petadopt.security.permissions import Action

logger = logging.getLogger(__name__)

StatusT = TypeVar("StatusT", bound=enum.Enum)


@dataclass(frozen=True)
class Workflow(Generic[StatusT]):
    """Transition table plus the capability each target state requires."""

    entity: str
    transitions: Mapping[StatusT, frozenset[StatusT]]
    actions: Mapping[StatusT, Action]

    def is_terminal(self, state: StatusT) -> bool:
        return not self.transitions.get(state)

    def check(self, current: StatusT, target: StatusT) -> Action:
        """Validate ``current -> target`` and return the action it requires.

        Leaving a terminal state is an invalid transition; asking for the
        state the record is already in (a retried request) is a conflict.
        """
        if self.is_terminal(current):
            raise InvalidTransitionError(
                f"{self.entity.capitalize()} is already {current.value}",
                current=current.value,
                requested=target.value,
            )
        if current == target:
            raise ConflictError(
                f"{self.entity.capitalize()} is already {current.value}",
                current=current.value,
            )
        if target not in self.transitions[current]:
            raise InvalidTransitionError(
                f"Cannot move {self.entity} from {current.value} to {target.value}",
                current=current.value,
                requested=target.value,
            )
        return self.actions[target]


ADOPTION_WORKFLOW: Workflow[AdoptionRequestStatus] = Workflow(
    entity="adoption",
    transitions={
        AdoptionRequestStatus.PENDING: frozenset(
            {AdoptionRequestStatus.APPROVED, AdoptionRequestStatus.REJECTED}
        ),
        AdoptionRequestStatus.APPROVED: frozenset({AdoptionRequestStatus.COMPLETED}),
        AdoptionRequestStatus.REJECTED: frozenset(),
        AdoptionRequestStatus.COMPLETED: frozenset(),
    },
    actions={
        AdoptionRequestStatus.APPROVED: Action.ADOPTION_APPROVE,
        AdoptionRequestStatus.REJECTED: Action.ADOPTION_REJECT,
        AdoptionRequestStatus.COMPLETED: Action.ADOPTION_COMPLETE,
    },
)

DONATION_WORKFLOW: Workflow[DonationStatus] = Workflow(
    entity="donation",
    transitions={
        DonationStatus.PENDING: frozenset(
            {DonationStatus.ACCEPTED, DonationStatus.REJECTED}
        ),
        DonationStatus.ACCEPTED: frozenset({DonationStatus.COMPLETED}),
        DonationStatus.REJECTED: frozenset(),
        DonationStatus.COMPLETED: frozenset(),
    },
    actions={
        DonationStatus.ACCEPTED: Action.DONATION_ACCEPT,
        DonationStatus.REJECTED: Action.DONATION_REJECT,
        DonationStatus.COMPLETED: Action.DONATION_COMPLETE,
    },
)


def require_text(value: str | None, *, field: str, message: str) -> str:
    """Return ``value`` stripped, raising ValidationFailed when blank."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailedError(message, field=field)
    return cleaned


def touch_pet(pet: Pet) -> None:
    """Force a version bump on ``pet`` so competing writers on it collide."""
    flag_modified(pet, "adoption_status")


async def commit_transition(
    session: AsyncSession, *, entity: str, entity_id: int
) -> None:
    """Commit a workflow write, mapping lost optimistic races to Conflict."""
    try:
        await session.commit()
    except StaleDataError as exc:
        await session.rollback()
        logger.warning("Concurrent update lost on %s %s", entity, entity_id)
        raise ConflictError(
            f"The {entity} was modified by another request; reload and retry",
            **{f"{entity}_id": entity_id},
        ) from exc


__all__ = [
    "ADOPTION_WORKFLOW",
    "DONATION_WORKFLOW",
    "Workflow",
    "commit_transition",
    "require_text",
    "touch_pet",
]
