"""Capability checks shared by the workflow engine and the API layer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from petadopt.core.errors import ForbiddenError
from petadopt.models.adoption import Adoption
from petadopt.models.document import Document
from petadopt.models.donation import Donation
from petadopt.models.pet import Pet
from petadopt.models.user import User, UserRole


@dataclass(frozen=True, slots=True)
class Actor:
    """The authenticated principal performing a request."""

    id: int
    role: UserRole
    name: str = ""

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role, name=user.name)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_shelter(self) -> bool:
        return self.role == UserRole.SHELTER


class Action(str, enum.Enum):
    """Operations gated by :func:`can`."""

    PET_CREATE = "pet:create"
    PET_UPDATE = "pet:update"
    PET_SET_STATUS = "pet:set_status"
    PET_DELETE = "pet:delete"

    ADOPTION_CREATE = "adoption:create"
    ADOPTION_VIEW = "adoption:view"
    ADOPTION_APPROVE = "adoption:approve"
    ADOPTION_REJECT = "adoption:reject"
    ADOPTION_COMPLETE = "adoption:complete"
    ADOPTION_DELETE = "adoption:delete"

    DONATION_CREATE = "donation:create"
    DONATION_VIEW = "donation:view"
    DONATION_ACCEPT = "donation:accept"
    DONATION_REJECT = "donation:reject"
    DONATION_COMPLETE = "donation:complete"
    DONATION_DELETE = "donation:delete"

    DOCUMENT_VIEW = "document:view"
    DOCUMENT_DELETE = "document:delete"
    DOCUMENT_VERIFY = "document:verify"

    USER_MANAGE = "user:manage"
    STATS_VIEW = "stats:view"


# Actions only an administrator may perform, whatever the resource.
_ADMIN_ONLY = frozenset(
    {
        Action.PET_SET_STATUS,
        Action.ADOPTION_COMPLETE,
        Action.ADOPTION_DELETE,
        Action.DONATION_COMPLETE,
        Action.DONATION_DELETE,
        Action.DOCUMENT_VERIFY,
        Action.USER_MANAGE,
        Action.STATS_VIEW,
    }
)


def _owns_pet(actor: Actor, pet: Pet | None) -> bool:
    return pet is not None and pet.uploaded_by == actor.id


def _can_on_pet(actor: Actor, action: Action, pet: Pet | None) -> bool:
    if action == Action.PET_CREATE:
        return actor.is_shelter
    return _owns_pet(actor, pet)


def _can_on_adoption(actor: Actor, action: Action, adoption: Adoption | None) -> bool:
    if action == Action.ADOPTION_CREATE:
        return actor.role == UserRole.USER
    if adoption is None:
        return False
    if action == Action.ADOPTION_VIEW:
        return adoption.user_id == actor.id or (
            actor.is_shelter and _owns_pet(actor, adoption.pet)
        )
    if action in (Action.ADOPTION_APPROVE, Action.ADOPTION_REJECT):
        return actor.is_shelter and _owns_pet(actor, adoption.pet)
    return False


def _can_on_donation(actor: Actor, action: Action, donation: Donation | None) -> bool:
    if action == Action.DONATION_CREATE:
        return True
    if donation is None:
        return False
    addressed_to_actor = actor.is_shelter and donation.shelter_id == actor.id
    if action == Action.DONATION_VIEW:
        return addressed_to_actor or donation.donor_id == actor.id
    if action in (Action.DONATION_ACCEPT, Action.DONATION_REJECT):
        return addressed_to_actor
    return False


def _can_on_document(actor: Actor, action: Action, document: Document | None) -> bool:
    if document is None:
        return False
    if document.user_id == actor.id:
        return action in (Action.DOCUMENT_VIEW, Action.DOCUMENT_DELETE)
    if action == Action.DOCUMENT_VIEW:
        return actor.is_shelter and _owns_pet(actor, document.pet)
    return False


def can(actor: Actor, action: Action, resource: Any | None = None) -> bool:
    """Return whether ``actor`` may perform ``action`` on ``resource``.

    Administrators may do everything. Other roles are checked against the
    resource they act on; relationships consulted here (``Adoption.pet``,
    ``Donation.pet``, ``Document.pet``) must already be loaded.
    """

    if actor.is_admin:
        return True
    if action in _ADMIN_ONLY:
        return False
    if action.value.startswith("pet:"):
        return _can_on_pet(actor, action, resource)
    if action.value.startswith("adoption:"):
        return _can_on_adoption(actor, action, resource)
    if action.value.startswith("donation:"):
        return _can_on_donation(actor, action, resource)
    if action.value.startswith("document:"):
        return _can_on_document(actor, action, resource)
    return False


def require(
    actor: Actor,
    action: Action,
    resource: Any | None = None,
    *,
    message: str = "Insufficient permissions",
) -> None:
    """Raise :class:`ForbiddenError` unless :func:`can` allows the action."""

    if not can(actor, action, resource):
        raise ForbiddenError(message, action=action.value)


def require_roles(actor: Actor, allowed: set[UserRole]) -> None:
    """Raise :class:`ForbiddenError` if the actor's role is not allowed."""

    if actor.role not in allowed:
        raise ForbiddenError("Insufficient permissions")


__all__ = ["Action", "Actor", "can", "require", "require_roles"]
