"""Transition table tests for the adoption and donation workflows."""

from __future__ import annotations

import pytest

from petadopt.core.errors import (
    ConflictError,
    InvalidTransitionError,
    ValidationFailedError,
)
from petadopt.models import AdoptionRequestStatus, DonationStatus
from petadopt.security.permissions import Action
from petadopt.services.workflow import (
    ADOPTION_WORKFLOW,
    DONATION_WORKFLOW,
    require_text,
)

A = AdoptionRequestStatus
D = DonationStatus


@pytest.mark.parametrize(
    ("current", "target", "action"),
    [
        (A.PENDING, A.APPROVED, Action.ADOPTION_APPROVE),
        (A.PENDING, A.REJECTED, Action.ADOPTION_REJECT),
        (A.APPROVED, A.COMPLETED, Action.ADOPTION_COMPLETE),
    ],
)
def test_adoption_allowed_moves(current, target, action) -> None:
    assert ADOPTION_WORKFLOW.check(current, target) is action


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (A.PENDING, A.COMPLETED),
        (A.APPROVED, A.REJECTED),
        (A.APPROVED, A.PENDING),
        (A.REJECTED, A.APPROVED),
        (A.COMPLETED, A.PENDING),
        (A.COMPLETED, A.COMPLETED),
    ],
)
def test_adoption_invalid_moves(current, target) -> None:
    with pytest.raises(InvalidTransitionError) as excinfo:
        ADOPTION_WORKFLOW.check(current, target)
    assert excinfo.value.context["current"] == current.value


def test_same_state_on_open_record_is_conflict() -> None:
    with pytest.raises(ConflictError):
        ADOPTION_WORKFLOW.check(A.PENDING, A.PENDING)
    with pytest.raises(ConflictError):
        DONATION_WORKFLOW.check(D.ACCEPTED, D.ACCEPTED)


def test_terminal_states() -> None:
    assert ADOPTION_WORKFLOW.is_terminal(A.REJECTED)
    assert ADOPTION_WORKFLOW.is_terminal(A.COMPLETED)
    assert not ADOPTION_WORKFLOW.is_terminal(A.APPROVED)
    assert DONATION_WORKFLOW.is_terminal(D.REJECTED)
    assert not DONATION_WORKFLOW.is_terminal(D.PENDING)


def test_donation_moves() -> None:
    assert DONATION_WORKFLOW.check(D.PENDING, D.ACCEPTED) is Action.DONATION_ACCEPT
    assert DONATION_WORKFLOW.check(D.ACCEPTED, D.COMPLETED) is Action.DONATION_COMPLETE
    with pytest.raises(InvalidTransitionError):
        DONATION_WORKFLOW.check(D.PENDING, D.COMPLETED)
    with pytest.raises(InvalidTransitionError):
        DONATION_WORKFLOW.check(D.COMPLETED, D.REJECTED)


def test_require_text() -> None:
    assert require_text("  keep  ", field="reason", message="needed") == "keep"
    for blank in (None, "", "   "):
        with pytest.raises(ValidationFailedError) as excinfo:
            require_text(blank, field="reason", message="needed")
        assert excinfo.value.to_payload() == {
            "error": "validation_failed",
            "detail": "needed",
            "context": {"field": "reason"},
        }
