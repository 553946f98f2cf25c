"""Domain error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for recoverable domain failures.

    Each subclass carries a stable ``kind`` string and the HTTP status the API
    layer answers with; the message is returned verbatim as ``detail``.
    """

    kind = "error"
    status_code = 400

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.kind, "detail": self.message}
        if self.context:
            payload["context"] = self.context
        return payload


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = 404


class InvalidTransitionError(DomainError):
    kind = "invalid_transition"
    status_code = 400


class ValidationFailedError(DomainError):
    kind = "validation_failed"
    status_code = 422


class ConflictError(DomainError):
    kind = "conflict"
    status_code = 409


class ForbiddenError(DomainError):
    kind = "forbidden"
    status_code = 403


__all__ = [
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "InvalidTransitionError",
    "NotFoundError",
    "ValidationFailedError",
]
