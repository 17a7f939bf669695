"""
Domain error hierarchy for Notely.

Every expected failure is a NotelyError subclass carrying its HTTP status and
a client-safe message. The API layer turns these into the standard
``{"s": false, "message": ...}`` body; anything else becomes InternalError.
"""

from typing import Any, Optional


class NotelyError(Exception):
    """Base exception for all Notely errors."""

    code: str = "INTERNAL_ERROR"
    http_status: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> dict[str, Any]:
        """Convert to the JSON error envelope."""
        body: dict[str, Any] = {"s": False, "message": self.message}
        body.update(self.details)
        return body


class ValidationError(NotelyError):
    """Malformed or missing input."""

    code = "VALIDATION_ERROR"
    http_status = 422
    default_message = "The given data was invalid."

    def __init__(self, message: Optional[str] = None, errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message, errors=errors or {})

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors={field: [message]})


class AuthError(NotelyError):
    """Bad credentials or a missing/invalid bearer token."""

    code = "AUTH_ERROR"
    http_status = 401
    default_message = "Unauthenticated"


class ForbiddenError(NotelyError):
    """Authenticated, but the resource belongs to someone else."""

    code = "FORBIDDEN"
    http_status = 403
    default_message = "Unauthorized"


class NotFoundError(NotelyError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Resource not found"


class ConflictError(NotelyError):
    """Unique constraint violation."""

    code = "CONFLICT"
    http_status = 409
    default_message = "Resource already exists"


class InternalError(NotelyError):
    """Unexpected failure. The message is always generic."""
