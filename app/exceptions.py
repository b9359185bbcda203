"""
Domain exceptions for the Sportify backend.
Services raise these; routers translate them into HTTP responses.
"""

from typing import Dict, Optional


class SportifyError(Exception):
    """Base exception for all domain errors."""

    status_code = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(SportifyError):
    """Requested facility, booking or record does not exist."""

    status_code = 404


class PermissionDeniedError(SportifyError):
    """The actor is not allowed to perform the action."""

    status_code = 403


class InvalidTransitionError(SportifyError):
    """Booking status change not defined by the lifecycle."""

    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            f"Cannot move booking from '{current_status}' to '{target_status}'",
            details={"current_status": current_status, "target_status": target_status},
        )


class BookingConflictError(SportifyError):
    """The requested interval overlaps an active booking."""

    status_code = 409


class RegistrationValidationError(SportifyError):
    """One or more wizard gates failed; carries the field -> message map."""

    status_code = 422

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("Validation failed", details={"errors": errors})
