"""
Base exception classes for the Kastel Ops backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code.
"""

from typing import Optional, Any


class KastelError(Exception):
    """
    Base exception for all Kastel Ops errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(KastelError):
    """Resource not found."""

    pass


class ValidationError(KastelError):
    """Input validation failed."""

    pass


class AuthenticationError(KastelError):
    """Authentication failed (no identity, invalid or missing credentials)."""

    pass


class AuthorizationError(KastelError):
    """Authorization failed (effective role lacks the required action)."""

    pass


class InvalidTransitionError(KastelError):
    """A state machine precondition was violated."""

    def __init__(
        self,
        message: str,
        current_state: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.current_state = current_state
        self.details["current_state"] = current_state


class ConflictError(KastelError):
    """The operation would duplicate an existing record."""

    pass
