"""
Users module exceptions.

PermissionDeniedError is raised by every module that gates an operation
on the permission table.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a referenced or authenticated user doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class PermissionDeniedError(AuthorizationError):
    """Raised when the caller's effective role lacks an action."""

    def __init__(self, action: str, role: str):
        super().__init__(
            f"Permission denied: {action} is not allowed for role {role}",
            code="PERMISSION_DENIED",
            details={"action": action, "role": role},
        )


class EmulationNotAllowedError(AuthorizationError):
    """Raised when a non-tester tries to emulate a role."""

    def __init__(self, user_id: str):
        super().__init__(
            "Only testers can emulate other roles",
            code="EMULATION_NOT_ALLOWED",
            details={"user_id": user_id},
        )


class InvalidEmulationTargetError(ValidationError):
    """Raised when the requested emulated role cannot be emulated."""

    def __init__(self, role: str):
        super().__init__(
            f"Cannot emulate role: {role}",
            code="INVALID_EMULATION_TARGET",
            details={"role": role},
        )
