"""
Assignments module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)


class AssignmentNotFoundError(NotFoundError):
    """Raised when an assignment doesn't exist."""

    def __init__(self, assignment_id: str):
        super().__init__(
            f"Assignment not found: {assignment_id}",
            code="ASSIGNMENT_NOT_FOUND",
            details={"assignment_id": assignment_id},
        )


class InvalidAssignmentTransitionError(InvalidTransitionError):
    """Raised when an event is not allowed in the assignment's current state."""

    def __init__(self, current_state: str, event: str):
        super().__init__(
            f"Cannot {event} an assignment that is {current_state}",
            current_state=current_state,
            code="INVALID_ASSIGNMENT_TRANSITION",
            details={"event": event},
        )


class DuplicateAssignmentError(ConflictError):
    """Raised when a worker already holds an assignment for the template and date."""

    def __init__(self, worker_id: str, template_id: str, date: str):
        super().__init__(
            "Worker already has an assignment for this shift on this date",
            code="DUPLICATE_ASSIGNMENT",
            details={"worker_id": worker_id, "shift_template_id": template_id, "date": date},
        )


class NotAssignedWorkerError(AuthorizationError):
    """Raised when someone other than the assigned worker acts for the worker."""

    def __init__(self, assignment_id: str, user_id: str):
        super().__init__(
            "Only the assigned worker can perform this action",
            code="NOT_ASSIGNED_WORKER",
            details={"assignment_id": assignment_id, "user_id": user_id},
        )


class WorkerNotEligibleError(ValidationError):
    """Raised when the target user cannot be scheduled for shifts."""

    def __init__(self, worker_id: str):
        super().__init__(
            f"User {worker_id} cannot be assigned to shifts",
            code="WORKER_NOT_ELIGIBLE",
            details={"worker_id": worker_id},
        )
