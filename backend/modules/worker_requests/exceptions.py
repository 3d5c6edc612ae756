"""
Worker requests module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)


class RequestNotFoundError(NotFoundError):
    """Raised when a worker-hour request doesn't exist."""

    def __init__(self, request_id: str):
        super().__init__(
            f"Request not found: {request_id}",
            code="REQUEST_NOT_FOUND",
            details={"request_id": request_id},
        )


class RequestNotPendingError(InvalidTransitionError):
    """Raised when a request that is no longer pending is acted on."""

    def __init__(self, request_id: str, current_state: str):
        super().__init__(
            f"Request has already been {current_state}",
            current_state=current_state,
            code="INVALID_REQUEST_TRANSITION",
            details={"request_id": request_id},
        )


class DuplicateRequestError(ConflictError):
    """Raised when the worker already has a pending request for the shift and date."""

    def __init__(self, worker_id: str, template_id: str, date: str):
        super().__init__(
            "You already have a pending request for this shift on this date",
            code="DUPLICATE_REQUEST",
            details={"worker_id": worker_id, "shift_template_id": template_id, "date": date},
        )


class NotRequestOwnerError(AuthorizationError):
    """Raised when someone other than the requester cancels a request."""

    def __init__(self, request_id: str):
        super().__init__(
            "You can only cancel your own requests",
            code="NOT_REQUEST_OWNER",
            details={"request_id": request_id},
        )


class NotSwitchTargetError(AuthorizationError):
    """Raised when someone other than the switch target responds."""

    def __init__(self, request_id: str):
        super().__init__(
            "You are not the target of this switch request",
            code="NOT_SWITCH_TARGET",
            details={"request_id": request_id},
        )


class NotSwitchRequestError(ValidationError):
    def __init__(self, request_id: str):
        super().__init__(
            "This is not a switch request",
            code="NOT_SWITCH_REQUEST",
            details={"request_id": request_id},
        )


class SwitchAlreadyAnsweredError(ConflictError):
    def __init__(self, request_id: str):
        super().__init__(
            "You have already responded to this request",
            code="SWITCH_ALREADY_ANSWERED",
            details={"request_id": request_id},
        )


class InvalidSwitchTargetError(ValidationError):
    def __init__(self, message: str):
        super().__init__(message, code="INVALID_SWITCH_TARGET")
