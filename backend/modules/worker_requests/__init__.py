"""
Worker requests module.

Workers ask to join a shift or to switch with a colleague; managers
approve or reject. Approved join requests become confirmed assignments.

Public API:
- IWorkerRequestService: Interface for the request workflow
- WorkerHourRequest, RequestType, RequestStatus: Core models
"""

from .interfaces import IWorkerRequestRepository, IWorkerRequestService
from .models import (
    EnrichedRequest,
    RequestPriority,
    RequestStatus,
    RequestType,
    SwitchDetails,
    TargetResponse,
    WorkerHourRequest,
)
from .exceptions import (
    DuplicateRequestError,
    InvalidSwitchTargetError,
    NotRequestOwnerError,
    NotSwitchRequestError,
    NotSwitchTargetError,
    RequestNotFoundError,
    RequestNotPendingError,
    SwitchAlreadyAnsweredError,
)

__all__ = [
    "IWorkerRequestRepository",
    "IWorkerRequestService",
    "EnrichedRequest",
    "RequestPriority",
    "RequestStatus",
    "RequestType",
    "SwitchDetails",
    "TargetResponse",
    "WorkerHourRequest",
    "DuplicateRequestError",
    "InvalidSwitchTargetError",
    "NotRequestOwnerError",
    "NotSwitchRequestError",
    "NotSwitchTargetError",
    "RequestNotFoundError",
    "RequestNotPendingError",
    "SwitchAlreadyAnsweredError",
]
