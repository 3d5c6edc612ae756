"""
Worker-hour requests data models.

A worker asks to join a shift or to switch with a colleague; a manager
approves or rejects. An approved join request with hours produces exactly
one confirmed assignment, linked by ``created_assignment_id``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import TemplateSummary, UserSummary
from modules.shifts.models import DATE_PATTERN, HourRange


class RequestType(str, Enum):
    JOIN_SHIFT = "join_shift"
    SWITCH_REQUEST = "switch_request"


class RequestPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    URGENT = "urgent"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class TargetResponse(str, Enum):
    """The switch target's answer to a switch request."""

    APPROVED = "approved"
    DENIED = "denied"


class SwitchDetails(BaseModel):
    target_worker_id: str
    target_assignment_id: Optional[str] = None
    target_worker_response: Optional[TargetResponse] = None


class WorkerHourRequest(BaseModel):
    """A worker's request to join or switch a shift."""

    id: str
    worker_id: str
    shift_template_id: str
    date: str = Field(..., pattern=DATE_PATTERN)
    request_type: RequestType
    requested_hours: Optional[HourRange] = None
    reason: Optional[str] = None
    priority: RequestPriority = RequestPriority.NORMAL
    switch_details: Optional[SwitchDetails] = None
    status: RequestStatus = RequestStatus.PENDING
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    created_assignment_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EnrichedRequest(WorkerHourRequest):
    """Request with its referenced records resolved. Missing ones are None."""

    worker: Optional[UserSummary] = None
    shift: Optional[TemplateSummary] = None
    target_worker: Optional[UserSummary] = None
    reviewed_by_user: Optional[UserSummary] = None


# Request models


class JoinShiftRequest(BaseModel):
    """Request body for asking to join a shift."""

    shift_template_id: str
    date: str = Field(..., pattern=DATE_PATTERN)
    requested_hours: HourRange
    reason: Optional[str] = None
    priority: RequestPriority = RequestPriority.NORMAL


class SwitchShiftRequest(BaseModel):
    """Request body for asking a colleague to switch."""

    shift_template_id: str
    date: str = Field(..., pattern=DATE_PATTERN)
    target_worker_id: str
    target_assignment_id: Optional[str] = None
    requested_hours: Optional[HourRange] = None
    reason: Optional[str] = None
    priority: RequestPriority = RequestPriority.NORMAL


class ReviewRequestBody(BaseModel):
    notes: Optional[str] = None


class SwitchResponseBody(BaseModel):
    approve: bool
