"""
Shift assignments data models.

An assignment binds one worker to one shift template on one date for one
or more hour ranges, and moves through the approval states defined in
``transitions``.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import TemplateSummary, UserSummary
from modules.shifts.models import DATE_PATTERN, HourRange


class AssignmentStatus(str, Enum):
    PENDING_WORKER_APPROVAL = "pending_worker_approval"
    PENDING_MANAGER_APPROVAL = "pending_manager_approval"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class ShiftAssignment(BaseModel):
    """
    One worker on one shift template on one date.

    A confirmed assignment always has both approval timestamps.
    """

    id: str
    shift_template_id: str
    worker_id: str
    date: str = Field(..., pattern=DATE_PATTERN)
    assigned_hours: list[HourRange] = Field(default_factory=list)
    assigned_by: str
    assigned_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: AssignmentStatus
    manager_approved_at: Optional[datetime] = None
    worker_approved_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class EnrichedAssignment(ShiftAssignment):
    """Assignment with its referenced records resolved. Missing ones are None."""

    worker: Optional[UserSummary] = None
    shift: Optional[TemplateSummary] = None
    assigned_by_user: Optional[UserSummary] = None


# Request models


class CreateAssignmentRequest(BaseModel):
    """Manager request to put a worker on a shift."""

    shift_template_id: str
    worker_id: str
    date: str = Field(..., pattern=DATE_PATTERN)
    assigned_hours: list[HourRange] = Field(..., min_length=1)
    notes: Optional[str] = None


class RequestAssignmentRequest(BaseModel):
    """Worker request to be put on a shift. Hours default to the whole shift."""

    shift_template_id: str
    date: str = Field(..., pattern=DATE_PATTERN)
    assigned_hours: Optional[list[HourRange]] = None
    notes: Optional[str] = None


class RejectAssignmentRequest(BaseModel):
    reason: Optional[str] = None
