"""
Assignments module.

The lifecycle of one worker on one shift template on one date, from
pending approval to confirmed or rejected.

Public API:
- IAssignmentService: Interface for assignment operations
- ShiftAssignment, AssignmentStatus: Core models
- AssignmentEvent, next_status: The transition table
"""

from .interfaces import IAssignmentRepository, IAssignmentService
from .models import AssignmentStatus, EnrichedAssignment, ShiftAssignment
from .transitions import AssignmentEvent, TRANSITIONS, is_terminal, next_status
from .exceptions import (
    AssignmentNotFoundError,
    DuplicateAssignmentError,
    InvalidAssignmentTransitionError,
    NotAssignedWorkerError,
    WorkerNotEligibleError,
)

__all__ = [
    "IAssignmentRepository",
    "IAssignmentService",
    "AssignmentStatus",
    "EnrichedAssignment",
    "ShiftAssignment",
    "AssignmentEvent",
    "TRANSITIONS",
    "is_terminal",
    "next_status",
    "AssignmentNotFoundError",
    "DuplicateAssignmentError",
    "InvalidAssignmentTransitionError",
    "NotAssignedWorkerError",
    "WorkerNotEligibleError",
]
