"""
Shift assignment API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_assignment_service
from shared.models import AuthenticatedUser

from .interfaces import IAssignmentService
from .models import (
    CreateAssignmentRequest,
    EnrichedAssignment,
    RejectAssignmentRequest,
    RequestAssignmentRequest,
    ShiftAssignment,
)

router = APIRouter()


@router.post("", response_model=ShiftAssignment, status_code=201)
async def create_assignment(
    request: CreateAssignmentRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> ShiftAssignment:
    """
    Assign a worker to a shift.

    The assignment waits for the worker's approval unless the manager
    assigned themselves.
    """
    return await service.create_assignment(
        identity,
        worker_id=request.worker_id,
        shift_template_id=request.shift_template_id,
        date=request.date,
        assigned_hours=request.assigned_hours,
        notes=request.notes,
    )


@router.post("/request", response_model=ShiftAssignment, status_code=201)
async def request_assignment(
    request: RequestAssignmentRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> ShiftAssignment:
    """Ask to be put on a shift. Waits for a manager's approval."""
    return await service.request_assignment(
        identity,
        shift_template_id=request.shift_template_id,
        date=request.date,
        assigned_hours=request.assigned_hours,
        notes=request.notes,
    )


@router.get("/pending", response_model=list[EnrichedAssignment])
async def get_pending_assignments(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> list[EnrichedAssignment]:
    return await service.get_pending_assignments(identity)


@router.get("/date/{date}", response_model=list[EnrichedAssignment])
async def get_assignments_for_date(
    date: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> list[EnrichedAssignment]:
    """Assignments on a date, rejected ones excluded."""
    return await service.get_assignments_for_date(identity, date)


@router.get("/worker/{worker_id}", response_model=list[EnrichedAssignment])
async def get_assignments_for_worker(
    worker_id: str,
    start_date: Optional[str] = Query(default=None, description="First date, YYYY-MM-DD"),
    end_date: Optional[str] = Query(default=None, description="Last date, YYYY-MM-DD"),
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> list[EnrichedAssignment]:
    return await service.get_assignments_for_worker(identity, worker_id, start_date, end_date)


@router.post("/{assignment_id}/approve", response_model=ShiftAssignment)
async def worker_approve(
    assignment_id: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> ShiftAssignment:
    """Approve an assignment as the assigned worker."""
    return await service.worker_approve(identity, assignment_id)


@router.post("/{assignment_id}/approve-as-manager", response_model=ShiftAssignment)
async def manager_approve(
    assignment_id: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> ShiftAssignment:
    """Approve a worker-requested assignment."""
    return await service.manager_approve(identity, assignment_id)


@router.post("/{assignment_id}/reject", response_model=ShiftAssignment)
async def reject_assignment(
    assignment_id: str,
    request: Optional[RejectAssignmentRequest] = None,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IAssignmentService = Depends(get_assignment_service),
) -> ShiftAssignment:
    reason = request.reason if request else None
    return await service.reject(identity, assignment_id, reason)
