"""
Worker-hour request API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_worker_request_service
from shared.models import AuthenticatedUser

from .interfaces import IWorkerRequestService
from .models import (
    EnrichedRequest,
    JoinShiftRequest,
    ReviewRequestBody,
    SwitchResponseBody,
    SwitchShiftRequest,
    WorkerHourRequest,
)

router = APIRouter()


@router.post("/join", response_model=WorkerHourRequest, status_code=201)
async def request_join_shift(
    request: JoinShiftRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> WorkerHourRequest:
    """Ask to join a shift for a range of hours."""
    return await service.request_join_shift(
        identity,
        shift_template_id=request.shift_template_id,
        date=request.date,
        requested_hours=request.requested_hours,
        reason=request.reason,
        priority=request.priority,
    )


@router.post("/switch", response_model=WorkerHourRequest, status_code=201)
async def request_switch(
    request: SwitchShiftRequest,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> WorkerHourRequest:
    """Ask a colleague to switch a shift."""
    return await service.request_switch(
        identity,
        shift_template_id=request.shift_template_id,
        date=request.date,
        target_worker_id=request.target_worker_id,
        target_assignment_id=request.target_assignment_id,
        requested_hours=request.requested_hours,
        reason=request.reason,
        priority=request.priority,
    )


@router.get("/review", response_model=list[EnrichedRequest])
async def get_requests_for_review(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> list[EnrichedRequest]:
    """Pending requests awaiting a manager."""
    return await service.get_requests_for_review(identity)


@router.get("/mine", response_model=list[EnrichedRequest])
async def get_my_requests(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> list[EnrichedRequest]:
    return await service.get_my_requests(identity)


@router.get("/switch-incoming", response_model=list[EnrichedRequest])
async def get_switch_requests_for_me(
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> list[EnrichedRequest]:
    """Pending switch requests that name the caller as the target."""
    return await service.get_switch_requests_for_me(identity)


@router.post("/{request_id}/approve", response_model=WorkerHourRequest)
async def approve_request(
    request_id: str,
    body: Optional[ReviewRequestBody] = None,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> WorkerHourRequest:
    """
    Approve a pending request.

    Approving a join request creates a confirmed assignment.
    """
    return await service.approve_request(identity, request_id, body.notes if body else None)


@router.post("/{request_id}/reject", response_model=WorkerHourRequest)
async def reject_request(
    request_id: str,
    body: Optional[ReviewRequestBody] = None,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> WorkerHourRequest:
    return await service.reject_request(identity, request_id, body.notes if body else None)


@router.post("/{request_id}/cancel", response_model=WorkerHourRequest)
async def cancel_request(
    request_id: str,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> WorkerHourRequest:
    return await service.cancel_request(identity, request_id)


@router.post("/{request_id}/respond", response_model=WorkerHourRequest)
async def respond_to_switch(
    request_id: str,
    body: SwitchResponseBody,
    identity: AuthenticatedUser = Depends(get_current_user),
    service: IWorkerRequestService = Depends(get_worker_request_service),
) -> WorkerHourRequest:
    """Answer a switch request as its target."""
    return await service.respond_to_switch(identity, request_id, body.approve)
