"""
Worker-hour request service implementation.

Requests start ``pending`` and end ``approved``, ``rejected`` or
``cancelled``. Approving a join request with hours is the only path that
creates an assignment, and it does so through the assignment service.
"""

import logging
from typing import Any, Optional

from shared.models import AuthenticatedUser, TemplateSummary
from shared.repository import utc_now
from modules.users.interfaces import IUserService
from modules.users.models import User, summarize_user
from modules.users.permissions import Action, require_permission
from modules.users.exceptions import UserNotFoundError
from modules.shifts.exceptions import InactiveShiftTemplateError, ShiftTemplateNotFoundError
from modules.shifts.hours import validate_date, validate_ranges
from modules.shifts.interfaces import IShiftTemplateRepository
from modules.shifts.models import HourRange
from modules.assignments.exceptions import DuplicateAssignmentError
from modules.assignments.interfaces import IAssignmentService

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

logger = logging.getLogger(__name__)


class WorkerRequestService(IWorkerRequestService):
    """Join and switch requests and their review by managers."""

    def __init__(
        self,
        repository: IWorkerRequestRepository,
        assignments: IAssignmentService,
        templates: IShiftTemplateRepository,
        users: IUserService,
    ):
        self._repo = repository
        self._assignments = assignments
        self._templates = templates
        self._users = users

    async def request_join_shift(
        self,
        identity: Optional[AuthenticatedUser],
        shift_template_id: str,
        date: str,
        requested_hours: HourRange,
        reason: Optional[str] = None,
        priority: RequestPriority = RequestPriority.NORMAL,
    ) -> WorkerHourRequest:
        worker = await self._users.require_user(identity)
        require_permission(worker, Action.SELF_ASSIGN_SHIFTS)
        self._require_active_template(shift_template_id)
        validate_date(date)

        if await self._assignments.find_active(worker.id, shift_template_id, date) is not None:
            raise DuplicateAssignmentError(worker.id, shift_template_id, date)
        if self._repo.find_pending(worker.id, shift_template_id, date) is not None:
            raise DuplicateRequestError(worker.id, shift_template_id, date)
        validate_ranges([requested_hours])

        request = self._repo.create(
            worker_id=worker.id,
            shift_template_id=shift_template_id,
            date=date,
            request_type=RequestType.JOIN_SHIFT,
            requested_hours=requested_hours,
            reason=reason,
            priority=priority,
        )
        logger.info(f"Join request {request.id} by worker {worker.id} for {date}")
        return request

    async def request_switch(
        self,
        identity: Optional[AuthenticatedUser],
        shift_template_id: str,
        date: str,
        target_worker_id: str,
        target_assignment_id: Optional[str] = None,
        requested_hours: Optional[HourRange] = None,
        reason: Optional[str] = None,
        priority: RequestPriority = RequestPriority.NORMAL,
    ) -> WorkerHourRequest:
        worker = await self._users.require_user(identity)
        require_permission(worker, Action.REQUEST_SHIFT_SWAPS)
        self._require_active_template(shift_template_id)
        validate_date(date)

        if target_worker_id == worker.id:
            raise InvalidSwitchTargetError("You cannot switch shifts with yourself")
        if await self._users.get_user(target_worker_id) is None:
            raise UserNotFoundError(target_worker_id)
        if requested_hours is not None:
            validate_ranges([requested_hours])

        request = self._repo.create(
            worker_id=worker.id,
            shift_template_id=shift_template_id,
            date=date,
            request_type=RequestType.SWITCH_REQUEST,
            requested_hours=requested_hours,
            reason=reason,
            priority=priority,
            switch_details=SwitchDetails(
                target_worker_id=target_worker_id,
                target_assignment_id=target_assignment_id,
            ),
        )
        logger.info(
            f"Switch request {request.id} by worker {worker.id} "
            f"with {target_worker_id} for {date}"
        )
        return request

    async def respond_to_switch(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
        approve: bool,
    ) -> WorkerHourRequest:
        user = await self._users.require_user(identity)
        request = self._get_or_raise(request_id)

        if request.request_type != RequestType.SWITCH_REQUEST or request.switch_details is None:
            raise NotSwitchRequestError(request_id)
        if request.switch_details.target_worker_id != user.id:
            raise NotSwitchTargetError(request_id)
        self._require_pending(request)
        if request.switch_details.target_worker_response is not None:
            raise SwitchAlreadyAnsweredError(request_id)

        response = TargetResponse.APPROVED if approve else TargetResponse.DENIED
        changes: dict[str, Any] = {
            "switch_details": request.switch_details.model_copy(
                update={"target_worker_response": response}
            ),
        }
        if response == TargetResponse.DENIED:
            changes["status"] = RequestStatus.REJECTED

        updated = self._repo.update(request_id, changes)
        logger.info(f"Switch request {request_id} {response.value} by target {user.id}")
        return updated

    async def approve_request(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
        notes: Optional[str] = None,
    ) -> WorkerHourRequest:
        manager = await self._users.require_user(identity)
        require_permission(manager, Action.APPROVE_REQUESTS)
        request = self._get_or_raise(request_id)
        self._require_pending(request)

        created_assignment_id = None
        if request.request_type == RequestType.JOIN_SHIFT and request.requested_hours:
            existing = await self._assignments.find_active(
                request.worker_id, request.shift_template_id, request.date
            )
            if existing is not None:
                raise DuplicateAssignmentError(
                    request.worker_id, request.shift_template_id, request.date
                )

            assignment = await self._assignments.create_confirmed_from_request(
                worker_id=request.worker_id,
                shift_template_id=request.shift_template_id,
                date=request.date,
                assigned_hours=[request.requested_hours],
                approved_by=manager.id,
                notes=f"Approved join request: {request.reason or 'No reason provided'}",
            )
            created_assignment_id = assignment.id

        try:
            updated = self._review(
                request, RequestStatus.APPROVED, manager, notes, created_assignment_id
            )
        except Exception:
            # The request stays pending, so the assignment must not outlive it.
            if created_assignment_id:
                await self._assignments.discard_assignment(created_assignment_id)
            raise

        logger.info(
            f"Request {request_id} approved by {manager.id}"
            + (f", created assignment {created_assignment_id}" if created_assignment_id else "")
        )
        return updated

    async def reject_request(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
        notes: Optional[str] = None,
    ) -> WorkerHourRequest:
        manager = await self._users.require_user(identity)
        require_permission(manager, Action.APPROVE_REQUESTS)
        request = self._get_or_raise(request_id)
        self._require_pending(request)

        updated = self._review(request, RequestStatus.REJECTED, manager, notes)
        logger.info(f"Request {request_id} rejected by {manager.id}")
        return updated

    async def cancel_request(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
    ) -> WorkerHourRequest:
        user = await self._users.require_user(identity)
        request = self._get_or_raise(request_id)
        if request.worker_id != user.id:
            raise NotRequestOwnerError(request_id)
        self._require_pending(request)

        updated = self._repo.update(request_id, {"status": RequestStatus.CANCELLED})
        logger.info(f"Request {request_id} cancelled by {user.id}")
        return updated

    async def get_requests_for_review(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedRequest]:
        manager = await self._users.require_user(identity)
        require_permission(manager, Action.APPROVE_REQUESTS)
        return await self._enrich(self._repo.list_by_status(RequestStatus.PENDING))

    async def get_my_requests(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedRequest]:
        worker = await self._users.require_user(identity)
        require_permission(worker, Action.SELF_ASSIGN_SHIFTS)
        return await self._enrich(self._repo.list_for_worker(worker.id))

    async def get_switch_requests_for_me(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedRequest]:
        worker = await self._users.require_user(identity)
        require_permission(worker, Action.SELF_ASSIGN_SHIFTS)
        return await self._enrich(self._repo.list_pending_switches_for_target(worker.id))

    def _review(
        self,
        request: WorkerHourRequest,
        status: RequestStatus,
        manager: User,
        notes: Optional[str],
        created_assignment_id: Optional[str] = None,
    ) -> WorkerHourRequest:
        return self._repo.update(request.id, {
            "status": status,
            "reviewed_by": manager.id,
            "reviewed_at": utc_now(),
            "review_notes": notes,
            "created_assignment_id": created_assignment_id,
        })

    def _get_or_raise(self, request_id: str) -> WorkerHourRequest:
        request = self._repo.get_by_id(request_id)
        if request is None:
            raise RequestNotFoundError(request_id)
        return request

    @staticmethod
    def _require_pending(request: WorkerHourRequest) -> None:
        if request.status != RequestStatus.PENDING:
            raise RequestNotPendingError(request.id, request.status.value)

    def _require_active_template(self, template_id: str) -> None:
        template = self._templates.get_by_id(template_id)
        if template is None:
            raise ShiftTemplateNotFoundError(template_id)
        if not template.is_active:
            raise InactiveShiftTemplateError(template_id)

    async def _enrich(self, requests: list[WorkerHourRequest]) -> list[EnrichedRequest]:
        user_ids = {r.worker_id for r in requests}
        user_ids |= {r.reviewed_by for r in requests if r.reviewed_by}
        user_ids |= {r.switch_details.target_worker_id for r in requests if r.switch_details}
        users = await self._users.get_users(user_ids)
        templates = self._templates.get_many({r.shift_template_id for r in requests})

        enriched = []
        for request in requests:
            template = templates.get(request.shift_template_id)
            if template is None:
                logger.warning(
                    f"Request {request.id} references missing shift template "
                    f"{request.shift_template_id}"
                )
            target_id = request.switch_details.target_worker_id if request.switch_details else None
            enriched.append(EnrichedRequest(
                **request.model_dump(),
                worker=summarize_user(users.get(request.worker_id)),
                shift=(
                    TemplateSummary(id=template.id, name=template.name, type=template.type.value)
                    if template else None
                ),
                target_worker=summarize_user(users.get(target_id)) if target_id else None,
                reviewed_by_user=(
                    summarize_user(users.get(request.reviewed_by)) if request.reviewed_by else None
                ),
            ))
        return enriched
