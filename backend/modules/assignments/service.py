"""
Assignment service implementation.

Every status change goes through ``transitions.next_status``; a refused
transition raises before anything is written.
"""

import logging
from typing import Any, Optional

from shared.models import AuthenticatedUser, TemplateSummary
from shared.repository import utc_now
from modules.users.interfaces import IUserService
from modules.users.models import User, summarize_user
from modules.users.permissions import Action, require_permission, user_has_permission
from modules.users.exceptions import UserNotFoundError
from modules.shifts.exceptions import InactiveShiftTemplateError, ShiftTemplateNotFoundError
from modules.shifts.hours import validate_date, validate_ranges
from modules.shifts.interfaces import IShiftTemplateRepository
from modules.shifts.models import HourRange, ShiftTemplate

from .exceptions import (
    AssignmentNotFoundError,
    DuplicateAssignmentError,
    NotAssignedWorkerError,
    WorkerNotEligibleError,
)
from .interfaces import IAssignmentRepository, IAssignmentService
from .models import AssignmentStatus, EnrichedAssignment, ShiftAssignment
from .transitions import AssignmentEvent, next_status

logger = logging.getLogger(__name__)


class AssignmentService(IAssignmentService):
    """
    Shift assignment lifecycle.

    Managers are callers holding ``assign_workers``; workers are callers
    holding ``self_assign_shifts``.
    """

    def __init__(
        self,
        repository: IAssignmentRepository,
        templates: IShiftTemplateRepository,
        users: IUserService,
    ):
        self._repo = repository
        self._templates = templates
        self._users = users

    async def create_assignment(
        self,
        identity: Optional[AuthenticatedUser],
        worker_id: str,
        shift_template_id: str,
        date: str,
        assigned_hours: list[HourRange],
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        manager = await self._users.require_user(identity)
        require_permission(manager, Action.ASSIGN_WORKERS)

        worker = await self._users.get_user(worker_id)
        if worker is None:
            raise UserNotFoundError(worker_id)
        if not user_has_permission(worker, Action.SELF_ASSIGN_SHIFTS):
            raise WorkerNotEligibleError(worker_id)

        self._get_active_template(shift_template_id)
        validate_date(date)
        validate_ranges(assigned_hours)
        self._ensure_no_active_assignment(shift_template_id, worker_id, date)

        now = utc_now()
        self_assignment = manager.id == worker.id
        assignment = self._repo.create(
            shift_template_id=shift_template_id,
            worker_id=worker_id,
            date=date,
            assigned_hours=assigned_hours,
            assigned_by=manager.id,
            status=(
                AssignmentStatus.CONFIRMED if self_assignment
                else AssignmentStatus.PENDING_WORKER_APPROVAL
            ),
            manager_approved_at=now,
            worker_approved_at=now if self_assignment else None,
            notes=notes,
        )
        logger.info(
            f"Assignment {assignment.id} created by {manager.id} for worker {worker_id} "
            f"on {date}: {assignment.status.value}"
        )
        return assignment

    async def request_assignment(
        self,
        identity: Optional[AuthenticatedUser],
        shift_template_id: str,
        date: str,
        assigned_hours: Optional[list[HourRange]] = None,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        worker = await self._users.require_user(identity)
        require_permission(worker, Action.SELF_ASSIGN_SHIFTS)

        template = self._get_active_template(shift_template_id)
        validate_date(date)
        hours = assigned_hours or [template.window]
        validate_ranges(hours, template.window)
        self._ensure_no_active_assignment(shift_template_id, worker.id, date)

        now = utc_now()
        is_manager = user_has_permission(worker, Action.ASSIGN_WORKERS)
        assignment = self._repo.create(
            shift_template_id=shift_template_id,
            worker_id=worker.id,
            date=date,
            assigned_hours=hours,
            assigned_by=worker.id,
            status=(
                AssignmentStatus.CONFIRMED if is_manager
                else AssignmentStatus.PENDING_MANAGER_APPROVAL
            ),
            manager_approved_at=now if is_manager else None,
            worker_approved_at=now,
            notes=notes,
        )
        logger.info(
            f"Assignment {assignment.id} requested by worker {worker.id} "
            f"on {date}: {assignment.status.value}"
        )
        return assignment

    async def worker_approve(
        self,
        identity: Optional[AuthenticatedUser],
        assignment_id: str,
    ) -> ShiftAssignment:
        user = await self._users.require_user(identity)
        assignment = self._get_or_raise(assignment_id)
        if assignment.worker_id != user.id:
            raise NotAssignedWorkerError(assignment_id, user.id)

        return self._apply(
            assignment,
            AssignmentEvent.WORKER_APPROVE,
            {"worker_approved_at": utc_now()},
            user,
        )

    async def manager_approve(
        self,
        identity: Optional[AuthenticatedUser],
        assignment_id: str,
    ) -> ShiftAssignment:
        user = await self._users.require_user(identity)
        require_permission(user, Action.ASSIGN_WORKERS)
        assignment = self._get_or_raise(assignment_id)

        return self._apply(
            assignment,
            AssignmentEvent.MANAGER_APPROVE,
            {"manager_approved_at": utc_now()},
            user,
        )

    async def reject(
        self,
        identity: Optional[AuthenticatedUser],
        assignment_id: str,
        reason: Optional[str] = None,
    ) -> ShiftAssignment:
        """
        Reject a pending assignment.

        Either the assigned worker or a manager may reject. The reason, if
        given, is appended to the notes.
        """
        user = await self._users.require_user(identity)
        assignment = self._get_or_raise(assignment_id)
        if assignment.worker_id != user.id:
            require_permission(user, Action.ASSIGN_WORKERS)

        changes: dict[str, Any] = {}
        if reason:
            changes["notes"] = f"{assignment.notes or ''}\nRejected: {reason}"
        return self._apply(assignment, AssignmentEvent.REJECT, changes, user)

    async def create_confirmed_from_request(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
        assigned_hours: list[HourRange],
        approved_by: str,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        now = utc_now()
        assignment = self._repo.create(
            shift_template_id=shift_template_id,
            worker_id=worker_id,
            date=date,
            assigned_hours=assigned_hours,
            assigned_by=approved_by,
            status=AssignmentStatus.CONFIRMED,
            manager_approved_at=now,
            worker_approved_at=now,
            notes=notes,
        )
        logger.info(f"Assignment {assignment.id} confirmed from approved request by {approved_by}")
        return assignment

    async def discard_assignment(self, assignment_id: str) -> None:
        self._repo.delete(assignment_id)
        logger.warning(f"Discarded assignment {assignment_id}")

    async def find_active(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
    ) -> Optional[ShiftAssignment]:
        return self._repo.find_active(shift_template_id, worker_id, date)

    async def get_assignments_for_date(
        self,
        identity: Optional[AuthenticatedUser],
        date: str,
    ) -> list[EnrichedAssignment]:
        await self._users.require_user(identity)
        validate_date(date)
        return await self._enrich(self._repo.list_for_date(date))

    async def get_assignments_for_worker(
        self,
        identity: Optional[AuthenticatedUser],
        worker_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[EnrichedAssignment]:
        await self._users.require_user(identity)
        assignments = self._repo.list_for_worker(worker_id, start_date, end_date)
        return await self._enrich(assignments)

    async def get_pending_assignments(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedAssignment]:
        """
        Pending assignments visible to the caller.

        Managers see everything pending; workers see what awaits their own
        approval; everyone else gets nothing.
        """
        user = await self._users.require_user(identity)

        if user_has_permission(user, Action.ASSIGN_WORKERS):
            assignments = self._repo.list_by_status([
                AssignmentStatus.PENDING_WORKER_APPROVAL,
                AssignmentStatus.PENDING_MANAGER_APPROVAL,
            ])
        elif user_has_permission(user, Action.SELF_ASSIGN_SHIFTS):
            assignments = self._repo.list_by_status(
                [AssignmentStatus.PENDING_WORKER_APPROVAL],
                worker_id=user.id,
            )
        else:
            return []

        return await self._enrich(assignments)

    def _apply(
        self,
        assignment: ShiftAssignment,
        event: AssignmentEvent,
        changes: dict[str, Any],
        actor: User,
    ) -> ShiftAssignment:
        status = next_status(assignment.status, event)
        updated = self._repo.update(assignment.id, {**changes, "status": status})
        logger.info(
            f"Assignment {assignment.id} {event.value} by {actor.id}: "
            f"{assignment.status.value} -> {status.value}"
        )
        return updated

    def _get_or_raise(self, assignment_id: str) -> ShiftAssignment:
        assignment = self._repo.get_by_id(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)
        return assignment

    def _get_active_template(self, template_id: str) -> ShiftTemplate:
        template = self._templates.get_by_id(template_id)
        if template is None:
            raise ShiftTemplateNotFoundError(template_id)
        if not template.is_active:
            raise InactiveShiftTemplateError(template_id)
        return template

    def _ensure_no_active_assignment(self, template_id: str, worker_id: str, date: str) -> None:
        if self._repo.find_active(template_id, worker_id, date) is not None:
            raise DuplicateAssignmentError(worker_id, template_id, date)

    async def _enrich(self, assignments: list[ShiftAssignment]) -> list[EnrichedAssignment]:
        user_ids = {a.worker_id for a in assignments} | {a.assigned_by for a in assignments}
        users = await self._users.get_users(user_ids)
        templates = self._templates.get_many({a.shift_template_id for a in assignments})

        enriched = []
        for assignment in assignments:
            template = templates.get(assignment.shift_template_id)
            if template is None:
                logger.warning(
                    f"Assignment {assignment.id} references missing shift template "
                    f"{assignment.shift_template_id}"
                )
            enriched.append(EnrichedAssignment(
                **assignment.model_dump(),
                worker=summarize_user(users.get(assignment.worker_id)),
                shift=(
                    TemplateSummary(id=template.id, name=template.name, type=template.type.value)
                    if template else None
                ),
                assigned_by_user=summarize_user(users.get(assignment.assigned_by)),
            ))
        return enriched
