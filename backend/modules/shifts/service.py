"""
Shift template service implementation.
"""

import logging
from typing import Optional

from shared.models import AuthenticatedUser
from shared.repository import utc_now
from modules.users.interfaces import IUserService
from modules.users.models import User
from modules.users.permissions import Action, require_permission
from modules.assignments.interfaces import IAssignmentRepository
from modules.assignments.models import AssignmentStatus, ShiftAssignment

from .exceptions import ShiftTemplateNotFoundError
from .hours import (
    clamp_ranges,
    covers,
    from_minutes,
    hour_slots,
    validate_requirements,
    validate_window,
    weekday_for,
)
from .interfaces import IShiftTemplateRepository, IShiftTemplateService
from .models import (
    CreateShiftTemplateRequest,
    DeleteTemplateResponse,
    HourRange,
    HourStaffing,
    ShiftTemplate,
    StaffingReport,
    StaffingRequirement,
    StaffingStatus,
    UpdateShiftTemplateRequest,
)

logger = logging.getLogger(__name__)

# Template fields an update may explicitly clear
NULLABLE_FIELDS = frozenset({"description", "color"})


def classify(assigned: int, requirement: Optional[StaffingRequirement]) -> StaffingStatus:
    """Classify a head count against the requirement for its hour."""
    if requirement is None:
        return StaffingStatus.UNCOVERED
    if assigned < requirement.min_workers:
        return StaffingStatus.UNDERSTAFFED
    if assigned < requirement.optimal_workers:
        return StaffingStatus.STAFFED
    if assigned == requirement.optimal_workers:
        return StaffingStatus.OPTIMAL
    return StaffingStatus.OVERSTAFFED


class ShiftTemplateService(IShiftTemplateService):
    """
    Shift template management.

    Reads only need a known caller; every write needs ``manage_shifts``.
    """

    def __init__(
        self,
        repository: IShiftTemplateRepository,
        assignments: IAssignmentRepository,
        users: IUserService,
    ):
        self._repo = repository
        self._assignments = assignments
        self._users = users

    async def list_templates(self, identity: Optional[AuthenticatedUser]) -> list[ShiftTemplate]:
        await self._users.require_user(identity)
        return self._repo.list_active()

    async def get_template(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
    ) -> ShiftTemplate:
        await self._users.require_user(identity)
        return self._get_or_raise(template_id)

    async def templates_for_date(
        self,
        identity: Optional[AuthenticatedUser],
        date: str,
    ) -> list[ShiftTemplate]:
        await self._users.require_user(identity)
        weekday = weekday_for(date)
        return [t for t in self._repo.list_active() if weekday in t.recurring_days]

    async def create_template(
        self,
        identity: Optional[AuthenticatedUser],
        request: CreateShiftTemplateRequest,
    ) -> ShiftTemplate:
        manager = await self._require_shift_manager(identity)
        validate_window(request.open_time, request.close_time)
        validate_requirements(request.hourly_requirements, request.open_time, request.close_time)

        template = self._repo.create(manager.id, request)
        logger.info(f"Shift template {template.id} ({template.name}) created by {manager.id}")
        return template

    async def update_template(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
        request: UpdateShiftTemplateRequest,
    ) -> ShiftTemplate:
        manager = await self._require_shift_manager(identity)
        existing = self._get_or_raise(template_id)

        changes = {
            field: getattr(request, field)
            for field in request.model_fields_set
            if getattr(request, field) is not None or field in NULLABLE_FIELDS
        }
        open_time = changes.get("open_time") or existing.open_time
        close_time = changes.get("close_time") or existing.close_time
        window_changed = (open_time, close_time) != (existing.open_time, existing.close_time)

        if window_changed or "hourly_requirements" in changes:
            validate_window(open_time, close_time)
            requirements = changes.get("hourly_requirements", existing.hourly_requirements)
            validate_requirements(requirements, open_time, close_time)

        changes["updated_at"] = utc_now()
        updated = self._repo.update(template_id, changes)
        logger.info(f"Shift template {template_id} updated by {manager.id}")

        if window_changed:
            self._fit_assignments_to_window(updated)
        return updated

    async def delete_template(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
    ) -> DeleteTemplateResponse:
        manager = await self._require_shift_manager(identity)
        self._get_or_raise(template_id)

        if self._assignments.list_for_template(template_id, include_rejected=True):
            self._repo.update(template_id, {"is_active": False, "updated_at": utc_now()})
            logger.info(f"Shift template {template_id} deactivated by {manager.id}")
            return DeleteTemplateResponse(deleted=False, deactivated=True)

        self._repo.delete(template_id)
        logger.info(f"Shift template {template_id} deleted by {manager.id}")
        return DeleteTemplateResponse(deleted=True, deactivated=False)

    async def staffing_status(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
        date: str,
    ) -> StaffingReport:
        """
        Count workers per hour of the shift window and classify each hour.

        Rejected assignments don't count; pending ones do.
        """
        await self._users.require_user(identity)
        weekday_for(date)
        template = self._get_or_raise(template_id)
        assignments = self._assignments.list_for_template(template_id, date=date)

        hours = []
        for minute in hour_slots(template.window):
            assigned = sum(
                1 for a in assignments
                if any(covers(h, minute) for h in a.assigned_hours)
            )
            requirement = next(
                (r for r in template.hourly_requirements if covers(r, minute)),
                None,
            )
            hours.append(HourStaffing(
                hour=from_minutes(minute),
                assigned_workers=assigned,
                min_workers=requirement.min_workers if requirement else None,
                optimal_workers=requirement.optimal_workers if requirement else None,
                status=classify(assigned, requirement),
            ))

        return StaffingReport(shift_template_id=template_id, date=date, hours=hours)

    def _fit_assignments_to_window(self, template: ShiftTemplate) -> None:
        """
        Clip every live assignment of the template to its new window.

        An assignment with nothing left is rejected. One that lost a whole
        range needs the worker's approval again.
        """
        window = template.window
        for assignment in self._assignments.list_for_template(template.id):
            adjusted = clamp_ranges(assignment.assigned_hours, window)
            if adjusted == assignment.assigned_hours:
                continue

            changes = self._adjustment_changes(assignment, adjusted)
            self._assignments.update(assignment.id, changes)
            logger.info(
                f"Assignment {assignment.id} adjusted to shift hours "
                f"{window.start_time}-{window.end_time}: {changes['status'].value}"
            )

    @staticmethod
    def _adjustment_changes(
        assignment: ShiftAssignment,
        adjusted: list[HourRange],
    ) -> dict:
        changes: dict = {"assigned_hours": adjusted, "status": assignment.status}
        if not adjusted:
            changes["status"] = AssignmentStatus.REJECTED
        elif len(adjusted) != len(assignment.assigned_hours):
            changes["status"] = AssignmentStatus.PENDING_WORKER_APPROVAL
            changes["worker_approved_at"] = None
            changes["manager_approved_at"] = assignment.manager_approved_at or utc_now()
        return changes

    def _get_or_raise(self, template_id: str) -> ShiftTemplate:
        template = self._repo.get_by_id(template_id)
        if template is None:
            raise ShiftTemplateNotFoundError(template_id)
        return template

    async def _require_shift_manager(self, identity: Optional[AuthenticatedUser]) -> User:
        user = await self._users.require_user(identity)
        require_permission(user, Action.MANAGE_SHIFTS)
        return user
