"""
Assignments module interfaces.
"""

from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.shifts.models import HourRange

from .models import AssignmentStatus, EnrichedAssignment, ShiftAssignment


@runtime_checkable
class IAssignmentRepository(Protocol):
    """Storage contract for shift assignments."""

    def create(
        self,
        shift_template_id: str,
        worker_id: str,
        date: str,
        assigned_hours: list[HourRange],
        assigned_by: str,
        status: AssignmentStatus,
        manager_approved_at: Optional[datetime] = None,
        worker_approved_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        ...

    def get_by_id(self, assignment_id: str) -> Optional[ShiftAssignment]:
        ...

    def update(self, assignment_id: str, changes: dict[str, Any]) -> ShiftAssignment:
        """Apply field changes expressed in model terms and return the new record."""
        ...

    def delete(self, assignment_id: str) -> None:
        ...

    def find_active(
        self,
        shift_template_id: str,
        worker_id: str,
        date: str,
    ) -> Optional[ShiftAssignment]:
        """The non-rejected assignment for (template, worker, date), if any."""
        ...

    def list_for_template(
        self,
        shift_template_id: str,
        date: Optional[str] = None,
        include_rejected: bool = False,
    ) -> list[ShiftAssignment]:
        ...

    def list_for_date(self, date: str) -> list[ShiftAssignment]:
        """Non-rejected assignments on a date."""
        ...

    def list_for_worker(
        self,
        worker_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[ShiftAssignment]:
        """Non-rejected assignments of a worker, optionally within a date range."""
        ...

    def list_by_status(
        self,
        statuses: list[AssignmentStatus],
        worker_id: Optional[str] = None,
    ) -> list[ShiftAssignment]:
        ...


@runtime_checkable
class IAssignmentService(Protocol):
    """
    Interface for the assignment lifecycle.
    """

    async def create_assignment(
        self,
        identity: Optional[AuthenticatedUser],
        worker_id: str,
        shift_template_id: str,
        date: str,
        assigned_hours: list[HourRange],
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        """
        Manager puts a worker on a shift, pending the worker's approval.

        A manager assigning themselves is confirmed immediately.
        """
        ...

    async def request_assignment(
        self,
        identity: Optional[AuthenticatedUser],
        shift_template_id: str,
        date: str,
        assigned_hours: Optional[list[HourRange]] = None,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        """
        Worker asks to be put on a shift, pending a manager's approval.
        """
        ...

    async def worker_approve(
        self,
        identity: Optional[AuthenticatedUser],
        assignment_id: str,
    ) -> ShiftAssignment:
        ...

    async def manager_approve(
        self,
        identity: Optional[AuthenticatedUser],
        assignment_id: str,
    ) -> ShiftAssignment:
        ...

    async def reject(
        self,
        identity: Optional[AuthenticatedUser],
        assignment_id: str,
        reason: Optional[str] = None,
    ) -> ShiftAssignment:
        ...

    async def create_confirmed_from_request(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
        assigned_hours: list[HourRange],
        approved_by: str,
        notes: Optional[str] = None,
    ) -> ShiftAssignment:
        """
        Create an already confirmed assignment on behalf of an approved request.

        Callers have already checked authorization and duplicates.
        """
        ...

    async def discard_assignment(self, assignment_id: str) -> None:
        """Remove an assignment whose originating request could not be recorded."""
        ...

    async def find_active(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
    ) -> Optional[ShiftAssignment]:
        ...

    async def get_assignments_for_date(
        self,
        identity: Optional[AuthenticatedUser],
        date: str,
    ) -> list[EnrichedAssignment]:
        ...

    async def get_assignments_for_worker(
        self,
        identity: Optional[AuthenticatedUser],
        worker_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[EnrichedAssignment]:
        ...

    async def get_pending_assignments(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedAssignment]:
        ...
