"""
Worker requests module interfaces.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.shifts.models import HourRange

from .models import (
    EnrichedRequest,
    RequestPriority,
    RequestStatus,
    RequestType,
    SwitchDetails,
    WorkerHourRequest,
)


@runtime_checkable
class IWorkerRequestRepository(Protocol):
    """Storage contract for worker-hour requests."""

    def create(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
        request_type: RequestType,
        requested_hours: Optional[HourRange] = None,
        reason: Optional[str] = None,
        priority: RequestPriority = RequestPriority.NORMAL,
        switch_details: Optional[SwitchDetails] = None,
    ) -> WorkerHourRequest:
        """Insert a pending request."""
        ...

    def get_by_id(self, request_id: str) -> Optional[WorkerHourRequest]:
        ...

    def update(self, request_id: str, changes: dict[str, Any]) -> WorkerHourRequest:
        ...

    def find_pending(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
    ) -> Optional[WorkerHourRequest]:
        ...

    def list_by_status(self, status: RequestStatus) -> list[WorkerHourRequest]:
        ...

    def list_for_worker(self, worker_id: str) -> list[WorkerHourRequest]:
        ...

    def list_pending_switches_for_target(self, target_worker_id: str) -> list[WorkerHourRequest]:
        ...


@runtime_checkable
class IWorkerRequestService(Protocol):
    """
    Interface for the worker-hour request workflow.
    """

    async def request_join_shift(
        self,
        identity: Optional[AuthenticatedUser],
        shift_template_id: str,
        date: str,
        requested_hours: HourRange,
        reason: Optional[str] = None,
        priority: RequestPriority = RequestPriority.NORMAL,
    ) -> WorkerHourRequest:
        ...

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
        ...

    async def respond_to_switch(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
        approve: bool,
    ) -> WorkerHourRequest:
        """
        Record the switch target's answer.

        A denial ends the request; an approval leaves it pending for a manager.
        """
        ...

    async def approve_request(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
        notes: Optional[str] = None,
    ) -> WorkerHourRequest:
        """
        Approve a pending request.

        A join request with hours creates one confirmed assignment and
        links it through ``created_assignment_id``.
        """
        ...

    async def reject_request(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
        notes: Optional[str] = None,
    ) -> WorkerHourRequest:
        ...

    async def cancel_request(
        self,
        identity: Optional[AuthenticatedUser],
        request_id: str,
    ) -> WorkerHourRequest:
        ...

    async def get_requests_for_review(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedRequest]:
        ...

    async def get_my_requests(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedRequest]:
        ...

    async def get_switch_requests_for_me(
        self,
        identity: Optional[AuthenticatedUser],
    ) -> list[EnrichedRequest]:
        ...
