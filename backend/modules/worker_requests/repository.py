"""
Worker-hour request repositories.

WorkerRequestRepository talks to the Supabase ``worker_hour_requests``
table; requested hours and switch details are JSON columns.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, InMemoryTable, to_column
from modules.shifts.models import HourRange

from .models import (
    RequestPriority,
    RequestStatus,
    RequestType,
    SwitchDetails,
    WorkerHourRequest,
)


class WorkerRequestRepository(BaseRepository[WorkerHourRequest]):
    """Supabase-backed request storage."""

    table_name = "worker_hour_requests"

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
        data = {
            "worker_id": worker_id,
            "shift_template_id": shift_template_id,
            "date": date,
            "request_type": request_type.value,
            "requested_hours": to_column(requested_hours),
            "reason": reason,
            "priority": priority.value,
            "switch_details": to_column(switch_details),
            "status": RequestStatus.PENDING.value,
        }
        result = self._table().insert(data).execute()
        return self._map_to_request(result.data[0])

    def get_by_id(self, request_id: str) -> Optional[WorkerHourRequest]:
        row = self._first(self._table().select("*").eq("id", request_id).execute())
        return self._map_to_request(row) if row else None

    def update(self, request_id: str, changes: dict[str, Any]) -> WorkerHourRequest:
        data = {key: to_column(value) for key, value in changes.items()}
        result = self._table().update(data).eq("id", request_id).execute()
        return self._map_to_request(result.data[0])

    def find_pending(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
    ) -> Optional[WorkerHourRequest]:
        result = (
            self._table()
            .select("*")
            .eq("worker_id", worker_id)
            .eq("shift_template_id", shift_template_id)
            .eq("date", date)
            .eq("status", RequestStatus.PENDING.value)
            .execute()
        )
        row = self._first(result)
        return self._map_to_request(row) if row else None

    def list_by_status(self, status: RequestStatus) -> list[WorkerHourRequest]:
        result = self._table().select("*").eq("status", status.value).order("created_at").execute()
        return [self._map_to_request(row) for row in result.data]

    def list_for_worker(self, worker_id: str) -> list[WorkerHourRequest]:
        result = (
            self._table()
            .select("*")
            .eq("worker_id", worker_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_request(row) for row in result.data]

    def list_pending_switches_for_target(self, target_worker_id: str) -> list[WorkerHourRequest]:
        result = (
            self._table()
            .select("*")
            .eq("request_type", RequestType.SWITCH_REQUEST.value)
            .eq("status", RequestStatus.PENDING.value)
            .eq("switch_details->>target_worker_id", target_worker_id)
            .order("created_at")
            .execute()
        )
        return [self._map_to_request(row) for row in result.data]

    def _map_to_request(self, data: dict[str, Any]) -> WorkerHourRequest:
        """Map database row to WorkerHourRequest model."""
        hours = data.get("requested_hours")
        switch = data.get("switch_details")
        return WorkerHourRequest(
            id=str(data["id"]),
            worker_id=str(data["worker_id"]),
            shift_template_id=str(data["shift_template_id"]),
            date=data["date"],
            request_type=RequestType(data["request_type"]),
            requested_hours=HourRange(**hours) if hours else None,
            reason=data.get("reason"),
            priority=RequestPriority(data.get("priority") or RequestPriority.NORMAL.value),
            switch_details=SwitchDetails(**switch) if switch else None,
            status=RequestStatus(data["status"]),
            reviewed_by=str(data["reviewed_by"]) if data.get("reviewed_by") else None,
            reviewed_at=data.get("reviewed_at"),
            review_notes=data.get("review_notes"),
            created_assignment_id=(
                str(data["created_assignment_id"]) if data.get("created_assignment_id") else None
            ),
            created_at=data["created_at"],
        )


class InMemoryWorkerRequestRepository:
    """Request storage held in process memory."""

    def __init__(self, table: Optional[InMemoryTable] = None) -> None:
        self._rows = table or InMemoryTable()

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
        row = self._rows.insert({
            "worker_id": worker_id,
            "shift_template_id": shift_template_id,
            "date": date,
            "request_type": request_type,
            "requested_hours": requested_hours.model_dump() if requested_hours else None,
            "reason": reason,
            "priority": priority,
            "switch_details": switch_details.model_dump() if switch_details else None,
            "status": RequestStatus.PENDING,
        })
        return WorkerHourRequest(**row)

    def get_by_id(self, request_id: str) -> Optional[WorkerHourRequest]:
        row = self._rows.get(request_id)
        return WorkerHourRequest(**row) if row else None

    def update(self, request_id: str, changes: dict[str, Any]) -> WorkerHourRequest:
        data = {
            key: value.model_dump() if isinstance(value, SwitchDetails) else value
            for key, value in changes.items()
        }
        return WorkerHourRequest(**self._rows.update(request_id, data))

    def find_pending(
        self,
        worker_id: str,
        shift_template_id: str,
        date: str,
    ) -> Optional[WorkerHourRequest]:
        row = self._rows.find_one(
            worker_id=worker_id,
            shift_template_id=shift_template_id,
            date=date,
            status=RequestStatus.PENDING,
        )
        return WorkerHourRequest(**row) if row else None

    def list_by_status(self, status: RequestStatus) -> list[WorkerHourRequest]:
        return [WorkerHourRequest(**row) for row in self._rows.find(status=status)]

    def list_for_worker(self, worker_id: str) -> list[WorkerHourRequest]:
        rows = self._rows.find(newest_first=True, worker_id=worker_id)
        return [WorkerHourRequest(**row) for row in rows]

    def list_pending_switches_for_target(self, target_worker_id: str) -> list[WorkerHourRequest]:
        def targets_worker(row: dict[str, Any]) -> bool:
            details = row.get("switch_details")
            return bool(details) and details["target_worker_id"] == target_worker_id

        rows = self._rows.find(
            targets_worker,
            request_type=RequestType.SWITCH_REQUEST,
            status=RequestStatus.PENDING,
        )
        return [WorkerHourRequest(**row) for row in rows]
