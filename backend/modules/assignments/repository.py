"""
Shift assignment repositories.

AssignmentRepository talks to the Supabase ``shift_assignments`` table;
hour ranges are stored as a JSON array. InMemoryAssignmentRepository keeps
the same records in process memory.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository, InMemoryTable, to_column, utc_now
from modules.shifts.models import HourRange

from .models import AssignmentStatus, ShiftAssignment


class AssignmentRepository(BaseRepository[ShiftAssignment]):
    """Supabase-backed assignment storage."""

    table_name = "shift_assignments"

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
        data = {
            "shift_template_id": shift_template_id,
            "worker_id": worker_id,
            "date": date,
            "assigned_hours": to_column(assigned_hours),
            "assigned_by": assigned_by,
            "status": status.value,
            "manager_approved_at": to_column(manager_approved_at),
            "worker_approved_at": to_column(worker_approved_at),
            "notes": notes,
        }
        result = self._table().insert(data).execute()
        return self._map_to_assignment(result.data[0])

    def get_by_id(self, assignment_id: str) -> Optional[ShiftAssignment]:
        row = self._first(self._table().select("*").eq("id", assignment_id).execute())
        return self._map_to_assignment(row) if row else None

    def update(self, assignment_id: str, changes: dict[str, Any]) -> ShiftAssignment:
        data = {key: to_column(value) for key, value in changes.items()}
        result = self._table().update(data).eq("id", assignment_id).execute()
        return self._map_to_assignment(result.data[0])

    def delete(self, assignment_id: str) -> None:
        self._table().delete().eq("id", assignment_id).execute()

    def find_active(
        self,
        shift_template_id: str,
        worker_id: str,
        date: str,
    ) -> Optional[ShiftAssignment]:
        result = (
            self._table()
            .select("*")
            .eq("shift_template_id", shift_template_id)
            .eq("worker_id", worker_id)
            .eq("date", date)
            .neq("status", AssignmentStatus.REJECTED.value)
            .execute()
        )
        row = self._first(result)
        return self._map_to_assignment(row) if row else None

    def list_for_template(
        self,
        shift_template_id: str,
        date: Optional[str] = None,
        include_rejected: bool = False,
    ) -> list[ShiftAssignment]:
        query = self._table().select("*").eq("shift_template_id", shift_template_id)
        if date is not None:
            query = query.eq("date", date)
        if not include_rejected:
            query = query.neq("status", AssignmentStatus.REJECTED.value)
        result = query.order("created_at").execute()
        return [self._map_to_assignment(row) for row in result.data]

    def list_for_date(self, date: str) -> list[ShiftAssignment]:
        result = (
            self._table()
            .select("*")
            .eq("date", date)
            .neq("status", AssignmentStatus.REJECTED.value)
            .order("created_at")
            .execute()
        )
        return [self._map_to_assignment(row) for row in result.data]

    def list_for_worker(
        self,
        worker_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[ShiftAssignment]:
        query = (
            self._table()
            .select("*")
            .eq("worker_id", worker_id)
            .neq("status", AssignmentStatus.REJECTED.value)
        )
        if start_date is not None:
            query = query.gte("date", start_date)
        if end_date is not None:
            query = query.lte("date", end_date)
        result = query.order("date").execute()
        return [self._map_to_assignment(row) for row in result.data]

    def list_by_status(
        self,
        statuses: list[AssignmentStatus],
        worker_id: Optional[str] = None,
    ) -> list[ShiftAssignment]:
        query = self._table().select("*").in_("status", [s.value for s in statuses])
        if worker_id is not None:
            query = query.eq("worker_id", worker_id)
        result = query.order("created_at").execute()
        return [self._map_to_assignment(row) for row in result.data]

    def _map_to_assignment(self, data: dict[str, Any]) -> ShiftAssignment:
        """Map database row to ShiftAssignment model."""
        return ShiftAssignment(
            id=str(data["id"]),
            shift_template_id=str(data["shift_template_id"]),
            worker_id=str(data["worker_id"]),
            date=data["date"],
            assigned_hours=[HourRange(**h) for h in data.get("assigned_hours") or []],
            assigned_by=str(data["assigned_by"]),
            assigned_at=data.get("assigned_at") or data["created_at"],
            status=AssignmentStatus(data["status"]),
            manager_approved_at=data.get("manager_approved_at"),
            worker_approved_at=data.get("worker_approved_at"),
            notes=data.get("notes"),
            created_at=data["created_at"],
        )


class InMemoryAssignmentRepository:
    """Assignment storage held in process memory."""

    def __init__(self, table: Optional[InMemoryTable] = None) -> None:
        self._rows = table or InMemoryTable()

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
        now = utc_now()
        row = self._rows.insert({
            "shift_template_id": shift_template_id,
            "worker_id": worker_id,
            "date": date,
            "assigned_hours": [h.model_dump() for h in assigned_hours],
            "assigned_by": assigned_by,
            "status": status,
            "manager_approved_at": manager_approved_at,
            "worker_approved_at": worker_approved_at,
            "notes": notes,
            "assigned_at": now,
            "created_at": now,
        })
        return ShiftAssignment(**row)

    def get_by_id(self, assignment_id: str) -> Optional[ShiftAssignment]:
        row = self._rows.get(assignment_id)
        return ShiftAssignment(**row) if row else None

    def update(self, assignment_id: str, changes: dict[str, Any]) -> ShiftAssignment:
        data = dict(changes)
        if "assigned_hours" in data:
            data["assigned_hours"] = [h.model_dump() for h in data["assigned_hours"]]
        return ShiftAssignment(**self._rows.update(assignment_id, data))

    def delete(self, assignment_id: str) -> None:
        self._rows.delete(assignment_id)

    def find_active(
        self,
        shift_template_id: str,
        worker_id: str,
        date: str,
    ) -> Optional[ShiftAssignment]:
        rows = self._rows.find(
            _not_rejected,
            shift_template_id=shift_template_id,
            worker_id=worker_id,
            date=date,
        )
        return ShiftAssignment(**rows[0]) if rows else None

    def list_for_template(
        self,
        shift_template_id: str,
        date: Optional[str] = None,
        include_rejected: bool = False,
    ) -> list[ShiftAssignment]:
        filters: dict[str, Any] = {"shift_template_id": shift_template_id}
        if date is not None:
            filters["date"] = date
        predicate = None if include_rejected else _not_rejected
        return [ShiftAssignment(**row) for row in self._rows.find(predicate, **filters)]

    def list_for_date(self, date: str) -> list[ShiftAssignment]:
        return [ShiftAssignment(**row) for row in self._rows.find(_not_rejected, date=date)]

    def list_for_worker(
        self,
        worker_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[ShiftAssignment]:
        def in_range(row: dict[str, Any]) -> bool:
            if start_date is not None and row["date"] < start_date:
                return False
            if end_date is not None and row["date"] > end_date:
                return False
            return _not_rejected(row)

        rows = self._rows.find(in_range, worker_id=worker_id)
        rows.sort(key=lambda r: r["date"])
        return [ShiftAssignment(**row) for row in rows]

    def list_by_status(
        self,
        statuses: list[AssignmentStatus],
        worker_id: Optional[str] = None,
    ) -> list[ShiftAssignment]:
        wanted = set(statuses)
        filters = {"worker_id": worker_id} if worker_id is not None else {}
        rows = self._rows.find(lambda r: r["status"] in wanted, **filters)
        return [ShiftAssignment(**row) for row in rows]


def _not_rejected(row: dict[str, Any]) -> bool:
    return row["status"] != AssignmentStatus.REJECTED
