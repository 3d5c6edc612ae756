"""
Shift template repositories.

ShiftTemplateRepository talks to the Supabase ``shift_templates`` table;
staffing requirements are stored as a JSON array.
"""

from typing import Any, Iterable, Optional

from shared.repository import BaseRepository, InMemoryTable, to_column, utc_now

from .models import (
    CreateShiftTemplateRequest,
    ShiftTemplate,
    ShiftType,
    StaffingRequirement,
    Weekday,
)


class ShiftTemplateRepository(BaseRepository[ShiftTemplate]):
    """Supabase-backed shift template storage."""

    table_name = "shift_templates"

    def create(self, created_by: str, request: CreateShiftTemplateRequest) -> ShiftTemplate:
        data = {key: to_column(value) for key, value in request}
        data["created_by"] = created_by
        data["is_active"] = True
        result = self._table().insert(data).execute()
        return self._map_to_template(result.data[0])

    def get_by_id(self, template_id: str) -> Optional[ShiftTemplate]:
        row = self._first(self._table().select("*").eq("id", template_id).execute())
        return self._map_to_template(row) if row else None

    def get_many(self, template_ids: Iterable[str]) -> dict[str, ShiftTemplate]:
        ids = sorted(set(template_ids))
        if not ids:
            return {}
        result = self._table().select("*").in_("id", ids).execute()
        templates = [self._map_to_template(row) for row in result.data]
        return {t.id: t for t in templates}

    def list_active(self) -> list[ShiftTemplate]:
        result = self._table().select("*").eq("is_active", True).order("created_at").execute()
        return [self._map_to_template(row) for row in result.data]

    def update(self, template_id: str, changes: dict[str, Any]) -> ShiftTemplate:
        data = {key: to_column(value) for key, value in changes.items()}
        result = self._table().update(data).eq("id", template_id).execute()
        return self._map_to_template(result.data[0])

    def delete(self, template_id: str) -> None:
        self._table().delete().eq("id", template_id).execute()

    def _map_to_template(self, data: dict[str, Any]) -> ShiftTemplate:
        """Map database row to ShiftTemplate model."""
        return ShiftTemplate(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description"),
            type=ShiftType(data.get("type") or ShiftType.OPERATIONAL.value),
            open_time=data["open_time"],
            close_time=data["close_time"],
            recurring_days=[Weekday(d) for d in data.get("recurring_days") or []],
            hourly_requirements=[
                StaffingRequirement(**r) for r in data.get("hourly_requirements") or []
            ],
            is_active=data.get("is_active", True),
            created_by=str(data["created_by"]),
            color=data.get("color"),
            created_at=data["created_at"],
            updated_at=data.get("updated_at") or data["created_at"],
        )


class InMemoryShiftTemplateRepository:
    """Shift template storage held in process memory."""

    def __init__(self, table: Optional[InMemoryTable] = None) -> None:
        self._rows = table or InMemoryTable()

    def create(self, created_by: str, request: CreateShiftTemplateRequest) -> ShiftTemplate:
        now = utc_now()
        row = self._rows.insert({
            **request.model_dump(),
            "created_by": created_by,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        })
        return ShiftTemplate(**row)

    def get_by_id(self, template_id: str) -> Optional[ShiftTemplate]:
        row = self._rows.get(template_id)
        return ShiftTemplate(**row) if row else None

    def get_many(self, template_ids: Iterable[str]) -> dict[str, ShiftTemplate]:
        templates = {}
        for template_id in set(template_ids):
            template = self.get_by_id(template_id)
            if template is not None:
                templates[template_id] = template
        return templates

    def list_active(self) -> list[ShiftTemplate]:
        return [ShiftTemplate(**row) for row in self._rows.find(is_active=True)]

    def update(self, template_id: str, changes: dict[str, Any]) -> ShiftTemplate:
        data = dict(changes)
        if "hourly_requirements" in data:
            data["hourly_requirements"] = [r.model_dump() for r in data["hourly_requirements"]]
        return ShiftTemplate(**self._rows.update(template_id, data))

    def delete(self, template_id: str) -> None:
        self._rows.delete(template_id)
