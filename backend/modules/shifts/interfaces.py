"""
Shifts module interfaces.
"""

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    CreateShiftTemplateRequest,
    DeleteTemplateResponse,
    ShiftTemplate,
    StaffingReport,
    UpdateShiftTemplateRequest,
)


@runtime_checkable
class IShiftTemplateRepository(Protocol):
    """Storage contract for shift templates."""

    def create(self, created_by: str, request: CreateShiftTemplateRequest) -> ShiftTemplate:
        ...

    def get_by_id(self, template_id: str) -> Optional[ShiftTemplate]:
        ...

    def get_many(self, template_ids: Iterable[str]) -> dict[str, ShiftTemplate]:
        """Return the templates that exist among ``template_ids``, keyed by ID."""
        ...

    def list_active(self) -> list[ShiftTemplate]:
        ...

    def update(self, template_id: str, changes: dict[str, Any]) -> ShiftTemplate:
        ...

    def delete(self, template_id: str) -> None:
        ...


@runtime_checkable
class IShiftTemplateService(Protocol):
    """
    Interface for shift template management.
    """

    async def list_templates(self, identity: Optional[AuthenticatedUser]) -> list[ShiftTemplate]:
        """All active templates."""
        ...

    async def get_template(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
    ) -> ShiftTemplate:
        ...

    async def templates_for_date(
        self,
        identity: Optional[AuthenticatedUser],
        date: str,
    ) -> list[ShiftTemplate]:
        """Active templates that recur on the weekday of ``date``."""
        ...

    async def create_template(
        self,
        identity: Optional[AuthenticatedUser],
        request: CreateShiftTemplateRequest,
    ) -> ShiftTemplate:
        ...

    async def update_template(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
        request: UpdateShiftTemplateRequest,
    ) -> ShiftTemplate:
        """
        Apply a partial update.

        When the open or close time changes, existing assignments are
        clipped to the new window.
        """
        ...

    async def delete_template(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
    ) -> DeleteTemplateResponse:
        """Delete a template, or only deactivate it if assignments reference it."""
        ...

    async def staffing_status(
        self,
        identity: Optional[AuthenticatedUser],
        template_id: str,
        date: str,
    ) -> StaffingReport:
        ...
